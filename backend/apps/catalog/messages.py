"""User-visible messages returned by the catalog API."""

CATEGORY_NAME_REQUIRED = "Category name is required"
CATEGORY_NOT_FOUND = "Category not found"
CATEGORY_HAS_PRODUCTS = "Cannot delete category. It has associated products."
CATEGORY_CREATED = "Category created successfully"
CATEGORY_UPDATED = "Category updated successfully"
CATEGORY_DELETED = "Category deleted successfully"

PRODUCT_FIELDS_REQUIRED = "Product name and category are required"
PRODUCT_INVALID_CATEGORY = "Invalid category"
PRODUCT_INVALID_PRICE = "Price must be a non-negative number"
PRODUCT_NOT_FOUND = "Product not found"
PRODUCT_CREATED = "Product created successfully"
PRODUCT_UPDATED = "Product updated successfully"
PRODUCT_DELETED = "Product deleted successfully"
