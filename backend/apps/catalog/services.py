from __future__ import annotations

from typing import Any, Dict, List, Optional, Type, Union

from rest_framework.pagination import BasePagination
from rest_framework.response import Response

from apps.api.exceptions import ApplicationError
from apps.common import get_logger
from . import messages
from .commands import CategoryWriteCommand, ProductWriteCommand
from .dtos import CategoryDTO, ProductDTO
from .mappers import CategoryMapper, ProductMapper
from .protocols import CategoryRepositoryProtocol, ProductRepositoryProtocol

logger = get_logger(__name__).bind(component="catalog", layer="service")


class CategoryService:
    def __init__(self, categories: CategoryRepositoryProtocol):
        self.categories = categories
        self.logger = logger.bind(service="CategoryService")

    def list_categories(self) -> List[CategoryDTO]:
        self.logger.debug("Listing categories")
        return CategoryMapper.many_to_dto(self.categories.list_newest_first())

    def get_category(self, category_id: int) -> Optional[CategoryDTO]:
        self.logger.debug("Fetching category", category_id=category_id)
        c = self.categories.get(category_id=category_id)
        if not c:
            self.logger.info("Category not found", category_id=category_id)
        return CategoryMapper.to_dto(c) if c else None

    def create_category(
        self, data: Union[Dict[str, Any], CategoryWriteCommand]
    ) -> CategoryDTO:
        cmd = _category_command(data)
        self.logger.info("Creating category", category_name=cmd.category_name)
        category = self.categories.create(
            category_name=cmd.category_name, description=cmd.description
        )
        self.logger.info("Category created", category_id=category.category_id)
        return CategoryMapper.to_dto(category)

    def update_category(
        self, category_id: int, data: Union[Dict[str, Any], CategoryWriteCommand]
    ) -> Optional[CategoryDTO]:
        """Replace name and description; ``None`` when the category is missing."""
        cmd = _category_command(data)
        self.logger.info("Updating category", category_id=category_id)
        updated = self.categories.update_where(
            {"category_id": category_id},
            category_name=cmd.category_name,
            description=cmd.description,
        )
        if not updated:
            self.logger.warning(
                "Category update failed: not found", category_id=category_id
            )
            return None
        self.logger.info("Category updated", category_id=category_id)
        return CategoryDTO(
            category_id=category_id,
            category_name=cmd.category_name,
            description=cmd.description,
        )

    def delete_category(self, category_id: int) -> bool:
        """
        Delete a category that no product references.

        Returns ``False`` when the category does not exist and raises a
        ``CONFLICT`` application error when products still point at it.
        """
        self.logger.info("Deleting category", category_id=category_id)
        deleted, product_count = self.categories.delete_unless_referenced(category_id)
        if product_count:
            self.logger.warning(
                "Category deletion blocked by products",
                category_id=category_id,
                product_count=product_count,
            )
            raise ApplicationError(
                "CONFLICT",
                messages.CATEGORY_HAS_PRODUCTS,
                details={"category_id": category_id, "productCount": product_count},
            )
        if not deleted:
            self.logger.warning(
                "Category deletion failed: not found", category_id=category_id
            )
            return False
        self.logger.info("Category deleted", category_id=category_id)
        return True


class ProductService:
    def __init__(
        self,
        products: ProductRepositoryProtocol,
        categories: CategoryRepositoryProtocol,
    ):
        self.products = products
        self.categories = categories
        self.logger = logger.bind(service="ProductService")

    def products_queryset(self):
        """Newest-first products joined with their category name."""
        return self.products.list_with_category()

    def list_products_paginated(
        self,
        request,
        *,
        paginator_class: Optional[Type[BasePagination]] = None,
        serializer_class=None,
        view=None,
    ) -> Response:
        if paginator_class is None:
            from .pagination import ProductListPagination

            paginator_class = ProductListPagination
        if serializer_class is None:
            from .serializers import ProductReadSerializer  # Avoid circular import

            serializer_class = ProductReadSerializer
        paginator = paginator_class()
        page = paginator.paginate_queryset(self.products_queryset(), request, view=view)
        meta = getattr(paginator, "meta", None)
        self.logger.debug(
            "Listing products",
            page=getattr(meta, "current_page", None),
            page_size=getattr(meta, "page_size", None),
            total=getattr(meta, "total_records", None),
        )
        dtos = ProductMapper.many_to_dto(page)
        serializer = serializer_class(dtos, many=True)
        return paginator.get_paginated_response(serializer.data)

    def get_product(self, product_id: int) -> Optional[ProductDTO]:
        self.logger.debug("Fetching product", product_id=product_id)
        p = self.products.get_with_category(product_id)
        if not p:
            self.logger.info("Product not found", product_id=product_id)
        return ProductMapper.to_dto(p) if p else None

    def create_product(
        self, data: Union[Dict[str, Any], ProductWriteCommand]
    ) -> ProductDTO:
        cmd = _product_command(data)
        self._ensure_category(cmd.category_id)
        self.logger.info(
            "Creating product",
            product_name=cmd.product_name,
            category_id=cmd.category_id,
        )
        product = self.products.create(**cmd.as_fields())
        self.logger.info("Product created", product_id=product.product_id)
        return ProductMapper.to_dto(product)

    def update_product(
        self, product_id: int, data: Union[Dict[str, Any], ProductWriteCommand]
    ) -> Optional[ProductDTO]:
        """Full replace; ``None`` when the product is missing.

        The category reference is checked on update as well as on create, so
        a product can never be pointed at a category that does not exist.
        """
        cmd = _product_command(data)
        self.logger.info("Updating product", product_id=product_id)
        if not self.products.exists(product_id=product_id):
            self.logger.warning(
                "Product update failed: not found", product_id=product_id
            )
            return None
        self._ensure_category(cmd.category_id)
        updated = self.products.update_where(
            {"product_id": product_id}, **cmd.as_fields()
        )
        if not updated:
            # Deleted between the existence check and the update.
            self.logger.warning(
                "Product update failed: not found", product_id=product_id
            )
            return None
        self.logger.info("Product updated", product_id=product_id)
        return self.get_product(product_id)

    def delete_product(self, product_id: int) -> bool:
        self.logger.info("Deleting product", product_id=product_id)
        deleted = self.products.delete_where(product_id=product_id)
        if not deleted:
            self.logger.warning(
                "Product deletion failed: not found", product_id=product_id
            )
            return False
        self.logger.info("Product deleted", product_id=product_id)
        return True

    def _ensure_category(self, category_id: int) -> None:
        if not self.categories.exists(category_id=category_id):
            self.logger.warning(
                "Rejecting product with unknown category", category_id=category_id
            )
            raise ApplicationError(
                "VALIDATION_ERROR",
                messages.PRODUCT_INVALID_CATEGORY,
                details={"category_id": category_id},
            )


def _category_command(
    data: Union[Dict[str, Any], CategoryWriteCommand]
) -> CategoryWriteCommand:
    cmd = (
        data
        if isinstance(data, CategoryWriteCommand)
        else CategoryWriteCommand.from_raw(data)
    )
    if not cmd.is_complete():
        raise ApplicationError("VALIDATION_ERROR", messages.CATEGORY_NAME_REQUIRED)
    return cmd


def _product_command(
    data: Union[Dict[str, Any], ProductWriteCommand]
) -> ProductWriteCommand:
    cmd = (
        data
        if isinstance(data, ProductWriteCommand)
        else ProductWriteCommand.from_raw(data)
    )
    if not cmd.is_complete():
        raise ApplicationError("VALIDATION_ERROR", messages.PRODUCT_FIELDS_REQUIRED)
    if cmd.price is not None and cmd.price < 0:
        raise ApplicationError("VALIDATION_ERROR", messages.PRODUCT_INVALID_PRICE)
    return cmd
