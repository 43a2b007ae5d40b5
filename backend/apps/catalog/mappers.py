from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional

from .dtos import ProductDTO, CategoryDTO, PageMetaDTO
from .models import Product, Category

_CENTS = Decimal("0.01")


def format_price(value) -> Optional[str]:
    """Render a stored price with exactly two decimals (``1.5`` -> ``"1.50"``)."""
    if value is None:
        return None
    try:
        return str(Decimal(str(value)).quantize(_CENTS))
    except InvalidOperation:
        return str(value)


class CategoryMapper:
    @staticmethod
    def to_dto(cat: Category) -> CategoryDTO:
        return CategoryDTO(
            category_id=cat.category_id,
            category_name=cat.category_name,
            description=cat.description,
        )

    @staticmethod
    def many_to_dto(categories: Iterable[Category]) -> List[CategoryDTO]:
        return [CategoryMapper.to_dto(c) for c in categories]


class ProductMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        # Rows from the list query carry ``category_name`` as an annotation;
        # single instances fall back to the related object.
        category_name = getattr(product, "category_name", None)
        if category_name is None:
            category = getattr(product, "category", None)
            category_name = getattr(category, "category_name", None)
        return ProductDTO(
            product_id=product.product_id,
            product_name=product.product_name,
            description=product.description,
            price=format_price(product.price),
            category_id=product.category_id,
            category_name=category_name,
        )

    @staticmethod
    def many_to_dto(products: Iterable[Product]) -> List[ProductDTO]:
        return [ProductMapper.to_dto(p) for p in products]


class PageMetaMapper:
    @staticmethod
    def to_dict(meta: PageMetaDTO) -> dict:
        return {
            "currentPage": meta.current_page,
            "pageSize": meta.page_size,
            "totalRecords": meta.total_records,
            "totalPages": meta.total_pages,
            "hasNextPage": meta.has_next_page,
            "hasPreviousPage": meta.has_previous_page,
        }
