from __future__ import annotations

from .repositories import ProductRepository, CategoryRepository
from .services import ProductService, CategoryService


def build_product_service() -> ProductService:
    return ProductService(
        products=ProductRepository(),
        categories=CategoryRepository(),
    )


def build_category_service() -> CategoryService:
    return CategoryService(categories=CategoryRepository())
