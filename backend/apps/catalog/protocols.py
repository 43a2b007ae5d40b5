from __future__ import annotations

from typing import Iterable, Optional, Protocol, Tuple

from .models import Category, Product


class CategoryRepositoryProtocol(Protocol):
    def list_newest_first(self) -> Iterable[Category]:
        ...

    def get(self, **filters) -> Optional[Category]:
        ...

    def exists(self, **filters) -> bool:
        ...

    def create(self, **data) -> Category:
        ...

    def update_where(self, filters: dict, **data) -> int:
        ...

    def delete_unless_referenced(self, category_id: int) -> Tuple[bool, int]:
        ...


class ProductRepositoryProtocol(Protocol):
    def list_with_category(self) -> Iterable[Product]:
        ...

    def get_with_category(self, product_id: int) -> Optional[Product]:
        ...

    def exists(self, **filters) -> bool:
        ...

    def create(self, **data) -> Product:
        ...

    def update_where(self, filters: dict, **data) -> int:
        ...

    def delete_where(self, **filters) -> int:
        ...
