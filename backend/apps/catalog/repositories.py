from typing import Optional, Tuple

from django.db import transaction
from django.db.models import F, ProtectedError

from apps.common.repository import GenericRepository
from .models import Category, Product


class CategoryRepository(GenericRepository[Category]):
    ordering = ("-category_id",)

    def __init__(self):
        super().__init__(Category)

    def list_newest_first(self):
        return self.queryset()

    def product_count(self, category_id: int) -> int:
        return Product.objects.filter(category_id=category_id).count()

    def delete_unless_referenced(self, category_id: int) -> Tuple[bool, int]:
        """
        Delete the category only when no product points at it.

        Returns ``(deleted, product_count)``. The count check and the delete
        share one transaction with the category row locked, so a concurrent
        delete cannot slip between them. A product inserted concurrently is
        still caught by the PROTECT foreign key.
        """
        with transaction.atomic():
            locked = list(
                self.model.objects.select_for_update().filter(category_id=category_id)
            )
            count = self.product_count(category_id)
            if count:
                return False, count
            if not locked:
                return False, 0
            try:
                deleted = self.delete_where(category_id=category_id)
            except ProtectedError as exc:
                return False, len(exc.protected_objects)
        return deleted > 0, 0


class ProductRepository(GenericRepository[Product]):
    ordering = ("-product_id",)

    def __init__(self):
        super().__init__(Product)

    def list_with_category(self):
        """Newest first, joined with the owning category's name."""
        return self.queryset().annotate(category_name=F("category__category_name"))

    def get_with_category(self, product_id: int) -> Optional[Product]:
        return self.list_with_category().filter(product_id=product_id).first()
