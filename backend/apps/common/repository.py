from typing import Type, TypeVar, Generic, Iterable, Optional, Tuple
from django.db import models

T = TypeVar('T', bound=models.Model)


class GenericRepository(Generic[T]):
    """Thin ORM wrapper shared by the app repositories."""

    ordering: Tuple[str, ...] = ()

    def __init__(self, model: Type[T]):
        self.model = model

    def queryset(self) -> models.QuerySet:
        qs = self.model.objects.all()
        return qs.order_by(*self.ordering) if self.ordering else qs

    def get(self, **filters) -> Optional[T]:
        return self.queryset().filter(**filters).first()

    def list(self, **filters) -> Iterable[T]:
        return self.queryset().filter(**filters)

    def exists(self, **filters) -> bool:
        return self.model.objects.filter(**filters).exists()

    def count(self, **filters) -> int:
        return self.model.objects.filter(**filters).count()

    def create(self, **data) -> T:
        return self.model.objects.create(**data)

    def update_where(self, filters: dict, **data) -> int:
        """Update matching rows in one statement; returns the affected row count."""
        return self.model.objects.filter(**filters).update(**data)

    def delete_where(self, **filters) -> int:
        deleted, _ = self.model.objects.filter(**filters).delete()
        return deleted
