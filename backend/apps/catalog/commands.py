from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional


def _optional_text(value: Any) -> Optional[str]:
    # Blank input is stored as NULL, never as an empty string.
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_price(value: Any) -> Optional[Decimal]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return value if isinstance(value, Decimal) else Decimal(str(value).strip())


def _optional_id(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


# Category Commands
@dataclass
class CategoryWriteCommand:
    category_name: str
    description: Optional[str] = None

    @staticmethod
    def from_raw(payload: Dict[str, Any]):
        data = dict(payload or {})
        # ignore id if present
        data.pop("category_id", None)
        return CategoryWriteCommand(
            category_name=str(data.get("category_name") or "").strip(),
            description=_optional_text(data.get("description")),
        )

    def is_complete(self) -> bool:
        return bool(self.category_name)


# Product Commands
@dataclass
class ProductWriteCommand:
    product_name: str
    category_id: Optional[int]
    description: Optional[str] = None
    price: Optional[Decimal] = None

    @staticmethod
    def from_raw(payload: Dict[str, Any]):
        data = dict(payload or {})
        data.pop("product_id", None)
        return ProductWriteCommand(
            product_name=str(data.get("product_name") or "").strip(),
            category_id=_optional_id(data.get("category_id")),
            description=_optional_text(data.get("description")),
            price=_optional_price(data.get("price")),
        )

    def is_complete(self) -> bool:
        return bool(self.product_name) and self.category_id is not None

    def as_fields(self) -> Dict[str, Any]:
        return {
            "product_name": self.product_name,
            "description": self.description,
            "price": self.price,
            "category_id": self.category_id,
        }
