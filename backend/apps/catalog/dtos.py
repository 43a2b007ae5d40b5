from dataclasses import dataclass
from typing import Optional


@dataclass
class CategoryDTO:
    category_id: int
    category_name: str
    description: Optional[str]


@dataclass
class ProductDTO:
    product_id: int
    product_name: str
    description: Optional[str]
    price: Optional[str]
    category_id: int
    category_name: Optional[str]


@dataclass
class PageMetaDTO:
    current_page: int
    page_size: int
    total_records: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool


"""DTO dataclasses only. Mapping logic lives in mappers.py."""
