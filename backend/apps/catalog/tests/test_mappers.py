import unittest
from decimal import Decimal

from apps.catalog.dtos import PageMetaDTO
from apps.catalog.mappers import (
    CategoryMapper,
    PageMetaMapper,
    ProductMapper,
    format_price,
)


class StubCategory:
    def __init__(self, category_id: int, name: str, description=None):
        self.category_id = category_id
        self.category_name = name
        self.description = description


class StubProduct:
    def __init__(self, product_id, name, price, category, description=None):
        self.product_id = product_id
        self.product_name = name
        self.price = price
        self.description = description
        self.category = category
        self.category_id = category.category_id


class FormatPriceTests(unittest.TestCase):
    def test_two_decimals(self):
        self.assertEqual(format_price(Decimal("1.5")), "1.50")
        self.assertEqual(format_price(Decimal("0")), "0.00")
        self.assertEqual(format_price(3), "3.00")

    def test_none(self):
        self.assertIsNone(format_price(None))


class CategoryMapperTests(unittest.TestCase):
    def test_category_mapper_basic(self):
        dto = CategoryMapper.to_dto(StubCategory(1, "Beverages", "Drinks"))
        self.assertEqual(dto.category_id, 1)
        self.assertEqual(dto.category_name, "Beverages")
        self.assertEqual(dto.description, "Drinks")

    def test_category_many(self):
        dtos = CategoryMapper.many_to_dto([StubCategory(1, "A"), StubCategory(2, "B")])
        self.assertEqual([d.category_id for d in dtos], [1, 2])


class ProductMapperTests(unittest.TestCase):
    def test_uses_related_category_name(self):
        product = StubProduct(5, "Cola", Decimal("1.5"), StubCategory(2, "Beverages"))
        dto = ProductMapper.to_dto(product)
        self.assertEqual(dto.product_id, 5)
        self.assertEqual(dto.price, "1.50")
        self.assertEqual(dto.category_id, 2)
        self.assertEqual(dto.category_name, "Beverages")

    def test_prefers_annotated_category_name(self):
        product = StubProduct(5, "Cola", None, StubCategory(2, "Stale"))
        product.category_name = "Beverages"
        dto = ProductMapper.to_dto(product)
        self.assertEqual(dto.category_name, "Beverages")
        self.assertIsNone(dto.price)


class PageMetaMapperTests(unittest.TestCase):
    def test_camel_case_keys(self):
        meta = PageMetaDTO(2, 10, 12, 2, False, True)
        self.assertEqual(
            PageMetaMapper.to_dict(meta),
            {
                "currentPage": 2,
                "pageSize": 10,
                "totalRecords": 12,
                "totalPages": 2,
                "hasNextPage": False,
                "hasPreviousPage": True,
            },
        )
