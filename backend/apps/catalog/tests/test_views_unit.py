import unittest
from unittest.mock import Mock, patch

from rest_framework.response import Response
from rest_framework.test import APIRequestFactory

from apps.api.exceptions import ApplicationError
from apps.catalog import messages
from apps.catalog.dtos import CategoryDTO, ProductDTO
from apps.catalog.pagination import ProductListPagination
from apps.catalog.serializers import ProductReadSerializer
from apps.catalog.views import (
    CategoryDetailView,
    CategoryListView,
    ProductDetailView,
    ProductListView,
)


def make_product_dto(product_id=1, name="Cola"):
    return ProductDTO(
        product_id=product_id,
        product_name=name,
        description=None,
        price="1.50",
        category_id=1,
        category_name="Beverages",
    )


def make_category_dto(category_id=1, name="Beverages"):
    return CategoryDTO(category_id=category_id, category_name=name, description=None)


class CatalogViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()

    def dispatch(self, request, view_cls, **kwargs):
        return view_cls.as_view()(request, **kwargs)

    def test_product_list_delegates_to_service(self):
        service_mock = Mock()
        service_mock.list_products_paginated.return_value = Response(
            {"products": [], "pagination": {}}
        )
        with patch.object(ProductListView, "service", service_mock):
            request = self.factory.get("/api/products", {"page": 2, "pageSize": 5})
            response = self.dispatch(request, ProductListView)
        self.assertEqual(response.status_code, 200)
        kwargs = service_mock.list_products_paginated.call_args.kwargs
        self.assertIs(kwargs["paginator_class"], ProductListPagination)
        self.assertIs(kwargs["serializer_class"], ProductReadSerializer)

    def test_product_create_returns_id(self):
        service_mock = Mock()
        service_mock.create_product.return_value = make_product_dto(product_id=9)
        with patch.object(ProductListView, "service", service_mock):
            request = self.factory.post(
                "/api/products",
                {"product_name": "Cola", "category_id": 1, "price": "1.50"},
                format="json",
            )
            response = self.dispatch(request, ProductListView)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(
            response.data, {"message": messages.PRODUCT_CREATED, "product_id": 9}
        )

    def test_product_create_missing_fields(self):
        service_mock = Mock()
        with patch.object(ProductListView, "service", service_mock):
            for payload in ({"category_id": 1}, {"product_name": "Cola"}, {}):
                request = self.factory.post("/api/products", payload, format="json")
                response = self.dispatch(request, ProductListView)
                self.assertEqual(response.status_code, 400)
                self.assertEqual(
                    response.data["error"], messages.PRODUCT_FIELDS_REQUIRED
                )
        service_mock.create_product.assert_not_called()

    def test_product_create_negative_price(self):
        service_mock = Mock()
        with patch.object(ProductListView, "service", service_mock):
            request = self.factory.post(
                "/api/products",
                {"product_name": "Cola", "category_id": 1, "price": "-1"},
                format="json",
            )
            response = self.dispatch(request, ProductListView)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], messages.PRODUCT_INVALID_PRICE)

    def test_product_create_invalid_category_from_service(self):
        service_mock = Mock()
        service_mock.create_product.side_effect = ApplicationError(
            "VALIDATION_ERROR", messages.PRODUCT_INVALID_CATEGORY
        )
        with patch.object(ProductListView, "service", service_mock):
            request = self.factory.post(
                "/api/products",
                {"product_name": "Cola", "category_id": 999},
                format="json",
            )
            response = self.dispatch(request, ProductListView)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.data["error"], messages.PRODUCT_INVALID_CATEGORY
        )

    def test_product_detail_not_found(self):
        service_mock = Mock()
        service_mock.get_product.return_value = None
        with patch.object(ProductDetailView, "service", service_mock):
            request = self.factory.get("/api/products/5")
            response = self.dispatch(request, ProductDetailView, product_id=5)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"], messages.PRODUCT_NOT_FOUND)

    def test_malformed_ids_are_not_found_without_service_call(self):
        product_service = Mock()
        category_service = Mock()
        with patch.object(ProductDetailView, "service", product_service), patch.object(
            CategoryDetailView, "service", category_service
        ):
            for raw in ("abc", "-1", "99999999999"):
                response = self.dispatch(
                    self.factory.delete(f"/api/products/{raw}"),
                    ProductDetailView,
                    product_id=raw,
                )
                self.assertEqual(response.status_code, 404)
                self.assertEqual(response.data["error"], messages.PRODUCT_NOT_FOUND)
                self.assertEqual(response.data["details"], {"id": raw})
            response = self.dispatch(
                self.factory.get("/api/categories/abc"),
                CategoryDetailView,
                category_id="abc",
            )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"], messages.CATEGORY_NOT_FOUND)
        product_service.delete_product.assert_not_called()
        category_service.get_category.assert_not_called()

    def test_string_ids_reach_service_as_ints(self):
        service_mock = Mock()
        service_mock.get_product.return_value = make_product_dto(product_id=12)
        with patch.object(ProductDetailView, "service", service_mock):
            response = self.dispatch(
                self.factory.get("/api/products/12"), ProductDetailView, product_id="12"
            )
        self.assertEqual(response.status_code, 200)
        service_mock.get_product.assert_called_once_with(12)

    def test_product_detail_ok(self):
        service_mock = Mock()
        service_mock.get_product.return_value = make_product_dto()
        with patch.object(ProductDetailView, "service", service_mock):
            request = self.factory.get("/api/products/1")
            response = self.dispatch(request, ProductDetailView, product_id=1)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["price"], "1.50")
        self.assertEqual(response.data["category_name"], "Beverages")

    def test_product_update_missing(self):
        service_mock = Mock()
        service_mock.update_product.return_value = None
        with patch.object(ProductDetailView, "service", service_mock):
            request = self.factory.put(
                "/api/products/77",
                {"product_name": "Cola", "category_id": 1},
                format="json",
            )
            response = self.dispatch(request, ProductDetailView, product_id=77)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"], messages.PRODUCT_NOT_FOUND)

    def test_product_update_ok(self):
        service_mock = Mock()
        service_mock.update_product.return_value = make_product_dto()
        with patch.object(ProductDetailView, "service", service_mock):
            request = self.factory.put(
                "/api/products/1",
                {"product_name": "Cola", "category_id": 1},
                format="json",
            )
            response = self.dispatch(request, ProductDetailView, product_id=1)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {"message": messages.PRODUCT_UPDATED})

    def test_product_delete(self):
        service_mock = Mock()
        service_mock.delete_product.side_effect = [True, False]
        with patch.object(ProductDetailView, "service", service_mock):
            first = self.dispatch(
                self.factory.delete("/api/products/1"), ProductDetailView, product_id=1
            )
            second = self.dispatch(
                self.factory.delete("/api/products/1"), ProductDetailView, product_id=1
            )
        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.data, {"message": messages.PRODUCT_DELETED})
        self.assertEqual(second.status_code, 404)

    def test_category_list(self):
        service_mock = Mock()
        service_mock.list_categories.return_value = [
            make_category_dto(2, "B"),
            make_category_dto(1, "A"),
        ]
        with patch.object(CategoryListView, "service", service_mock):
            response = self.dispatch(self.factory.get("/api/categories"), CategoryListView)
        self.assertEqual(response.status_code, 200)
        self.assertEqual([c["category_id"] for c in response.data], [2, 1])

    def test_category_create_requires_name(self):
        service_mock = Mock()
        with patch.object(CategoryListView, "service", service_mock):
            request = self.factory.post(
                "/api/categories", {"description": "x"}, format="json"
            )
            response = self.dispatch(request, CategoryListView)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.data["error"], messages.CATEGORY_NAME_REQUIRED
        )
        service_mock.create_category.assert_not_called()

    def test_category_create_returns_id(self):
        service_mock = Mock()
        service_mock.create_category.return_value = make_category_dto(3)
        with patch.object(CategoryListView, "service", service_mock):
            request = self.factory.post(
                "/api/categories", {"category_name": "Beverages"}, format="json"
            )
            response = self.dispatch(request, CategoryListView)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(
            response.data, {"message": messages.CATEGORY_CREATED, "category_id": 3}
        )

    def test_category_update_missing(self):
        service_mock = Mock()
        service_mock.update_category.return_value = None
        with patch.object(CategoryDetailView, "service", service_mock):
            request = self.factory.put(
                "/api/categories/8", {"category_name": "X"}, format="json"
            )
            response = self.dispatch(request, CategoryDetailView, category_id=8)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(
            response.data["error"], messages.CATEGORY_NOT_FOUND
        )

    def test_category_delete_conflict(self):
        service_mock = Mock()
        service_mock.delete_category.side_effect = ApplicationError(
            "CONFLICT",
            messages.CATEGORY_HAS_PRODUCTS,
            details={"category_id": 1, "productCount": 3},
        )
        with patch.object(CategoryDetailView, "service", service_mock):
            response = self.dispatch(
                self.factory.delete("/api/categories/1"),
                CategoryDetailView,
                category_id=1,
            )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "CONFLICT")
        self.assertEqual(
            response.data["error"], messages.CATEGORY_HAS_PRODUCTS
        )

    def test_category_delete_ok(self):
        service_mock = Mock()
        service_mock.delete_category.return_value = True
        with patch.object(CategoryDetailView, "service", service_mock):
            response = self.dispatch(
                self.factory.delete("/api/categories/1"),
                CategoryDetailView,
                category_id=1,
            )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {"message": messages.CATEGORY_DELETED})
