from django.urls import path, register_converter
from apps.catalog.views import (
    ProductListView,
    ProductDetailView,
    CategoryListView,
    CategoryDetailView,
)


class IdentifierConverter:
    """Accept any single segment; the views answer malformed ids with JSON 404s."""

    regex = r"[^/]+"

    def to_python(self, value):
        return value

    def to_url(self, value):
        return str(value)


register_converter(IdentifierConverter, "ident")


def _with_optional_slash(route, view, name):
    # The admin UI calls /api/products without a trailing slash; accept both.
    return [path(route, view, name=name), path(f"{route}/", view)]


urlpatterns = [
    *_with_optional_slash(
        "products", ProductListView.as_view(), "api-products-list"
    ),
    *_with_optional_slash(
        "products/<ident:product_id>",
        ProductDetailView.as_view(),
        "api-products-detail",
    ),
    *_with_optional_slash(
        "categories", CategoryListView.as_view(), "api-categories-list"
    ),
    *_with_optional_slash(
        "categories/<ident:category_id>",
        CategoryDetailView.as_view(),
        "api-categories-detail",
    ),
]
