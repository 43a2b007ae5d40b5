from typing import Optional

from django.conf import settings
from django.utils.inspect import method_has_no_args
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from .dtos import PageMetaDTO
from .mappers import PageMetaMapper


def build_page_meta(page: int, page_size: int, total_records: int) -> PageMetaDTO:
    """Derive pagination metadata for a windowed list.

    Pages past the end are reported as-is (no clamping): the caller gets an
    empty window with ``has_next_page`` false and the real totals.
    """
    total_pages = -(-total_records // page_size) if page_size else 0
    return PageMetaDTO(
        current_page=page,
        page_size=page_size,
        total_records=total_records,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_previous_page=page > 1,
    )


def parse_positive_int(raw, default: int, cutoff: Optional[int] = None) -> int:
    """Parse a query value as a strictly positive int, else ``default``."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    if value <= 0:
        return default
    return min(value, cutoff) if cutoff else value


def _count(queryset) -> int:
    c = getattr(queryset, "count", None)
    if callable(c) and method_has_no_args(c):
        return c()
    return len(queryset)


class ProductListPagination(PageNumberPagination):
    """Offset window over ``?page=`` and ``?pageSize=``.

    Unlike DRF's default, an out-of-range page is not a 404 and the response
    body is ``{"products": [...], "pagination": {...}}``.
    """

    page_size = settings.CATALOG_DEFAULT_PAGE_SIZE
    page_query_param = "page"
    # Allow clients to override page size with `?pageSize=`
    page_size_query_param = "pageSize"
    max_page_size = settings.CATALOG_MAX_PAGE_SIZE
    results_key = "products"

    meta: Optional[PageMetaDTO] = None

    def get_page_number(self, request, paginator=None) -> int:
        return parse_positive_int(request.query_params.get(self.page_query_param), 1)

    def get_page_size(self, request) -> int:
        return parse_positive_int(
            request.query_params.get(self.page_size_query_param),
            self.page_size,
            cutoff=self.max_page_size,
        )

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        page = self.get_page_number(request)
        size = self.get_page_size(request)
        offset = (page - 1) * size
        total = _count(queryset)
        self.meta = build_page_meta(page, size, total)
        if offset >= total:
            return []
        # Bounded by the row count so oversized pages never reach the store.
        return list(queryset[offset:min(offset + size, total)])

    def get_paginated_response(self, data):
        return Response(
            {
                self.results_key: data,
                "pagination": PageMetaMapper.to_dict(self.meta),
            }
        )

