from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from .container import build_product_service, build_category_service
from .serializers import (
    ProductPageSerializer,
    ProductReadSerializer,
    ProductWriteSerializer,
    CategorySerializer,
    CategoryWriteSerializer,
)
from . import messages
from apps.api.exceptions import ApplicationError
from apps.api.utils import error_response, first_error_message, parse_identifier
from .pagination import ProductListPagination
from apps.common import get_logger
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse
from apps.api.schemas import (
    ErrorResponseSerializer,
    MessageResponseSerializer,
    created_response,
)

logger = get_logger(__name__).bind(component="catalog", layer="view")

ERROR_RESPONSE = OpenApiResponse(response=ErrorResponseSerializer)


def _invalid_payload(serializer, fallback: str):
    return error_response(
        "VALIDATION_ERROR",
        first_error_message(serializer.errors, fallback),
        serializer.errors,
    )


class IdentifierLookupMixin:
    """Convert the URL id to an int before the handler runs.

    Ids that cannot name a row (non-numeric, negative, out of range) get the
    resource's JSON 404 without touching the store.
    """

    lookup_url_kwarg = None
    not_found_message = None

    def dispatch(self, request, *args, **kwargs):
        self.raw_identifier = kwargs.get(self.lookup_url_kwarg)
        kwargs[self.lookup_url_kwarg] = parse_identifier(self.raw_identifier)
        return super().dispatch(request, *args, **kwargs)

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        if kwargs.get(self.lookup_url_kwarg) is None:
            raise ApplicationError(
                "NOT_FOUND",
                self.not_found_message,
                details={"id": str(self.raw_identifier)},
            )


@extend_schema(tags=["Catalog"])
class CategoryListView(APIView):
    service = build_category_service()
    log = logger.bind(view="CategoryListView")

    @extend_schema(
        operation_id="categories_list",
        summary="List categories",
        description="All categories, newest first.",
        responses={200: CategorySerializer(many=True)},
    )
    def get(self, request):
        self.log.debug("Listing categories")
        data = self.service.list_categories()
        return Response(CategorySerializer(data, many=True).data)

    @extend_schema(
        summary="Create category",
        request=CategoryWriteSerializer,
        responses={201: created_response("category_id"), 400: ERROR_RESPONSE},
    )
    def post(self, request):
        serializer = CategoryWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return _invalid_payload(serializer, messages.CATEGORY_NAME_REQUIRED)
        dto = self.service.create_category(serializer.validated_data)
        self.log.info("Category created via API", category_id=dto.category_id)
        return Response(
            {"message": messages.CATEGORY_CREATED, "category_id": dto.category_id},
            status=status.HTTP_201_CREATED,
        )


@extend_schema(tags=["Catalog"])
class CategoryDetailView(IdentifierLookupMixin, APIView):
    lookup_url_kwarg = "category_id"
    not_found_message = messages.CATEGORY_NOT_FOUND
    service = build_category_service()
    log = logger.bind(view="CategoryDetailView")

    @extend_schema(
        operation_id="categories_retrieve",
        summary="Get category",
        parameters=[OpenApiParameter("category_id", int, OpenApiParameter.PATH)],
        responses={200: CategorySerializer, 404: ERROR_RESPONSE},
    )
    def get(self, request, category_id: int):
        self.log.debug("Fetching category detail", category_id=category_id)
        dto = self.service.get_category(category_id)
        if not dto:
            return error_response(
                "NOT_FOUND", messages.CATEGORY_NOT_FOUND, {"id": str(category_id)}
            )
        return Response(CategorySerializer(dto).data)

    @extend_schema(
        summary="Replace category",
        request=CategoryWriteSerializer,
        responses={
            200: MessageResponseSerializer,
            400: ERROR_RESPONSE,
            404: ERROR_RESPONSE,
        },
    )
    def put(self, request, category_id: int):
        serializer = CategoryWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return _invalid_payload(serializer, messages.CATEGORY_NAME_REQUIRED)
        self.log.info("Replacing category", category_id=category_id)
        dto = self.service.update_category(category_id, serializer.validated_data)
        if not dto:
            return error_response(
                "NOT_FOUND", messages.CATEGORY_NOT_FOUND, {"id": str(category_id)}
            )
        return Response({"message": messages.CATEGORY_UPDATED})

    @extend_schema(
        summary="Delete category",
        description="Rejected with 400 while any product still references the category.",
        responses={
            200: MessageResponseSerializer,
            400: ERROR_RESPONSE,
            404: ERROR_RESPONSE,
        },
    )
    def delete(self, request, category_id: int):
        self.log.info("Deleting category", category_id=category_id)
        if not self.service.delete_category(category_id):
            return error_response(
                "NOT_FOUND", messages.CATEGORY_NOT_FOUND, {"id": str(category_id)}
            )
        return Response({"message": messages.CATEGORY_DELETED})


@extend_schema(tags=["Catalog"])
class ProductListView(APIView):
    service = build_product_service()
    log = logger.bind(view="ProductListView")
    pagination_class = ProductListPagination

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        description="Newest first. Pagination via ?page and ?pageSize; pages past the end are empty.",
        parameters=[
            OpenApiParameter("page", int, required=False, description="1-based page number"),
            OpenApiParameter("pageSize", int, required=False, description="Items per page"),
        ],
        responses={200: ProductPageSerializer},
    )
    def get(self, request):
        self.log.debug(
            "Handling product list request",
            page=request.query_params.get("page"),
            page_size=request.query_params.get("pageSize"),
        )
        return self.service.list_products_paginated(
            request,
            paginator_class=self.pagination_class,
            serializer_class=ProductReadSerializer,
            view=self,
        )

    @extend_schema(
        summary="Create product",
        request=ProductWriteSerializer,
        responses={201: created_response("product_id"), 400: ERROR_RESPONSE},
    )
    def post(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return _invalid_payload(serializer, messages.PRODUCT_FIELDS_REQUIRED)
        dto = self.service.create_product(serializer.validated_data)
        self.log.info("Product created via API", product_id=dto.product_id)
        return Response(
            {"message": messages.PRODUCT_CREATED, "product_id": dto.product_id},
            status=status.HTTP_201_CREATED,
        )


@extend_schema(tags=["Catalog"])
class ProductDetailView(IdentifierLookupMixin, APIView):
    lookup_url_kwarg = "product_id"
    not_found_message = messages.PRODUCT_NOT_FOUND
    service = build_product_service()
    log = logger.bind(view="ProductDetailView")

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={200: ProductReadSerializer, 404: ERROR_RESPONSE},
    )
    def get(self, request, product_id: int):
        self.log.debug("Fetching product detail", product_id=product_id)
        dto = self.service.get_product(product_id)
        if not dto:
            return error_response(
                "NOT_FOUND", messages.PRODUCT_NOT_FOUND, {"id": str(product_id)}
            )
        return Response(ProductReadSerializer(dto).data)

    @extend_schema(
        summary="Replace product",
        request=ProductWriteSerializer,
        responses={
            200: MessageResponseSerializer,
            400: ERROR_RESPONSE,
            404: ERROR_RESPONSE,
        },
    )
    def put(self, request, product_id: int):
        serializer = ProductWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return _invalid_payload(serializer, messages.PRODUCT_FIELDS_REQUIRED)
        self.log.info("Replacing product", product_id=product_id)
        dto = self.service.update_product(product_id, serializer.validated_data)
        if not dto:
            self.log.warning("Product replace failed: not found", product_id=product_id)
            return error_response(
                "NOT_FOUND", messages.PRODUCT_NOT_FOUND, {"id": str(product_id)}
            )
        return Response({"message": messages.PRODUCT_UPDATED})

    @extend_schema(
        summary="Delete product",
        responses={200: MessageResponseSerializer, 404: ERROR_RESPONSE},
    )
    def delete(self, request, product_id: int):
        self.log.info("Deleting product", product_id=product_id)
        if not self.service.delete_product(product_id):
            return error_response(
                "NOT_FOUND", messages.PRODUCT_NOT_FOUND, {"id": str(product_id)}
            )
        return Response({"message": messages.PRODUCT_DELETED})
