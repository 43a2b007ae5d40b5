from decimal import Decimal

from rest_framework import serializers

from . import messages


def _required(message: str) -> dict:
    return {"required": message, "blank": message, "null": message}


class BlankAsNullMixin:
    """Treat blank strings for the listed optional fields as omitted values.

    HTML forms post ``""`` for empty inputs; those are stored as NULL rather
    than rejected or coerced to zero.
    """

    blank_as_null: tuple = ()

    def to_internal_value(self, data):
        if hasattr(data, "copy"):
            data = data.copy()
            for key in self.blank_as_null:
                value = data.get(key)
                if isinstance(value, str) and not value.strip():
                    data[key] = None
        return super().to_internal_value(data)


class CategorySerializer(serializers.Serializer):
    category_id = serializers.IntegerField(read_only=True)
    category_name = serializers.CharField()
    description = serializers.CharField(allow_null=True)

    def to_representation(self, instance):
        # Support dataclass DTO or dict
        if instance is None:
            return None
        if hasattr(instance, "__dataclass_fields__"):
            return {
                "category_id": getattr(instance, "category_id"),
                "category_name": getattr(instance, "category_name"),
                "description": getattr(instance, "description"),
            }
        return super().to_representation(instance)


class CategoryWriteSerializer(BlankAsNullMixin, serializers.Serializer):
    # Payload for creating/replacing categories; the id is server-assigned.
    blank_as_null = ("description",)

    category_name = serializers.CharField(
        max_length=255, error_messages=_required(messages.CATEGORY_NAME_REQUIRED)
    )
    description = serializers.CharField(
        required=False, allow_blank=True, allow_null=True
    )


class ProductReadSerializer(serializers.Serializer):
    # Matches ProductDTO shapes used for responses
    product_id = serializers.IntegerField()
    product_name = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    price = serializers.CharField(allow_null=True)
    category_id = serializers.IntegerField()
    category_name = serializers.CharField(allow_null=True)

    def to_representation(self, instance):
        if instance is None:
            return None
        # If it's already a dataclass DTO, extract attributes directly for speed
        if hasattr(instance, "__dataclass_fields__"):
            return {
                "product_id": getattr(instance, "product_id"),
                "product_name": getattr(instance, "product_name"),
                "description": getattr(instance, "description"),
                "price": getattr(instance, "price"),
                "category_id": getattr(instance, "category_id"),
                "category_name": getattr(instance, "category_name"),
            }
        return super().to_representation(instance)


class ProductWriteSerializer(BlankAsNullMixin, serializers.Serializer):
    # Payload for creating/replacing products; 'product_id' is server-assigned.
    blank_as_null = ("description", "price", "category_id")

    product_name = serializers.CharField(
        max_length=255, error_messages=_required(messages.PRODUCT_FIELDS_REQUIRED)
    )
    description = serializers.CharField(
        required=False, allow_blank=True, allow_null=True
    )
    price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal("0"),
        required=False,
        allow_null=True,
        error_messages={
            "invalid": messages.PRODUCT_INVALID_PRICE,
            "min_value": messages.PRODUCT_INVALID_PRICE,
            "max_digits": messages.PRODUCT_INVALID_PRICE,
            "max_decimal_places": messages.PRODUCT_INVALID_PRICE,
            "max_whole_digits": messages.PRODUCT_INVALID_PRICE,
            "max_string_length": messages.PRODUCT_INVALID_PRICE,
        },
    )
    category_id = serializers.IntegerField(
        error_messages={
            **_required(messages.PRODUCT_FIELDS_REQUIRED),
            "invalid": messages.PRODUCT_INVALID_CATEGORY,
        }
    )


class PaginationSerializer(serializers.Serializer):
    currentPage = serializers.IntegerField()
    pageSize = serializers.IntegerField()
    totalRecords = serializers.IntegerField()
    totalPages = serializers.IntegerField()
    hasNextPage = serializers.BooleanField()
    hasPreviousPage = serializers.BooleanField()


class ProductPageSerializer(serializers.Serializer):
    # Documents the paginated list body; responses are built by the paginator.
    products = ProductReadSerializer(many=True)
    pagination = PaginationSerializer()
