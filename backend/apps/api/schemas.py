from drf_spectacular.utils import inline_serializer
from rest_framework import serializers


class ErrorResponseSerializer(serializers.Serializer):
    # ``error`` is the message the admin UI shows as-is.
    error = serializers.CharField()
    code = serializers.CharField()
    status = serializers.IntegerField()
    details = serializers.JSONField(required=False)


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


def created_response(id_field: str) -> type[serializers.Serializer]:
    """Inline serializer for ``201`` bodies: a message plus the new identifier."""
    name = "".join(part.capitalize() for part in id_field.split("_"))
    return inline_serializer(
        name=f"{name}Created",
        fields={
            "message": serializers.CharField(),
            id_field: serializers.IntegerField(),
        },
    )
