from collections.abc import Mapping
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.serializers import as_serializer_error

DEFAULT_ERROR_STATUS = status.HTTP_400_BAD_REQUEST

ERROR_STATUS_MAP = {
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    # Blocked deletes are reported as bad requests, not 409.
    "CONFLICT": status.HTTP_400_BAD_REQUEST,
    "METHOD_NOT_ALLOWED": status.HTTP_405_METHOD_NOT_ALLOWED,
    "UNSUPPORTED_MEDIA_TYPE": status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    "SERVER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "SERVICE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _normalize_details(details: Any) -> Any:
    if isinstance(details, ValidationError):
        return as_serializer_error(details)
    if isinstance(details, Mapping):
        return dict(details)
    if isinstance(details, Exception):
        return {"type": details.__class__.__name__}
    return details


MAX_IDENTIFIER = 2147483647


def parse_identifier(value: Any) -> Optional[int]:
    """Return ``value`` as a database id, or ``None`` when it cannot be one."""
    text = str(value)
    if not (text.isascii() and text.isdigit()):
        return None
    number = int(text)
    return number if number <= MAX_IDENTIFIER else None


def first_error_message(errors: Any, fallback: str) -> str:
    """
    Pick the first human readable message out of serializer ``errors``.

    Handles the nested dict/list shapes DRF produces; returns ``fallback`` when
    nothing usable is found.
    """
    if isinstance(errors, str):
        return errors or fallback
    if isinstance(errors, Mapping):
        for value in errors.values():
            message = first_error_message(value, "")
            if message:
                return message
    elif isinstance(errors, (list, tuple)):
        for value in errors:
            message = first_error_message(value, "")
            if message:
                return message
    return fallback


def error_response(
    code: str,
    message: str,
    details: Optional[Any] = None,
    http_status: Optional[int] = None,
    *,
    headers: Optional[Mapping[str, str]] = None,
) -> Response:
    """
    Return a consistently structured error response for API endpoints.

    Args:
        code: Machine-readable error identifier.
        message: Human-readable explanation of the error.
        details: Optional context, e.g. validation errors or exception details.
        http_status: Explicit HTTP status code to override the default mapping.
        headers: Optional response headers to include alongside the payload.
    """

    if not isinstance(code, str):
        raise TypeError("error_response requires code to be a string")
    if not isinstance(message, str):
        raise TypeError("error_response requires message to be a string")

    code = code.strip()
    message = message.strip()

    if not code:
        raise ValueError("error_response requires a non-empty code")
    if not message:
        raise ValueError("error_response requires a non-empty message")

    normalized_code = code.upper()

    status_code = (
        int(http_status)
        if http_status is not None
        else ERROR_STATUS_MAP.get(normalized_code, DEFAULT_ERROR_STATUS)
    )

    if headers is not None and not isinstance(headers, Mapping):
        raise TypeError("error_response headers must be a mapping if provided")

    if not 100 <= status_code <= 599:
        raise ValueError("error_response status must be a valid HTTP status code")

    # The admin UI renders ``error`` directly, so it must stay a plain string.
    payload: Dict[str, Any] = {
        "error": message,
        "code": normalized_code,
        "status": status_code,
    }
    if details is not None:
        payload["details"] = _normalize_details(details)

    headers_dict = (
        {str(key): str(value) for key, value in headers.items()} if headers else None
    )

    return Response(payload, status=status_code, headers=headers_dict)
