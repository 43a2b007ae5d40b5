from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    MethodNotAllowed,
    NotFound,
    ParseError,
    UnsupportedMediaType,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.utils import error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="exception")

GENERIC_SERVER_MESSAGE = "Something went wrong"

# (exception types, code, fallback message, keep DRF payload as details)
DRF_ERROR_CODES = (
    ((ValidationError,), "VALIDATION_ERROR", "Validation failed", True),
    ((ParseError,), "VALIDATION_ERROR", "Malformed request", False),
    ((NotFound, Http404), "NOT_FOUND", "Resource not found", False),
    ((MethodNotAllowed,), "METHOD_NOT_ALLOWED", "Method not allowed", False),
    ((UnsupportedMediaType,), "UNSUPPORTED_MEDIA_TYPE", "Unsupported media type", False),
)


class ApplicationError(Exception):
    """
    Error raised by catalog services for rule violations the client caused.

    Args:
        code: Machine readable error code (``VALIDATION_ERROR``, ``CONFLICT``...).
        message: Human readable explanation shown by the admin UI.
        status_code: Optional explicit HTTP status. If omitted, code mapping is used.
        details: Optional structured details for clients.
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details

    def to_response(self) -> Response:
        return error_response(
            self.code,
            self.message,
            self.details,
            http_status=self.status_code,
        )


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """
    DRF ``EXCEPTION_HANDLER`` producing the ``{"error": {...}}`` envelope.

    Store failures keep their driver message so operators can see what broke;
    anything else unexpected is reported with a generic message.
    """
    log = _bind_logger(context)

    if isinstance(exc, ApplicationError):
        log.info("Handled application error", code=exc.code, status=exc.status_code)
        return exc.to_response()

    if isinstance(exc, DatabaseError):
        log.exception("Database error while handling request", error=exc.__class__.__name__)
        return error_response(
            "SERVER_ERROR",
            str(exc) or GENERIC_SERVER_MESSAGE,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(
            exc.message_dict if hasattr(exc, "message_dict") else list(exc.messages)
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        log.exception("Unhandled exception bubbled to global handler")
        return error_response(
            "SERVER_ERROR",
            GENERIC_SERVER_MESSAGE,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code, message, details = _describe(exc, response)
    log.info("Converted API exception", code=code, status=response.status_code)
    headers = dict(response.headers) if getattr(response, "headers", None) else None
    return error_response(
        code, message, details, http_status=response.status_code, headers=headers
    )


def _bind_logger(context: Dict[str, Any]):
    log = logger
    view = context.get("view")
    request = context.get("request")
    if view is not None:
        log = log.bind(view=type(view).__name__)
    if request is not None:
        log = log.bind(
            method=getattr(request, "method", None),
            path=getattr(request, "path", None),
        )
    return log


def _describe(exc: Exception, response: Response) -> Tuple[str, str, Optional[Any]]:
    payload = response.data
    if response.status_code >= 500:
        return "SERVER_ERROR", GENERIC_SERVER_MESSAGE, None
    for types, code, fallback, with_details in DRF_ERROR_CODES:
        if isinstance(exc, types):
            return code, _message_from(payload, fallback), payload if with_details else None
    details = payload if isinstance(payload, (dict, list)) and payload else None
    return "REQUEST_FAILED", _message_from(payload, "Request failed"), details


def _message_from(payload: Any, fallback: str) -> str:
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("detail"), str):
        return payload["detail"]
    if isinstance(payload, list) and payload and isinstance(payload[0], str):
        return payload[0]
    return fallback


__all__ = ["ApplicationError", "global_exception_handler"]
