"""
Service-layer exceptions and the project-wide DRF exception handler.

Services raise the ServiceError family and never build HTTP responses. The
handler below turns every failure into the response envelope
``{"success": false, "error": ...}``.
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import ProtectedError
from django.http import Http404
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """
    Base exception for business-rule rejections raised by services.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    code = "ServiceError"
    default_message = "Request could not be processed"

    def __init__(self, message=None, details=None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class NotFoundError(ServiceError):
    """Raised when a referenced entity does not exist"""

    status_code = status.HTTP_404_NOT_FOUND
    code = "NotFound"
    default_message = "Resource not found"


class ValidationFailedError(ServiceError):
    """Raised when input passes field validation but breaks a domain rule"""

    code = "ValidationError"
    default_message = "Validation failed"


class InsufficientStockError(ServiceError):
    code = "InsufficientStock"
    default_message = "Insufficient stock"


class UnavailableError(ServiceError):
    code = "Unavailable"
    default_message = "Game not available"


class ConflictError(ServiceError):
    """
    Raised when an operation conflicts with the current state of an entity.

    ``reason`` names the conflict: AlreadyActive, AlreadyClosed, AlreadyPaid,
    OrderClosed, OrderCancelled or InUse.
    """

    code = "Conflict"
    default_message = "Conflicting state"

    def __init__(self, message=None, reason=None, details=None):
        super().__init__(message, details)
        self.reason = reason


def _envelope(error, status_code, details=None):
    body = {"success": False, "error": error}
    if details:
        body["details"] = details
    return Response(body, status=status_code)


def _failure_message(view):
    """Generic per-action message used when an unexpected error escapes."""
    if view is None:
        return "Internal server error"
    messages = getattr(view, "failure_messages", {}) or {}
    action = getattr(view, "action", None)
    return messages.get(action) or messages.get("default") or "Internal server error"


def api_exception_handler(exc, context):
    """
    Map any exception raised in a DRF view onto the response envelope.

    - ServiceError subclasses keep their status and short message.
    - Request validation errors become 400 with field-level ``details``.
    - Unexpected exceptions are logged and reported without internal detail.
    """
    view = context.get("view")
    request = context.get("request")

    if isinstance(exc, ServiceError):
        logger.warning(
            f"{exc.code} rejection on {getattr(request, 'method', '?')} "
            f"{getattr(request, 'path', '?')}: {exc.message}"
        )
        return _envelope(exc.message, exc.status_code, exc.details)

    if isinstance(exc, ProtectedError):
        return _envelope(
            "Cannot delete a record that is still referenced by other records",
            status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, DjangoValidationError):
        details = exc.message_dict if hasattr(exc, "error_dict") else {"non_field_errors": exc.messages}
        return _envelope("Validation failed", status.HTTP_400_BAD_REQUEST, details)

    if isinstance(exc, drf_exceptions.ValidationError):
        return _envelope("Validation failed", status.HTTP_400_BAD_REQUEST, exc.detail)

    if isinstance(exc, (Http404, drf_exceptions.NotFound)):
        message = getattr(view, "not_found_message", None) or "Resource not found"
        return _envelope(message, status.HTTP_404_NOT_FOUND)

    # Remaining DRF exceptions (parse errors, method not allowed, ...)
    response = exception_handler(exc, context)
    if response is not None:
        detail = response.data.get("detail") if isinstance(response.data, dict) else None
        response.data = {"success": False, "error": str(detail or exc)}
        return response

    logger.error(
        f"Unhandled {exc.__class__.__name__} in {view.__class__.__name__ if view else 'view'}",
        exc_info=exc,
    )
    return _envelope(_failure_message(view), status.HTTP_500_INTERNAL_SERVER_ERROR)
