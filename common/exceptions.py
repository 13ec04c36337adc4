"""Domain exceptions and the project-wide API exception handler.

Every error leaves the API as JSON with a stable machine-readable ``kind``
next to the human-readable ``detail``. Validation errors additionally carry
the per-field messages under ``errors``.
"""

import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class InvalidTransition(APIException):
    """An order status or quote state change that the workflow does not allow."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid state transition."
    default_code = "invalid_transition"

    def __init__(self, detail=None, from_state=None, to_state=None):
        if detail is None and from_state is not None and to_state is not None:
            detail = f"Invalid status transition from {from_state} to {to_state}"
        super().__init__(detail)
        self.from_state = from_state
        self.to_state = to_state


class OrderLocked(APIException):
    """Detail edit attempted on an order that is in production or beyond."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Cannot update order that is in production or beyond."
    default_code = "order_locked"


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists."
    default_code = "conflict"


def _kind_for(exc) -> str:
    if isinstance(exc, ValidationError):
        return "validation_failed"
    if isinstance(exc, Http404):
        return "not_found"
    if isinstance(exc, DjangoPermissionDenied):
        return "permission_denied"
    return getattr(exc, "default_code", "error")


def api_exception_handler(exc, context):
    """Wrap DRF's default handler and attach the error kind."""
    response = exception_handler(exc, context)
    if response is None:
        logger.exception("Unhandled error in %s", context.get("view").__class__.__name__)
        return None

    kind = _kind_for(exc)
    data = response.data

    if kind == "validation_failed":
        response.data = {"kind": kind, "detail": "Validation failed.", "errors": data}
    elif isinstance(data, dict):
        response.data = {"kind": kind, **data}
    else:
        response.data = {"kind": kind, "detail": data}

    extra = {}
    if isinstance(exc, InvalidTransition) and exc.from_state is not None:
        extra = {"from": exc.from_state, "to": exc.to_state}
    response.data.update(extra)

    if response.status_code >= 500:
        logger.error("API error %s: %s", response.status_code, response.data)
    return response
