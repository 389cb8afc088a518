"""DRF exception handler translating domain errors into API responses."""

from __future__ import annotations

import logging

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
}


def domain_exception_handler(exc, context):  # type: ignore
    """Render ``DomainError`` subclasses as ``{"success": false, "error": ...}``."""

    if isinstance(exc, DomainError):
        http_status = STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
        view = context.get("view")
        logger.info(
            "Domain error in %s: %s (%s)",
            view.__class__.__name__ if view else "unknown view",
            exc.message,
            type(exc).__name__,
        )
        return Response({"success": False, "error": exc.message}, status=http_status)
    return exception_handler(exc, context)
