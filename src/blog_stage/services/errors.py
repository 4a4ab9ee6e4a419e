"""Typed failures raised by the service layer.

Each error maps onto one client-facing HTTP status; the API layer renders
them as ``{"success": false, "message": ..., "errors": [...]}``.
"""
from __future__ import annotations

from fastapi import status


class ServiceError(RuntimeError):
    """Base exception for failures surfaced to API clients."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors


class ValidationError(ServiceError):
    """Raised when required input is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(ServiceError):
    """Raised when no authenticated principal is available."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(ServiceError):
    """Raised when the principal lacks ownership or the required role."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ServiceError):
    """Raised when a referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    """Raised when a write collides with an existing record."""

    status_code = status.HTTP_409_CONFLICT


class ServiceUnavailableError(ServiceError):
    """Raised when a required outside collaborator, such as mail, is down."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
