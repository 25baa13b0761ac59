"""
Error hierarchy for the HTTP layer.

Every failure that crosses the API boundary is a ``TodoServiceError``
carrying an HTTP status and a client-safe message; the global handlers
in ``api.middleware`` turn it into ``{"message": ...}``.
"""

from __future__ import annotations

from fastapi import status


class TodoServiceError(Exception):
    """Base exception for all service errors."""

    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, http_status: int | None = None):
        super().__init__(message)
        self.message = message
        if http_status is not None:
            self.http_status = http_status

    def to_response(self) -> dict:
        return {"message": self.message}


class AuthenticationError(TodoServiceError):
    """Missing, malformed, invalid or expired credentials."""

    http_status = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class AuthorizationError(TodoServiceError):
    """Valid identity, but not allowed to touch the resource."""

    http_status = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class RequestValidationFailure(TodoServiceError):
    http_status = status.HTTP_400_BAD_REQUEST


class NotFoundError(TodoServiceError):
    http_status = status.HTTP_404_NOT_FOUND

    def __init__(self, resource_type: str):
        super().__init__(f"{resource_type} not found")
        self.resource_type = resource_type


class ConflictError(TodoServiceError):
    http_status = status.HTTP_409_CONFLICT


class InternalError(TodoServiceError):
    """Persistence, hashing or serialization failure; detail stays in the logs."""

    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)
