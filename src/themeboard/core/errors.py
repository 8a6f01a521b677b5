"""Domain error taxonomy.

Services and request gates raise these; the handlers in
``themeboard.api.error_handlers`` turn them into JSON responses. Messages are
meant for end users and never carry internal detail.
"""

from __future__ import annotations

from typing import Any

from fastapi import status


class ThemeboardError(Exception):
    """Base class for all expected failures."""

    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_response(self) -> dict[str, Any]:
        """Return the JSON body sent to the client."""
        return {"message": self.message}


class RequestValidationFailed(ThemeboardError):
    """The request body or query did not match its schema."""

    http_status = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data"

    def __init__(
        self,
        errors: list[dict[str, str]] | None = None,
        message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []

    def to_response(self) -> dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


class AuthenticationError(ThemeboardError):
    """Missing, malformed, expired or revoked credentials."""

    http_status = status.HTTP_401_UNAUTHORIZED
    default_message = "Could not validate credentials"


class AuthorizationError(ThemeboardError):
    """Authenticated, but not allowed to act on the resource."""

    http_status = status.HTTP_403_FORBIDDEN
    default_message = "You are not allowed to perform this action"


class NotFoundError(ThemeboardError):
    http_status = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(ThemeboardError):
    http_status = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"
