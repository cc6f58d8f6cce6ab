"""
Service-level errors.

Each error carries the HTTP status it maps to; ``api.errors`` turns them
into JSON responses.
"""

from __future__ import annotations

from typing import Optional


class ServiceError(Exception):
    status_code: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(ServiceError):
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "User not found"


class ConflictError(ServiceError):
    """A mutation would violate the uniqueness of ``field``."""

    status_code = 409
    default_message = "Email or username already in use"

    def __init__(self, field: Optional[str] = None, message: Optional[str] = None) -> None:
        self.field = field
        if message is None and field is not None:
            message = f"{field.capitalize()} already in use"
        super().__init__(message)
