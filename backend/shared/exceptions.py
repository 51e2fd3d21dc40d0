"""
Base exception classes for the Todo backend.

Each module defines its own exceptions that inherit from these bases,
and the API layer maps the bases onto HTTP status codes.
"""

from typing import Optional, Any


class TodoAppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}


class NotFoundError(TodoAppError):
    """Resource not found."""

    pass


class AuthenticationError(TodoAppError):
    """No usable credentials were presented (HTTP 401)."""

    pass


class AuthorizationError(TodoAppError):
    """Credentials were presented but rejected (HTTP 403)."""

    pass


class ExternalServiceError(TodoAppError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
