"""
Authentication module exceptions.

These exceptions are raised by the auth module and translated by the API
middleware into HTTP responses: missing credentials are a 401, rejected
credentials a 403.
"""

from shared.exceptions import AuthenticationError, AuthorizationError


class MissingTokenError(AuthenticationError):
    """Raised when no bearer token is provided."""

    def __init__(self, message: str = "Access token required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidTokenError(AuthorizationError):
    """Raised when the identity provider rejects the token."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, code="INVALID_TOKEN")


class UserNotFoundError(InvalidTokenError):
    """Raised when the provider accepts the call but resolves no user."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message)
        self.code = "USER_NOT_FOUND"
