"""
Authentication module.

Verifies bearer tokens against the identity provider.

Public API:
- IAuthService: Interface for auth operations
- AuthenticatedUser: User resolved for a valid token
- Auth exceptions: MissingTokenError, InvalidTokenError, UserNotFoundError
"""

from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .exceptions import (
    MissingTokenError,
    InvalidTokenError,
    UserNotFoundError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "AuthenticatedUser",
    # Exceptions
    "MissingTokenError",
    "InvalidTokenError",
    "UserNotFoundError",
]
