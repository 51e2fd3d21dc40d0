"""
Authentication service implementation.

Delegates token verification to Supabase Auth: the token is opaque to
this service and is never decoded locally.
"""

import logging
from typing import Any, Optional

from supabase import Client

from shared.database import get_supabase_client
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .exceptions import (
    InvalidTokenError,
    MissingTokenError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Each call asks the provider for the user behind the token. A failed
    verification is terminal for the request; nothing is retried.
    """

    def __init__(self, supabase_client: Optional[Client] = None):
        self._db = supabase_client or get_supabase_client()

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """Validate a token against Supabase Auth and return the user."""
        if not token:
            raise MissingTokenError()

        logger.debug("Verifying token with Supabase")
        try:
            response = self._db.auth.get_user(token)
        except Exception as e:
            logger.info("Supabase rejected token: %s", e)
            raise InvalidTokenError() from e

        user = getattr(response, "user", None)
        if user is None:
            logger.info("No user found for token")
            raise UserNotFoundError()

        logger.debug("User authenticated: %s", user.id)
        return self._map_to_user(user)

    def _map_to_user(self, user: Any) -> AuthenticatedUser:
        """Map a Supabase Auth user record to AuthenticatedUser."""
        return AuthenticatedUser(
            id=str(user.id),
            email=getattr(user, "email", None) or "",
            metadata=getattr(user, "user_metadata", None) or {},
            email_verified=getattr(user, "email_confirmed_at", None) is not None,
            created_at=getattr(user, "created_at", None),
            last_sign_in=getattr(user, "last_sign_in_at", None),
        )

