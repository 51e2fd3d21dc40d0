"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks and swapping the identity provider.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to the API layer.
    """

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a bearer token with the identity provider.

        Args:
            token: Access token issued by Supabase Auth

        Returns:
            AuthenticatedUser resolved for the token

        Raises:
            MissingTokenError: If the token is empty
            InvalidTokenError: If the provider rejects the token
                or resolves no user
        """
        ...
