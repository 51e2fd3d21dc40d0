"""
Bearer token authentication middleware.

Every protected request passes through get_current_user, the single trust
boundary of the API. The token is verified with the identity provider on
each request; the caller's own claims about its identity are never used.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from shared.models import AuthenticatedUser
from modules.auth.interfaces import IAuthService
from modules.auth.exceptions import InvalidTokenError, MissingTokenError
from ..dependencies import get_auth_service

logger = logging.getLogger(__name__)

# Bearer token extractor; yields None for absent or malformed headers
bearer_scheme = HTTPBearer(auto_error=False)


class AuthError(HTTPException):
    """Missing or malformed credentials (401)."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(HTTPException):
    """Credentials rejected by the identity provider (403)."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Resolves the caller and attaches it to ``request.state.user``.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None or not credentials.credentials:
        logger.debug("Rejected request without bearer token: %s", request.url.path)
        raise AuthError("Access token required")

    try:
        user = await auth.validate_token(credentials.credentials)
    except MissingTokenError as e:
        raise AuthError(e.message)
    except InvalidTokenError as e:
        raise ForbiddenError(e.message)

    request.state.user = user
    return user
