"""
User-related endpoints.

Backs the profile view with the identity the server resolved for the token.
"""

from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.models import AuthenticatedUser
from ..middleware.auth import get_current_user

router = APIRouter()


class UserProfileResponse(BaseModel):
    """User profile response model."""

    id: str
    email: str
    metadata: dict[str, Any]
    email_verified: bool
    created_at: Optional[datetime] = None
    last_sign_in: Optional[datetime] = None


@router.get("/me", response_model=UserProfileResponse)
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
) -> UserProfileResponse:
    """
    Get the current user's profile.

    Requires authentication.
    """
    return UserProfileResponse(
        id=user.id,
        email=user.email,
        metadata=user.metadata,
        email_verified=user.email_verified,
        created_at=user.created_at,
        last_sign_in=user.last_sign_in,
    )
