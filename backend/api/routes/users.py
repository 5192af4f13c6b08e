"""
User-related endpoints.
"""

from fastapi import APIRouter, Depends

from shared.models import Identity
from modules.profiles.service import ProfileService
from ..dependencies import get_profile_service
from ..middleware.auth import get_current_user
from ..models.user import CurrentUserResponse

router = APIRouter()


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user_info(
    user: Identity = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
) -> CurrentUserResponse:
    """
    Get the signed-in user and whether they have completed their profile.

    Requires authentication.
    """
    return CurrentUserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        picture=user.picture,
        has_profile=await service.has_profile(user),
    )
