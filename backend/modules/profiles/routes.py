"""
Profile API endpoints.

The check endpoint answers with status codes so HTTP callers (including
HttpProfileChecker) need not parse the body: 200 = profile exists,
401 = not signed in, 404 = signed in without a profile.
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from api.middleware.auth import get_current_user
from api.dependencies import get_profile_service
from api.models.errors import ErrorResponse
from shared.models import Identity

from .models import ProfileCheckResponse, ProfileRecord
from .service import ProfileService

router = APIRouter()


@router.get(
    "/check",
    response_model=ProfileCheckResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ProfileCheckResponse},
        500: {"model": ErrorResponse},
    },
)
async def check_profile(
    user: Identity = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    """
    Check whether the caller has completed their profile.

    Always answers for the caller's own session; there is no way to ask
    about another user.
    """
    if not await service.has_profile(user):
        return JSONResponse(
            status_code=404,
            content=ProfileCheckResponse(has_profile=False).model_dump(),
        )
    return ProfileCheckResponse(has_profile=True)


@router.get("/me", response_model=ProfileRecord)
async def get_my_profile(
    user: Identity = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileRecord:
    """Get the caller's profile."""
    profile = await service.get_profile(user)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile
