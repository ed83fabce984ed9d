"""
Profile API endpoints.

Routes: GET /profile, PUT /profile

Dependencies: draftsmith.application.services, draftsmith.core.profile
System role: Profile HTTP API
"""

from fastapi import APIRouter, Depends

from draftsmith.api.deps import get_profile_service, get_user_id
from draftsmith.application.services import ProfileService
from draftsmith.core.profile import Profile, format_profile
from draftsmith.models.profile import ProfileResponse

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
async def get_profile(
    user_id: str = Depends(get_user_id),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Return the stored profile (null when none has been derived yet)."""
    profile = await service.get_profile(user_id)
    return ProfileResponse(
        profile=profile,
        formatted=format_profile(profile) if profile is not None else "",
    )


@router.put("", response_model=ProfileResponse)
async def update_profile(
    update: Profile,
    user_id: str = Depends(get_user_id),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """
    Merge a partial profile into the stored one.

    Only fields present in the body change; absent (or null) fields keep
    their stored values.
    """
    merged = await service.update_profile(user_id, update)
    return ProfileResponse(profile=merged, formatted=format_profile(merged))
