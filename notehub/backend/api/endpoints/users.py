"""
User API Endpoints.

Profiles and saved notes.
"""

from fastapi import APIRouter

from notehub.backend.core.dependencies import Config, CurrentUser, DbSession, RequestId
from notehub.backend.schemas.base import ApiResponse
from notehub.backend.schemas.user import ProfileResponse, SaveToggleRequest, SaveToggleResponse
from notehub.backend.services.user import UserService

router = APIRouter()


@router.get(
    "/{user_id}",
    response_model=ApiResponse[ProfileResponse],
    summary="Get a profile",
    description="User header plus uploaded, liked, disliked and saved notes.",
)
async def get_profile(
    user_id: str,
    db: DbSession,
    config: Config,
    request_id: RequestId,
) -> ApiResponse[ProfileResponse]:
    """Get a user's profile."""
    profile = await UserService(db, config).get_profile(user_id)
    return ApiResponse[ProfileResponse].ok(ProfileResponse.model_validate(profile), request_id)


@router.post(
    "/{user_id}/save",
    response_model=ApiResponse[SaveToggleResponse],
    summary="Toggle a saved note",
    description="Save or unsave a note for the caller. Only the caller's own list can be changed.",
)
async def toggle_saved_note(
    user_id: str,
    data: SaveToggleRequest,
    user: CurrentUser,
    db: DbSession,
    config: Config,
    request_id: RequestId,
) -> ApiResponse[SaveToggleResponse]:
    """Toggle a note in the caller's saved list."""
    result = await UserService(db, config).toggle_saved_note(user_id, user, data.note_id)
    return ApiResponse[SaveToggleResponse].ok(
        SaveToggleResponse.model_validate(result),
        request_id,
    )
