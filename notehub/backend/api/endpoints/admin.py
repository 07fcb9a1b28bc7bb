"""
Admin API Endpoints.

Moderation endpoints. Every route requires an admin token.
"""

from fastapi import APIRouter

from notehub.backend.core.dependencies import AdminUser, Config, DbSession, RequestId
from notehub.backend.schemas.base import ApiResponse
from notehub.backend.schemas.note import DeleteResult, NoteResponse, ReportedNoteResponse
from notehub.backend.schemas.user import AdminUserResponse, BlockToggleResponse
from notehub.backend.services.admin import AdminService

router = APIRouter()


@router.get(
    "/users",
    response_model=ApiResponse[list[AdminUserResponse]],
    summary="List users",
)
async def list_users(
    admin: AdminUser,
    db: DbSession,
    config: Config,
    request_id: RequestId,
) -> ApiResponse[list[AdminUserResponse]]:
    """List every user without password credentials."""
    users = await AdminService(db, config).list_users()
    return ApiResponse[list[AdminUserResponse]].ok(
        [AdminUserResponse.model_validate(user) for user in users],
        request_id,
    )


@router.get(
    "/notes",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List notes",
)
async def list_notes(
    admin: AdminUser,
    db: DbSession,
    config: Config,
    request_id: RequestId,
) -> ApiResponse[list[NoteResponse]]:
    """List every note, newest first."""
    notes = await AdminService(db, config).list_notes()
    return ApiResponse[list[NoteResponse]].ok(
        [NoteResponse.model_validate(note) for note in notes],
        request_id,
    )


@router.get(
    "/reports",
    response_model=ApiResponse[list[ReportedNoteResponse]],
    summary="List reported notes",
    description="Notes with at least one report, each with its reports.",
)
async def list_reports(
    admin: AdminUser,
    db: DbSession,
    config: Config,
    request_id: RequestId,
) -> ApiResponse[list[ReportedNoteResponse]]:
    """List reported notes."""
    notes = await AdminService(db, config).list_reported_notes()
    return ApiResponse[list[ReportedNoteResponse]].ok(
        [ReportedNoteResponse.model_validate(note) for note in notes],
        request_id,
    )


@router.patch(
    "/users/{user_id}/block",
    response_model=ApiResponse[BlockToggleResponse],
    summary="Toggle block",
    description="Flip a user's blocked flag.",
)
async def toggle_block(
    user_id: str,
    admin: AdminUser,
    db: DbSession,
    config: Config,
    request_id: RequestId,
) -> ApiResponse[BlockToggleResponse]:
    """Block or unblock a user."""
    user = await AdminService(db, config).toggle_block(user_id, admin)
    return ApiResponse[BlockToggleResponse].ok(
        BlockToggleResponse(id=user.id, is_blocked=user.is_blocked),
        request_id,
    )


@router.delete(
    "/notes/{note_id}",
    response_model=ApiResponse[DeleteResult],
    summary="Delete any note",
)
async def delete_note(
    note_id: str,
    admin: AdminUser,
    db: DbSession,
    config: Config,
    request_id: RequestId,
) -> ApiResponse[DeleteResult]:
    """Delete a note regardless of owner."""
    deleted_id = await AdminService(db, config).delete_note(note_id, admin)
    return ApiResponse[DeleteResult].ok(DeleteResult(deleted_note_id=deleted_id), request_id)
