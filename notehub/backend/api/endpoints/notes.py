"""
Notes API Endpoints.

REST API endpoints for notes, reactions, comments and reports.
"""

from fastapi import APIRouter, Query

from notehub.backend.core.dependencies import Config, CurrentUser, DbSession, RequestId
from notehub.backend.schemas.base import ApiResponse
from notehub.backend.schemas.note import (
    CommentCreate,
    CommentResponse,
    DeleteResult,
    NoteCreate,
    NoteResponse,
    ReportCreate,
    ReportResult,
)
from notehub.backend.services.note import NoteService

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Upload a note",
    description="Create a note owned by the caller. Title and file_url are required.",
)
async def upload_note(
    data: NoteCreate,
    user: CurrentUser,
    db: DbSession,
    config: Config,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Upload a new note."""
    note = await NoteService(db, config).upload_note(user, data)
    return ApiResponse[NoteResponse].ok(NoteResponse.model_validate(note), request_id)


@router.get(
    "",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List notes",
    description="List notes with optional search, tag filter and sort order.",
)
async def list_notes(
    db: DbSession,
    config: Config,
    request_id: RequestId,
    search: str | None = Query(
        default=None,
        description="Case-insensitive match on title, description or comment text",
    ),
    tag: str | None = Query(default=None, description="Exact tag match"),
    sort: str | None = Query(
        default=None,
        description="recent (default), likes or comments",
    ),
) -> ApiResponse[list[NoteResponse]]:
    """List notes."""
    notes = await NoteService(db, config).list_notes(search=search, tag=tag, sort=sort)
    return ApiResponse[list[NoteResponse]].ok(
        [NoteResponse.model_validate(note) for note in notes],
        request_id,
    )


@router.get(
    "/user/{user_id}",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List a user's notes",
    description="Notes uploaded by the given user, newest first.",
)
async def list_user_notes(
    user_id: str,
    db: DbSession,
    config: Config,
    request_id: RequestId,
) -> ApiResponse[list[NoteResponse]]:
    """List notes uploaded by a user."""
    notes = await NoteService(db, config).list_user_notes(user_id)
    return ApiResponse[list[NoteResponse]].ok(
        [NoteResponse.model_validate(note) for note in notes],
        request_id,
    )


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Get a note",
    description="Get a single note by ID.",
)
async def get_note(
    note_id: str,
    db: DbSession,
    config: Config,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Get a note by ID."""
    note = await NoteService(db, config).get_note(note_id)
    return ApiResponse[NoteResponse].ok(NoteResponse.model_validate(note), request_id)


@router.post(
    "/{note_id}/like",
    response_model=ApiResponse[NoteResponse],
    summary="Toggle like",
    description="Like the note, or remove an existing like. Clears any dislike by the caller.",
)
async def like_note(
    note_id: str,
    user: CurrentUser,
    db: DbSession,
    config: Config,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Toggle the caller's like."""
    note = await NoteService(db, config).toggle_like(note_id, user)
    return ApiResponse[NoteResponse].ok(NoteResponse.model_validate(note), request_id)


@router.post(
    "/{note_id}/dislike",
    response_model=ApiResponse[NoteResponse],
    summary="Toggle dislike",
    description="Dislike the note, or remove an existing dislike. Clears any like by the caller.",
)
async def dislike_note(
    note_id: str,
    user: CurrentUser,
    db: DbSession,
    config: Config,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Toggle the caller's dislike."""
    note = await NoteService(db, config).toggle_dislike(note_id, user)
    return ApiResponse[NoteResponse].ok(NoteResponse.model_validate(note), request_id)


@router.get(
    "/{note_id}/comments",
    response_model=ApiResponse[list[CommentResponse]],
    summary="List comments",
    description="Comments on the note, oldest first.",
)
async def list_comments(
    note_id: str,
    db: DbSession,
    config: Config,
    request_id: RequestId,
) -> ApiResponse[list[CommentResponse]]:
    """List comments on a note."""
    comments = await NoteService(db, config).list_comments(note_id)
    return ApiResponse[list[CommentResponse]].ok(
        [CommentResponse.model_validate(comment) for comment in comments],
        request_id,
    )


@router.post(
    "/{note_id}/comments",
    response_model=ApiResponse[list[CommentResponse]],
    status_code=201,
    summary="Add a comment",
    description="Append a comment and return the full comment list.",
)
async def add_comment(
    note_id: str,
    data: CommentCreate,
    user: CurrentUser,
    db: DbSession,
    config: Config,
    request_id: RequestId,
) -> ApiResponse[list[CommentResponse]]:
    """Comment on a note."""
    comments = await NoteService(db, config).add_comment(note_id, user, data.text)
    return ApiResponse[list[CommentResponse]].ok(
        [CommentResponse.model_validate(comment) for comment in comments],
        request_id,
    )


@router.post(
    "/{note_id}/report",
    response_model=ApiResponse[ReportResult],
    status_code=201,
    summary="Report a note",
    description="Flag a note for moderation. Each user may report a note once.",
)
async def report_note(
    note_id: str,
    data: ReportCreate,
    user: CurrentUser,
    db: DbSession,
    config: Config,
    request_id: RequestId,
) -> ApiResponse[ReportResult]:
    """Report a note."""
    count = await NoteService(db, config).report_note(note_id, user, data.reason)
    return ApiResponse[ReportResult].ok(ReportResult(report_count=count), request_id)


@router.delete(
    "/{note_id}/delete",
    response_model=ApiResponse[DeleteResult],
    summary="Delete own note",
    description="Delete a note uploaded by the caller.",
)
@router.delete(
    "/{note_id}",
    response_model=ApiResponse[DeleteResult],
    summary="Delete own note",
    description="Delete a note uploaded by the caller.",
)
async def delete_note(
    note_id: str,
    user: CurrentUser,
    db: DbSession,
    config: Config,
    request_id: RequestId,
) -> ApiResponse[DeleteResult]:
    """Delete a note owned by the caller."""
    deleted_id = await NoteService(db, config).delete_note(note_id, user)
    return ApiResponse[DeleteResult].ok(DeleteResult(deleted_note_id=deleted_id), request_id)
