"""
Note Service.

Business logic layer for notes. Orchestrates repositories,
handles validation, and enforces ownership rules.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from notehub.backend.core.config import AppConfig
from notehub.backend.core.exceptions import (
    AlreadyReportedError,
    ApplicationError,
    NoteNotFoundError,
    NotNoteOwnerError,
)
from notehub.backend.core.utils import utc_now
from notehub.backend.models.note import Note, NoteComment
from notehub.backend.models.user import User
from notehub.backend.repositories.note import NoteRepository, NoteSort
from notehub.backend.schemas.note import NoteCreate
from notehub.backend.services.base import BaseService


def normalize_tags(tags: Any) -> list[str]:
    """
    Stringify and trim tags, dropping empty entries.

    Duplicates and order are kept. Anything other than a list yields no tags.
    """
    if not isinstance(tags, list):
        return []
    cleaned = (str(tag).strip() for tag in tags if tag is not None)
    return [tag for tag in cleaned if tag]


def parse_sort(value: str | None) -> NoteSort:
    """Map a sort query value to a NoteSort, defaulting to most recent."""
    try:
        return NoteSort((value or "").strip().lower())
    except ValueError:
        return NoteSort.RECENT


class NoteService(BaseService):
    """
    Service for note business logic.

    Handles uploads, listing, reactions, comments, reports and
    owner-only deletion.
    """

    def __init__(self, session: AsyncSession, app_config: AppConfig | None = None) -> None:
        super().__init__(session, app_config)
        self.repo = NoteRepository(session)

    async def upload_note(self, user: User, data: NoteCreate) -> Note:
        """
        Create a note owned by ``user``.

        Raises:
            ValidationError: If title or file_url is blank
        """
        self._validate_required(
            data.model_dump(),
            ["title", "file_url"],
            message="Title and file_url are required",
        )

        self._log_operation("Uploading note", user_id=user.id)

        note = await self._execute_db_operation(
            "upload_note",
            self.repo.create_note(
                uploaded_by=user,
                title=data.title.strip(),
                description=data.description or "",
                file_url=data.file_url.strip(),
                tags=normalize_tags(data.tags),
            ),
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def list_notes(
        self,
        search: str | None = None,
        tag: str | None = None,
        sort: str | None = None,
    ) -> list[Note]:
        """
        List notes with optional free-text search, tag filter and ordering.

        Args:
            search: Case-insensitive substring over title, description and comments
            tag: Exact tag match
            sort: ``recent`` (default), ``likes`` or ``comments``
        """
        search = (search or "").strip() or None
        tag = (tag or "").strip() or None
        order = parse_sort(sort)

        self._log_debug("Listing notes", search=search, tag=tag, sort=order.value)
        return await self.repo.search(search=search, tag=tag, sort=order)

    async def get_note(self, note_id: str) -> Note:
        """
        Get a note by ID.

        Raises:
            NoteNotFoundError: If note not found
        """
        note = await self.repo.get_by_id_or_none(note_id)
        if note is None:
            raise NoteNotFoundError()
        return note

    async def list_user_notes(self, user_id: str) -> list[Note]:
        """Notes uploaded by ``user_id``, newest first."""
        return await self.repo.list_uploaded_by(user_id)

    async def toggle_like(self, note_id: str, user: User) -> Note:
        """
        Toggle the caller's like. Any dislike by the caller is removed.

        Raises:
            NoteNotFoundError: If note not found
        """
        note = await self.get_note(note_id)
        liked = note.toggle_like(user)
        await self._save(note, "toggle_like")

        self._log_operation("Note like toggled", note_id=note.id, user_id=user.id, liked=liked)
        return note

    async def toggle_dislike(self, note_id: str, user: User) -> Note:
        """
        Toggle the caller's dislike. Any like by the caller is removed.

        Raises:
            NoteNotFoundError: If note not found
        """
        note = await self.get_note(note_id)
        disliked = note.toggle_dislike(user)
        await self._save(note, "toggle_dislike")

        self._log_operation("Note dislike toggled", note_id=note.id, user_id=user.id, disliked=disliked)
        return note

    async def add_comment(self, note_id: str, user: User, text: str) -> list[NoteComment]:
        """
        Append a comment by ``user``.

        Returns:
            The note's full comment list, oldest first

        Raises:
            ValidationError: If the text is blank
            NoteNotFoundError: If note not found
        """
        self._validate_required({"text": text}, ["text"], message="Comment text required")

        note = await self.get_note(note_id)
        note.add_comment(user, text.strip(), created_at=utc_now())
        await self._save(note, "add_comment")

        self._log_operation("Comment added", note_id=note.id, user_id=user.id)
        return list(note.comments)

    async def list_comments(self, note_id: str) -> list[NoteComment]:
        """
        Get the comments of a note.

        Raises:
            NoteNotFoundError: If note not found
        """
        note = await self.get_note(note_id)
        return list(note.comments)

    async def delete_note(self, note_id: str, user: User) -> str:
        """
        Delete a note owned by ``user``.

        Raises:
            NoteNotFoundError: If note not found
            NotNoteOwnerError: If the caller is not the owner
        """
        note = await self.get_note(note_id)

        if note.uploaded_by_id != user.id:
            self._logger.warning(
                "Note delete refused",
                extra={"note_id": note.id, "user_id": user.id},
            )
            raise NotNoteOwnerError()

        await self._execute_db_operation("delete_note", self.repo.delete(note))

        self._log_operation("Note deleted", note_id=note_id, user_id=user.id)
        return note_id

    async def report_note(self, note_id: str, user: User, reason: str) -> int:
        """
        Report a note. Each user may report a note once.

        Returns:
            The note's report count after the call

        Raises:
            ValidationError: If the reason is blank
            AlreadyReportedError: If the user already reported this note
            NoteNotFoundError: If note not found
        """
        self._validate_required({"reason": reason}, ["reason"], message="Report reason is required")

        note = await self.get_note(note_id)
        if note.has_reported(user.id):
            raise AlreadyReportedError()

        note.add_report(user, reason.strip(), created_at=utc_now())
        # a concurrent report by the same user loses on the unique constraint
        await self._save(note, "report_note", on_conflict=AlreadyReportedError())

        self._log_operation("Note reported", note_id=note.id, user_id=user.id)
        return note.report_count

    async def _save(
        self,
        note: Note,
        operation: str,
        on_conflict: ApplicationError | None = None,
    ) -> None:
        note.updated_at = utc_now()
        await self._execute_db_operation(operation, self.repo.flush(), on_conflict=on_conflict)
