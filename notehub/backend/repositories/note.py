"""
Note Repository.

Data access layer for notes. Handles all database operations
for the Note model and its owned collections.
"""

from collections.abc import Iterable
from enum import Enum

from sqlalchemy import Select, func, or_, select

from notehub.backend.models.note import Note, NoteComment, NoteTag, note_likes
from notehub.backend.models.user import User
from notehub.backend.repositories.base import BaseRepository


class NoteSort(str, Enum):
    """Ordering modes for note listings."""

    RECENT = "recent"
    LIKES = "likes"
    COMMENTS = "comments"


def _like_count():
    return (
        select(func.count())
        .select_from(note_likes)
        .where(note_likes.c.note_id == Note.id)
        .correlate(Note)
        .scalar_subquery()
    )


def _comment_count():
    return (
        select(func.count(NoteComment.id))
        .where(NoteComment.note_id == Note.id)
        .correlate(Note)
        .scalar_subquery()
    )


def _newest_first(statement: Select) -> Select:
    return statement.order_by(Note.created_at.desc())


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits standard CRUD operations from BaseRepository
    and adds note-specific queries.
    """

    model = Note

    async def create_note(
        self,
        uploaded_by: User,
        title: str,
        description: str,
        file_url: str,
        tags: Iterable[str],
    ) -> Note:
        """Create a note with empty reaction sets, comments and reports."""
        note = Note(
            title=title,
            description=description,
            file_url=file_url,
            uploaded_by=uploaded_by,
            uploaded_by_id=uploaded_by.id,
            liked_by=set(),
            disliked_by=set(),
            comments=[],
            reports=[],
        )
        note.set_tags(tags)
        return await self.add(note)

    async def search(
        self,
        search: str | None = None,
        tag: str | None = None,
        sort: NoteSort = NoteSort.RECENT,
    ) -> list[Note]:
        """
        List notes matching an optional free-text and tag filter.

        Args:
            search: Case-insensitive substring matched against title,
                description or any comment's text
            tag: Exact tag value the note must carry
            sort: Ordering mode; ties always fall back to newest first

        Returns:
            Matching notes in the requested order
        """
        statement = select(Note)

        if search:
            statement = statement.where(
                or_(
                    Note.title.icontains(search, autoescape=True),
                    Note.description.icontains(search, autoescape=True),
                    Note.comments.any(NoteComment.text.icontains(search, autoescape=True)),
                )
            )

        if tag:
            statement = statement.where(Note.tag_entries.any(NoteTag.value == tag))

        if sort == NoteSort.LIKES:
            statement = statement.order_by(_like_count().desc())
        elif sort == NoteSort.COMMENTS:
            statement = statement.order_by(_comment_count().desc())

        return await self._scalars(_newest_first(statement))

    async def list_all(self) -> list[Note]:
        return await self._scalars(_newest_first(select(Note)))

    async def list_uploaded_by(self, user_id: str) -> list[Note]:
        return await self._scalars(
            _newest_first(select(Note).where(Note.uploaded_by_id == user_id))
        )

    async def list_liked_by(self, user_id: str) -> list[Note]:
        return await self._scalars(
            _newest_first(select(Note).where(Note.liked_by.any(User.id == user_id)))
        )

    async def list_disliked_by(self, user_id: str) -> list[Note]:
        return await self._scalars(
            _newest_first(select(Note).where(Note.disliked_by.any(User.id == user_id)))
        )

    async def list_by_ids(self, note_ids: Iterable[str]) -> list[Note]:
        """Dereference note ids, silently skipping ids with no note."""
        ids = list(note_ids)
        if not ids:
            return []
        return await self._scalars(_newest_first(select(Note).where(Note.id.in_(ids))))

    async def list_reported(self) -> list[Note]:
        """Notes with at least one report, newest first."""
        return await self._scalars(_newest_first(select(Note).where(Note.reports.any())))
