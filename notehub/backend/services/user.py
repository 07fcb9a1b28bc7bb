"""
User Service.

Profile aggregation and saved-note toggling.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from notehub.backend.core.config import AppConfig
from notehub.backend.core.exceptions import NotProfileOwnerError, UserNotFoundError
from notehub.backend.models.note import Note
from notehub.backend.models.user import User
from notehub.backend.repositories.note import NoteRepository
from notehub.backend.repositories.user import UserRepository
from notehub.backend.services.base import BaseService


@dataclass
class UserProfile:
    """A user with the notes they uploaded, liked, disliked and saved."""

    user: User
    uploaded_notes: list[Note]
    liked_notes: list[Note]
    disliked_notes: list[Note]
    saved_notes: list[Note]


@dataclass
class SavedNotes:
    """The caller's saved notes after a toggle."""

    saved: bool
    saved_notes: list[Note]
    saved_note_ids: list[str]


class UserService(BaseService):
    """Service for user profiles and favourites."""

    def __init__(self, session: AsyncSession, app_config: AppConfig | None = None) -> None:
        super().__init__(session, app_config)
        self.users = UserRepository(session)
        self.notes = NoteRepository(session)

    async def get_profile(self, user_id: str) -> UserProfile:
        """
        Build a user's profile.

        Raises:
            UserNotFoundError: If user not found
        """
        user = await self.users.get_by_id_or_none(user_id)
        if user is None:
            raise UserNotFoundError()

        return UserProfile(
            user=user,
            uploaded_notes=await self.notes.list_uploaded_by(user.id),
            liked_notes=await self.notes.list_liked_by(user.id),
            disliked_notes=await self.notes.list_disliked_by(user.id),
            saved_notes=await self.notes.list_by_ids(user.saved_note_ids),
        )

    async def toggle_saved_note(self, user_id: str, caller: User, note_id: str) -> SavedNotes:
        """
        Save or unsave ``note_id`` for the caller.

        The note is not required to exist.

        Raises:
            NotProfileOwnerError: If ``user_id`` is not the caller
            ValidationError: If ``note_id`` is blank
        """
        if caller.id != user_id:
            raise NotProfileOwnerError()

        self._validate_required({"note_id": note_id}, ["note_id"], message="note_id is required")
        note_id = note_id.strip()

        saved = caller.toggle_saved(note_id)
        await self._execute_db_operation("toggle_saved_note", self.users.flush())

        self._log_operation("Saved note toggled", user_id=caller.id, note_id=note_id, saved=saved)

        saved_ids = [entry.note_id for entry in caller.saved_entries]
        return SavedNotes(
            saved=saved,
            saved_notes=await self.notes.list_by_ids(saved_ids),
            saved_note_ids=saved_ids,
        )
