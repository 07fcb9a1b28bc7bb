"""
Admin Service.

Moderation operations. Callers are checked for the admin flag by the
``require_admin`` dependency before any of these run.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from notehub.backend.core.config import AppConfig
from notehub.backend.core.exceptions import NoteNotFoundError, UserNotFoundError
from notehub.backend.models.note import Note
from notehub.backend.models.user import User
from notehub.backend.repositories.note import NoteRepository
from notehub.backend.repositories.user import UserRepository
from notehub.backend.services.base import BaseService


class AdminService(BaseService):
    """Service for moderating users, notes and reports."""

    def __init__(self, session: AsyncSession, app_config: AppConfig | None = None) -> None:
        super().__init__(session, app_config)
        self.users = UserRepository(session)
        self.notes = NoteRepository(session)

    async def list_users(self) -> list[User]:
        return await self.users.list_all()

    async def list_notes(self) -> list[Note]:
        return await self.notes.list_all()

    async def list_reported_notes(self) -> list[Note]:
        return await self.notes.list_reported()

    async def toggle_block(self, user_id: str, admin: User) -> User:
        """
        Flip a user's ``is_blocked`` flag.

        Raises:
            UserNotFoundError: If user not found
        """
        user = await self.users.get_by_id_or_none(user_id)
        if user is None:
            raise UserNotFoundError()

        user.is_blocked = not user.is_blocked
        await self._execute_db_operation("toggle_block", self.users.flush())

        self._log_operation(
            "User block toggled",
            user_id=user.id,
            admin_id=admin.id,
            is_blocked=user.is_blocked,
        )
        return user

    async def delete_note(self, note_id: str, admin: User) -> str:
        """
        Delete any note.

        Raises:
            NoteNotFoundError: If note not found
        """
        note = await self.notes.get_by_id_or_none(note_id)
        if note is None:
            raise NoteNotFoundError()

        await self._execute_db_operation("admin_delete_note", self.notes.delete(note))

        self._log_operation("Note deleted by admin", note_id=note_id, admin_id=admin.id)
        return note_id

    async def grant_admin(self, email: str) -> User:
        """
        Give the user with ``email`` admin rights.

        Operator-only; no HTTP route reaches this.

        Raises:
            UserNotFoundError: If no user has that email
        """
        user = await self.users.get_by_email(email)
        if user is None:
            raise UserNotFoundError()

        user.is_admin = True
        await self._execute_db_operation("grant_admin", self.users.flush())

        self._log_operation("Admin rights granted", user_id=user.id)
        return user
