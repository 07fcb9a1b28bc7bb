"""
User Model.

Identity, credential and moderation flags, plus the user's saved notes.
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from notehub.backend.models.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin


class SavedNote(CreatedAtMixin, Base):
    """
    Membership row of a user's saved-notes set.

    ``note_id`` has no foreign key: a note id can be saved without the
    note existing, and entries survive the note's deletion.
    """

    __tablename__ = "user_saved_notes"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    note_id: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
    )

    user: Mapped["User"] = relationship(back_populates="saved_entries")

    def __repr__(self) -> str:
        return f"<SavedNote(user_id={self.user_id}, note_id={self.note_id})>"


class User(UUIDMixin, TimestampMixin, Base):
    """
    User database model.

    Emails are stored trimmed and lowercased, so lookups by email are
    case-insensitive as long as callers normalize with ``normalize_email``.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(120),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(320),
        unique=True,
        index=True,
        nullable=False,
    )
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    avatar_url: Mapped[str] = mapped_column(
        String(2048),
        default="",
        nullable=False,
    )
    is_admin: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )
    is_blocked: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )

    saved_entries: Mapped[list[SavedNote]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=SavedNote.created_at,
    )

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        return normalize_email(value)

    @property
    def saved_note_ids(self) -> set[str]:
        """IDs of the notes this user has saved."""
        return {entry.note_id for entry in self.saved_entries}

    def toggle_saved(self, note_id: str) -> bool:
        """
        Toggle membership of ``note_id`` in the saved set.

        Returns:
            True if the note is saved after the call, False if it was removed
        """
        for entry in self.saved_entries:
            if entry.note_id == note_id:
                self.saved_entries.remove(entry)
                return False
        self.saved_entries.append(SavedNote(note_id=note_id))
        return True

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r})>"


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookup."""
    return email.strip().lower()
