"""
Note Model.

A shared link to study notes, with its tags, reactions, comments and
abuse reports. Comments, reports and tags belong to exactly one note and
are deleted with it.
"""

from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Table, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from notehub.backend.models.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin
from notehub.backend.models.user import User

note_likes = Table(
    "note_likes",
    Base.metadata,
    Column("note_id", ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)

note_dislikes = Table(
    "note_dislikes",
    Base.metadata,
    Column("note_id", ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class NoteTag(Base):
    """One tag of a note. Duplicates are allowed; ``position`` keeps input order."""

    __tablename__ = "note_tags"
    # the tag filter is exact match only
    __table_args__ = (Index("ix_note_tags_value", "value", postgresql_using="hash"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    note_id: Mapped[str] = mapped_column(
        ForeignKey("notes.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    position: Mapped[int] = mapped_column(nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False)


class NoteComment(UUIDMixin, CreatedAtMixin, Base):
    """A comment on a note. Append-only."""

    __tablename__ = "note_comments"

    note_id: Mapped[str] = mapped_column(
        ForeignKey("notes.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    author_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)

    author: Mapped[User] = relationship(lazy="selectin")


class NoteReport(UUIDMixin, CreatedAtMixin, Base):
    """An abuse report. At most one per (note, author)."""

    __tablename__ = "note_reports"
    __table_args__ = (
        UniqueConstraint("note_id", "author_id", name="uq_note_reports_note_author"),
    )

    note_id: Mapped[str] = mapped_column(
        ForeignKey("notes.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    author_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    reason: Mapped[str] = mapped_column(Text, nullable=False)

    author: Mapped[User] = relationship(lazy="selectin")


class Note(UUIDMixin, TimestampMixin, Base):
    """
    Note database model.

    ``liked_by`` and ``disliked_by`` are sets of users; the toggle methods
    keep a user in at most one of them.
    """

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    description: Mapped[str] = mapped_column(
        Text,
        default="",
        nullable=False,
    )
    file_url: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
    )
    uploaded_by_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    uploaded_by: Mapped[User] = relationship(lazy="selectin")
    tag_entries: Mapped[list[NoteTag]] = relationship(
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=NoteTag.position,
    )
    liked_by: Mapped[set[User]] = relationship(
        secondary=note_likes,
        collection_class=set,
        lazy="selectin",
    )
    disliked_by: Mapped[set[User]] = relationship(
        secondary=note_dislikes,
        collection_class=set,
        lazy="selectin",
    )
    comments: Mapped[list[NoteComment]] = relationship(
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=NoteComment.created_at,
    )
    reports: Mapped[list[NoteReport]] = relationship(
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=NoteReport.created_at,
    )

    # -------------------------------------------------------------------------
    # Tags
    # -------------------------------------------------------------------------

    @property
    def tags(self) -> list[str]:
        return [entry.value for entry in self.tag_entries]

    def set_tags(self, values: Iterable[str]) -> None:
        self.tag_entries = [
            NoteTag(position=position, value=value)
            for position, value in enumerate(values)
        ]

    # -------------------------------------------------------------------------
    # Reactions
    # -------------------------------------------------------------------------

    @property
    def liked_by_ids(self) -> set[str]:
        return {user.id for user in self.liked_by}

    @property
    def disliked_by_ids(self) -> set[str]:
        return {user.id for user in self.disliked_by}

    def toggle_like(self, user: User) -> bool:
        """
        Toggle ``user``'s like, clearing any dislike first.

        Returns:
            True if the user likes the note after the call
        """
        return _toggle_reaction(self.liked_by, self.disliked_by, user)

    def toggle_dislike(self, user: User) -> bool:
        """
        Toggle ``user``'s dislike, clearing any like first.

        Returns:
            True if the user dislikes the note after the call
        """
        return _toggle_reaction(self.disliked_by, self.liked_by, user)

    # -------------------------------------------------------------------------
    # Comments and reports
    # -------------------------------------------------------------------------

    def add_comment(self, author: User, text: str, created_at: datetime | None = None) -> NoteComment:
        comment = NoteComment(author=author, author_id=author.id, text=text)
        if created_at is not None:
            comment.created_at = created_at
        self.comments.append(comment)
        return comment

    def has_reported(self, user_id: str) -> bool:
        return any(report.author_id == user_id for report in self.reports)

    def add_report(self, author: User, reason: str, created_at: datetime | None = None) -> NoteReport:
        report = NoteReport(author=author, author_id=author.id, reason=reason)
        if created_at is not None:
            report.created_at = created_at
        self.reports.append(report)
        return report

    @property
    def like_count(self) -> int:
        return len(self.liked_by)

    @property
    def dislike_count(self) -> int:
        return len(self.disliked_by)

    @property
    def comment_count(self) -> int:
        return len(self.comments)

    @property
    def report_count(self) -> int:
        return len(self.reports)

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"


def _toggle_reaction(target: set[User], opposite: set[User], user: User) -> bool:
    _discard_member(opposite, user.id)
    if _discard_member(target, user.id):
        return False
    target.add(user)
    return True


def _discard_member(members: set[User], user_id: str) -> bool:
    for member in list(members):
        if member.id == user_id:
            members.discard(member)
            return True
    return False
