"""
Integration Tests for the Note Repository.

Runs the repository queries against a real database.
"""

from datetime import timedelta

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from notehub.backend.core.utils import utc_now
from notehub.backend.models.note import NoteComment, NoteTag, note_likes
from notehub.backend.repositories.base import BaseRepository
from notehub.backend.repositories.note import NoteRepository, NoteSort
from notehub.backend.repositories.user import UserRepository


@pytest.fixture
def notes(db_session: AsyncSession) -> NoteRepository:
    return NoteRepository(db_session)


@pytest.fixture
def users(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
async def ana(users: UserRepository):
    return await users.create_user(name="Ana", email="Ana@X.com", hashed_password="hash")


@pytest.fixture
async def bob(users: UserRepository):
    return await users.create_user(name="Bob", email="bob@x.com", hashed_password="hash")


async def _note(notes: NoteRepository, owner, title: str, age_minutes: int = 0, **fields):
    note = await notes.create_note(
        uploaded_by=owner,
        title=title,
        description=fields.pop("description", ""),
        file_url=f"https://files.example.com/{title}.pdf",
        tags=fields.pop("tags", []),
    )
    note.created_at = utc_now() - timedelta(minutes=age_minutes)
    await notes.flush()
    return note


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_email_is_stored_normalized(self, users: UserRepository, ana):
        assert ana.email == "ana@x.com"
        assert await users.get_by_email("  ANA@x.com ") is ana
        assert await users.email_exists("ana@X.COM") is True

    @pytest.mark.asyncio
    async def test_list_all_oldest_first(self, users: UserRepository, ana, bob):
        assert [u.id for u in await users.list_all()] == [ana.id, bob.id]

    @pytest.mark.asyncio
    async def test_lookup_by_id_returns_none_when_missing(self, users: UserRepository, ana):
        assert await users.get_by_id_or_none(ana.id) is ana
        assert await users.get_by_id_or_none("no-such-user") is None


class TestBaseRepositorySurface:
    def test_only_shared_operations_are_exposed(self):
        public = {name for name in vars(BaseRepository) if not name.startswith("_")}
        assert public == {"get_by_id_or_none", "add", "delete", "flush"}


class TestSearch:
    """Tests for NoteRepository.search."""

    @pytest.mark.asyncio
    async def test_tie_break_is_newest_first(self, notes: NoteRepository, ana):
        old = await _note(notes, ana, "Old", age_minutes=10)
        new = await _note(notes, ana, "New", age_minutes=1)

        for sort in NoteSort:
            assert [n.id for n in await notes.search(sort=sort)] == [new.id, old.id]

    @pytest.mark.asyncio
    async def test_search_matches_comment_text(self, notes: NoteRepository, ana):
        note = await _note(notes, ana, "Week 1")
        note.add_comment(ana, "Covers EIGENVALUES", created_at=utc_now())
        await notes.flush()

        found = await notes.search(search="eigen")

        assert [n.id for n in found] == [note.id]

    @pytest.mark.asyncio
    async def test_search_and_tag_combine(self, notes: NoteRepository, ana):
        match = await _note(notes, ana, "Algebra I", tags=["Math"])
        await _note(notes, ana, "Algebra II", tags=["Archive"])
        await _note(notes, ana, "Geometry", tags=["Math"])

        found = await notes.search(search="algebra", tag="Math")

        assert [n.id for n in found] == [match.id]

    @pytest.mark.asyncio
    async def test_note_with_many_matching_comments_listed_once(self, notes: NoteRepository, ana):
        note = await _note(notes, ana, "Week 1")
        for text in ("algebra one", "algebra two"):
            note.add_comment(ana, text, created_at=utc_now())
        await notes.flush()

        assert len(await notes.search(search="algebra")) == 1

    @pytest.mark.asyncio
    async def test_sort_by_likes(self, notes: NoteRepository, ana, bob):
        quiet = await _note(notes, ana, "Quiet", age_minutes=1)
        liked = await _note(notes, ana, "Liked", age_minutes=5)
        liked.toggle_like(ana)
        liked.toggle_like(bob)
        await notes.flush()

        assert [n.id for n in await notes.search(sort=NoteSort.LIKES)] == [liked.id, quiet.id]


class TestUserScopedLists:
    @pytest.mark.asyncio
    async def test_liked_and_disliked_by(self, notes: NoteRepository, ana, bob):
        liked = await _note(notes, ana, "Liked")
        disliked = await _note(notes, ana, "Disliked")
        liked.toggle_like(bob)
        disliked.toggle_dislike(bob)
        await notes.flush()

        assert [n.id for n in await notes.list_liked_by(bob.id)] == [liked.id]
        assert [n.id for n in await notes.list_disliked_by(bob.id)] == [disliked.id]
        assert await notes.list_liked_by(ana.id) == []

    @pytest.mark.asyncio
    async def test_list_by_ids_skips_missing(self, notes: NoteRepository, ana):
        note = await _note(notes, ana, "Kept")

        assert [n.id for n in await notes.list_by_ids([note.id, "ghost"])] == [note.id]
        assert await notes.list_by_ids([]) == []

    @pytest.mark.asyncio
    async def test_list_reported(self, notes: NoteRepository, ana, bob):
        reported = await _note(notes, ana, "Reported")
        await _note(notes, ana, "Clean")
        reported.add_report(bob, "Spam", created_at=utc_now())
        await notes.flush()

        assert [n.id for n in await notes.list_reported()] == [reported.id]


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_removes_owned_rows(self, db_session: AsyncSession, notes: NoteRepository, ana, bob):
        note = await _note(notes, ana, "Doomed", tags=["Math", "Exam"])
        note.toggle_like(bob)
        note.add_comment(bob, "bye", created_at=utc_now())
        await notes.flush()

        await notes.delete(note)

        assert await notes.get_by_id_or_none(note.id) is None
        for statement in (
            select(func.count()).select_from(NoteTag),
            select(func.count()).select_from(NoteComment),
            select(func.count()).select_from(note_likes),
        ):
            assert (await db_session.execute(statement)).scalar_one() == 0
