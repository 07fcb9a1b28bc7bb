"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from itertools import count
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from notehub.backend.core.utils import utc_now
from notehub.backend.models.note import Note
from notehub.backend.models.user import User

_ids = count(1)


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Provides a fully mocked AsyncSession with common methods.

    Usage:
        def test_repository(mock_db_session: AsyncMock):
            repo = UserRepository(mock_db_session)
            # Test repository methods
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    session.get = AsyncMock()
    return session


@pytest.fixture
def mock_db_result() -> MagicMock:
    """
    Mock database query result.

    Use this to mock the result of session.execute().

    Usage:
        def test_query(mock_db_session, mock_db_result):
            mock_db_result.scalar_one_or_none.return_value = user
            mock_db_session.execute.return_value = mock_db_result
    """
    result = MagicMock()
    result.scalar_one_or_none = MagicMock(return_value=None)
    result.scalars = MagicMock()
    result.scalars.return_value.unique.return_value.all = MagicMock(return_value=[])
    return result


# =============================================================================
# Model Factories
# =============================================================================


@pytest.fixture
def make_user() -> Callable[..., User]:
    """
    Build a transient User with every column populated.

    Usage:
        def test_something(make_user):
            ana = make_user(name="Ana")
    """

    def _make(**overrides: Any) -> User:
        n = next(_ids)
        values = {
            "id": f"user-{n}",
            "name": f"User {n}",
            "email": f"user{n}@example.com",
            "hashed_password": "not-a-real-hash",
            "avatar_url": "",
            "is_admin": False,
            "is_blocked": False,
            "created_at": utc_now(),
            "updated_at": utc_now(),
            "saved_entries": [],
        }
        values.update(overrides)
        return User(**values)

    return _make


@pytest.fixture
def make_note(make_user: Callable[..., User]) -> Callable[..., Note]:
    """Build a transient Note with empty reaction sets and no comments."""

    def _make(owner: User | None = None, tags: list[str] | None = None, **overrides: Any) -> Note:
        owner = owner or make_user()
        n = next(_ids)
        values = {
            "id": f"note-{n}",
            "title": f"Note {n}",
            "description": "",
            "file_url": f"https://files.example.com/{n}.pdf",
            "uploaded_by": owner,
            "uploaded_by_id": owner.id,
            "liked_by": set(),
            "disliked_by": set(),
            "comments": [],
            "reports": [],
            "created_at": utc_now(),
            "updated_at": utc_now(),
        }
        values.update(overrides)
        note = Note(**values)
        note.set_tags(tags or [])
        return note

    return _make


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.logger", mock_logger):
                # Test code that logs
                mock_logger.info.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
