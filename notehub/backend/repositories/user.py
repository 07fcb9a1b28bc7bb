"""
User Repository.

Data access layer for users.
"""

from sqlalchemy import select

from notehub.backend.models.user import User, normalize_email
from notehub.backend.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model."""

    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Look up a user by email, case-insensitively."""
        result = await self.session.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        result = await self.session.execute(
            select(User.id).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none() is not None

    async def create_user(self, name: str, email: str, hashed_password: str) -> User:
        """Create a user with an empty saved-notes set."""
        user = User(
            name=name,
            email=email,
            hashed_password=hashed_password,
            saved_entries=[],
        )
        return await self.add(user)

    async def list_all(self) -> list[User]:
        """All users, oldest first."""
        return await self._scalars(select(User).order_by(User.created_at.asc()))
