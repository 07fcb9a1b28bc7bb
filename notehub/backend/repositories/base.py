"""
Base Repository.

Base class for the note and user repositories: lookup by id, add,
delete and flush.
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notehub.backend.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with the operations every NoteHub repository shares.

    Subclasses should set the model class:

        class UserRepository(BaseRepository[User]):
            model = User

    Lookups return None for a missing row; the services decide which
    not-found error that becomes.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id_or_none(self, id: str | UUID) -> ModelType | None:
        """Get a single record by ID, returning None if not found."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == str(id))
        )
        return result.scalar_one_or_none()

    async def add(self, instance: ModelType) -> ModelType:
        """Persist a new instance and flush so generated fields are populated."""
        self.session.add(instance)
        await self.session.flush()
        return instance

    async def delete(self, instance: ModelType) -> None:
        """Delete a loaded instance."""
        await self.session.delete(instance)
        await self.session.flush()

    async def flush(self) -> None:
        """Flush pending changes on loaded instances."""
        await self.session.flush()

    async def _scalars(self, statement: Any) -> list[ModelType]:
        result = await self.session.execute(statement)
        return list(result.scalars().unique().all())
