"""Base repository: generic get/list/create/update/delete on one session."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from nexus_obra.infrastructure.persistence.database import Base
from nexus_obra.infrastructure.persistence.integrity import to_duplicate_exception

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, get_all, create, update and delete.

    Writes flush immediately so unique violations surface inside the request
    transaction; they are re-raised as DuplicateResourceException when the
    violated constraint is known. Services pre-check uniqueness so a conflict
    normally never reaches the database.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def get_all(self) -> list[ModelType]:
        result = await self.db.execute(select(self.model))
        return list(result.scalars().all())

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and return it refreshed from the database."""
        self.db.add(obj)
        await self._flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Flush pending changes on an attached record and refresh it."""
        await self._flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        await self.db.delete(obj)
        await self._flush()

    async def _flush(self) -> None:
        """Flush pending changes; translate unique violations."""
        try:
            await self.db.flush()
        except IntegrityError as e:
            duplicate = to_duplicate_exception(e)
            if duplicate is not None:
                raise duplicate from e
            raise
