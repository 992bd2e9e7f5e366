"""Obra repository. Listing filters by client at query level."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from nexus_obra.infrastructure.persistence.models.obra import Obra, obra_responsible
from nexus_obra.infrastructure.persistence.models.user import User
from nexus_obra.infrastructure.persistence.repositories.base import BaseRepository


class ObraRepository(BaseRepository[Obra]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Obra)

    async def list_obras(self, client_id: str | None = None) -> list[Obra]:
        """Return all obras, or only those of client_id when given (newest first)."""
        stmt = select(Obra)
        if client_id is not None:
            stmt = stmt.where(Obra.client_id == client_id)
        result = await self.db.execute(stmt.order_by(Obra.created_at.desc(), Obra.id))
        return list(result.scalars().all())

    async def create_obra(
        self, fields: dict[str, Any], responsible_users: list[User]
    ) -> Obra:
        obra = Obra(**fields, responsible_users=list(responsible_users))
        return await self.create(obra)

    async def update_obra(
        self,
        obra: Obra,
        fields: dict[str, Any],
        responsible_users: list[User] | None = None,
    ) -> Obra:
        """Apply column changes and, when given, replace the responsible user set."""
        for key, value in fields.items():
            setattr(obra, key, value)
        if responsible_users is not None:
            obra.responsible_users = list(responsible_users)
        return await self.update(obra)

    async def drop_responsible(
        self, client_id: str, user_ids: Iterable[str] | None = None
    ) -> int:
        """Unlink responsible users from the obras of client_id.

        With user_ids, only those users are unlinked; otherwise every link goes.
        Returns the number of links removed.
        """
        stmt = delete(obra_responsible).where(
            obra_responsible.c.obra_id.in_(select(Obra.id).where(Obra.client_id == client_id))
        )
        if user_ids is not None:
            stmt = stmt.where(obra_responsible.c.user_id.in_(list(user_ids)))
        result = await self.db.execute(stmt)
        return result.rowcount or 0
