"""Client (tenant) repository: uniqueness checks, member set, deletion."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from nexus_obra.domain.exceptions import DuplicateResourceException
from nexus_obra.infrastructure.persistence.models.client import Client
from nexus_obra.infrastructure.persistence.models.user import User
from nexus_obra.infrastructure.persistence.repositories.base import BaseRepository


def normalize_client_name(name: str) -> str:
    """Client names are unique case-insensitively; store them trimmed and lowercased."""
    return name.strip().lower()


class ClientRepository(BaseRepository[Client]):
    """Client rows with their members eagerly loaded."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Client)

    async def list_all(self) -> list[Client]:
        result = await self.db.execute(select(Client).order_by(Client.client_name))
        return list(result.scalars().all())

    async def ensure_unique(
        self,
        *,
        client_name: str | None = None,
        client_email: str | None = None,
        client_phone: str | None = None,
        exclude_id: str | None = None,
    ) -> None:
        """Raise DuplicateResourceException for the first value already used by another client.

        Null email/phone never conflict.
        """
        checks = (
            ("clientName", Client.client_name, client_name),
            ("clientEmail", Client.client_email, client_email),
            ("clientPhone", Client.client_phone, client_phone),
        )
        for field, column, value in checks:
            if value is None:
                continue
            stmt = select(Client.id).where(column == value)
            if exclude_id is not None:
                stmt = stmt.where(Client.id != exclude_id)
            result = await self.db.execute(stmt.limit(1))
            if result.scalar_one_or_none() is not None:
                raise DuplicateResourceException(field)

    async def create_client(
        self,
        client_name: str,
        admin: User,
        *,
        client_logo: str | None = None,
    ) -> Client:
        """Insert the client with admin as designated admin and first member."""
        name = normalize_client_name(client_name)
        await self.ensure_unique(client_name=name)
        client = Client(
            client_name=name,
            client_logo=client_logo,
            client_admin_id=admin.id,
            members=[admin],
        )
        return await self.create(client)

    async def add_member(self, client: Client, user: User) -> Client:
        """Add user to the member set. Adding an existing member changes nothing."""
        if user.id not in client.member_ids:
            client.members.append(user)
            return await self.update(client)
        return client

    async def remove_member(self, client: Client, user: User) -> Client:
        client.members = [m for m in client.members if m.id != user.id]
        return await self.update(client)

    async def delete_by_id(self, client_id: str) -> bool:
        client = await self.get_by_id(client_id)
        if client is None:
            return False
        await self.delete(client)
        return True
