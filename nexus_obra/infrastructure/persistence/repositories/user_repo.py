"""User repository: credential store lookups, creation with hashing, tenant links."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from nexus_obra.domain.enums import Role
from nexus_obra.domain.exceptions import DuplicateResourceException
from nexus_obra.infrastructure.persistence.models.user import User
from nexus_obra.infrastructure.persistence.repositories.base import BaseRepository
from nexus_obra.infrastructure.security.password import get_password_hash, verify_password


class UserRepository(BaseRepository[User]):
    """Users are global (username unique across clients); client_id is the tenant link."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_many(self, user_ids: Iterable[str]) -> list[User]:
        """Return the users whose id is in user_ids (missing ids are simply absent)."""
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return []
        result = await self.db.execute(select(User).where(User.id.in_(ids)))
        return list(result.scalars().all())

    async def list_all(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.username))
        return list(result.scalars().all())

    async def list_by_client(self, client_id: str) -> list[User]:
        result = await self.db.execute(
            select(User).where(User.client_id == client_id).order_by(User.username)
        )
        return list(result.scalars().all())

    async def create_user(
        self,
        username: str,
        password: str,
        role: Role = Role.USER,
        *,
        reset_password: bool = True,
        client_id: str | None = None,
    ) -> User:
        """Hash password off the event loop and insert the user.

        Raises:
            DuplicateResourceException: username already taken (field "username").
        """
        if await self.get_by_username(username) is not None:
            raise DuplicateResourceException("username", "Username already exists")
        hashed = await asyncio.to_thread(get_password_hash, password)
        user = User(
            username=username,
            hashed_password=hashed,
            role=role.value,
            reset_password=reset_password,
            client_id=client_id,
        )
        return await self.create(user)

    async def check_password(self, user: User, password: str) -> bool:
        return await asyncio.to_thread(verify_password, password, user.hashed_password)

    async def update_password(self, user: User, new_password: str) -> User:
        """Store a new hash and clear the forced-reset flag."""
        user.hashed_password = await asyncio.to_thread(get_password_hash, new_password)
        user.reset_password = False
        return await self.update(user)

    async def set_client(self, user: User, client_id: str | None) -> User:
        user.client_id = client_id
        return await self.update(user)

    async def clear_client(self, client_id: str) -> int:
        """Unset client_id on every user of client_id. Returns the number of rows changed."""
        result = await self.db.execute(
            update(User)
            .where(User.client_id == client_id)
            .values(client_id=None)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0

    async def delete_by_id(self, user_id: str) -> bool:
        """Delete the user if present. Returns False when there was nothing to delete."""
        user = await self.get_by_id(user_id)
        if user is None:
            return False
        await self.delete(user)
        return True
