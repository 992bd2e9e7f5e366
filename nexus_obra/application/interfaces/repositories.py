"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill.
Entities are passed through as opaque records; services only read the
attributes they document.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol

from nexus_obra.domain.enums import Role


class IUserRepository(Protocol):
    """Protocol for the user (credential store) repository."""

    async def get_by_id(self, entity_id: str) -> Any | None: ...

    async def get_by_username(self, username: str) -> Any | None: ...

    async def get_many(self, user_ids: Iterable[str]) -> list[Any]: ...

    async def list_all(self) -> list[Any]: ...

    async def list_by_client(self, client_id: str) -> list[Any]: ...

    async def create_user(
        self,
        username: str,
        password: str,
        role: Role = Role.USER,
        *,
        reset_password: bool = True,
        client_id: str | None = None,
    ) -> Any:
        """Create a user; raise DuplicateResourceException on a taken username."""

    async def check_password(self, user: Any, password: str) -> bool: ...

    async def update_password(self, user: Any, new_password: str) -> Any: ...

    async def set_client(self, user: Any, client_id: str | None) -> Any: ...

    async def clear_client(self, client_id: str) -> int:
        """Unset the client reference on every user of client_id."""

    async def delete_by_id(self, user_id: str) -> bool: ...


class IClientRepository(Protocol):
    """Protocol for the client (tenant) repository."""

    async def get_by_id(self, entity_id: str) -> Any | None: ...

    async def list_all(self) -> list[Any]: ...

    async def ensure_unique(
        self,
        *,
        client_name: str | None = None,
        client_email: str | None = None,
        client_phone: str | None = None,
        exclude_id: str | None = None,
    ) -> None:
        """Raise DuplicateResourceException when a value is used by another client."""

    async def create_client(
        self, client_name: str, admin: Any, *, client_logo: str | None = None
    ) -> Any: ...

    async def update(self, obj: Any) -> Any: ...

    async def add_member(self, client: Any, user: Any) -> Any: ...

    async def remove_member(self, client: Any, user: Any) -> Any: ...

    async def delete(self, obj: Any) -> None: ...

    async def delete_by_id(self, client_id: str) -> bool: ...


class IObraRepository(Protocol):
    """Protocol for the obra repository."""

    async def get_by_id(self, entity_id: str) -> Any | None: ...

    async def list_obras(self, client_id: str | None = None) -> list[Any]: ...

    async def create_obra(self, fields: dict[str, Any], responsible_users: list[Any]) -> Any: ...

    async def update_obra(
        self,
        obra: Any,
        fields: dict[str, Any],
        responsible_users: list[Any] | None = None,
    ) -> Any:
        """Apply changes; replace the responsible user set when responsible_users is given."""

    async def delete(self, obj: Any) -> None: ...

    async def drop_responsible(
        self, client_id: str, user_ids: Iterable[str] | None = None
    ) -> int:
        """Unlink responsible users (all, or only user_ids) from client_id's obras."""
