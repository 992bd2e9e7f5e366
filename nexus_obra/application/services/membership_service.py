"""Client member management (add/remove with set semantics)."""

from __future__ import annotations

import logging
from typing import Any

from nexus_obra.application.interfaces.repositories import (
    IClientRepository,
    IObraRepository,
    IUserRepository,
)
from nexus_obra.domain.enums import Role
from nexus_obra.domain.exceptions import (
    MembershipConflictException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)


class MembershipService:
    """Keeps User.client_id and the client's member set in step."""

    def __init__(
        self,
        user_repo: IUserRepository,
        client_repo: IClientRepository,
        obra_repo: IObraRepository,
    ) -> None:
        self._user_repo = user_repo
        self._client_repo = client_repo
        self._obra_repo = obra_repo

    async def _get_client(self, client_id: str) -> Any:
        client = await self._client_repo.get_by_id(client_id)
        if client is None:
            raise ResourceNotFoundException("Client", client_id)
        return client

    async def add_member(self, client_id: str, user_id: str) -> Any:
        """Attach user to client. Re-adding a current member is a no-op.

        Raises:
            ResourceNotFoundException: client or user does not exist.
            ValidationException: user is a masterAdmin.
            MembershipConflictException: user belongs to a different client.
        """
        client = await self._get_client(client_id)
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("User", user_id)
        if user.role == Role.MASTER_ADMIN.value:
            raise ValidationException(
                "masterAdmin users cannot be client members.", field="userId"
            )
        if user.client_id and user.client_id != client.id:
            raise MembershipConflictException(user.id)

        if user.client_id != client.id:
            await self._user_repo.set_client(user, client.id)
        client = await self._client_repo.add_member(client, user)
        logger.info("Member added: client_id=%s user_id=%s", client.id, user.id)
        return client

    async def remove_member(self, client_id: str, user_id: str) -> Any:
        """Detach user from client and from the responsible lists of its obras.

        Raises:
            ResourceNotFoundException: client does not exist, or user is not a member.
            ValidationException: user is the client's designated admin.
        """
        client = await self._get_client(client_id)
        if user_id == client.client_admin_id:
            raise ValidationException(
                "The client admin cannot be removed from members.", field="userId"
            )
        user = await self._user_repo.get_by_id(user_id)
        if user is None or user.id not in client.member_ids:
            raise ResourceNotFoundException(
                "User", user_id, message="User is not a member of this client."
            )

        client = await self._client_repo.remove_member(client, user)
        if user.client_id == client.id:
            await self._user_repo.set_client(user, None)
        await self._obra_repo.drop_responsible(client.id, [user.id])
        logger.info("Member removed: client_id=%s user_id=%s", client.id, user.id)
        return client
