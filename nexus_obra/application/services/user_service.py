"""User application service: listing, signup and password reset."""

from __future__ import annotations

import logging
from typing import Any

from nexus_obra.application.dtos.auth import AuthContext
from nexus_obra.application.interfaces.repositories import (
    IClientRepository,
    IUserRepository,
)
from nexus_obra.domain.enums import Role
from nexus_obra.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
)
from nexus_obra.domain.policy import (
    MANAGER_ROLES,
    enforce_role,
    enforce_tenant_access,
    is_unrestricted,
)

logger = logging.getLogger(__name__)

NO_CLIENT_MESSAGE = "Access denied. No client association."


class UserService:
    def __init__(self, user_repo: IUserRepository, client_repo: IClientRepository) -> None:
        self._user_repo = user_repo
        self._client_repo = client_repo

    async def list_users(self, ctx: AuthContext) -> list[Any]:
        """masterAdmin sees every user; everyone else sees the users of their own client."""
        if is_unrestricted(ctx.role):
            users = await self._user_repo.list_all()
            if not users:
                raise ResourceNotFoundException("User", message="No users found!")
            return users
        if not ctx.client_id:
            raise AuthorizationException(NO_CLIENT_MESSAGE)
        users = await self._user_repo.list_by_client(ctx.client_id)
        if not users:
            raise ResourceNotFoundException(
                "User", message="No users found for this client!"
            )
        return users

    async def get_me(self, ctx: AuthContext) -> Any:
        user = await self._user_repo.get_by_id(ctx.user_id)
        if user is None:
            raise ResourceNotFoundException("User", ctx.user_id, message="User not found!")
        return user

    async def signup(
        self,
        ctx: AuthContext,
        username: str,
        password: str,
        role: Role = Role.USER,
        *,
        reset_password: bool = True,
    ) -> Any:
        """Create a user on behalf of a masterAdmin or Admin.

        Users created by an Admin join the Admin's client; an Admin can never
        create a masterAdmin. Users created by a masterAdmin have no client.
        """
        enforce_role(ctx.role, MANAGER_ROLES)
        client = None
        if not is_unrestricted(ctx.role):
            if role is Role.MASTER_ADMIN:
                raise AuthorizationException(
                    "Access denied. Admin cannot create a masterAdmin."
                )
            if not ctx.client_id:
                raise AuthorizationException(NO_CLIENT_MESSAGE)
            client = await self._client_repo.get_by_id(ctx.client_id)
            if client is None:
                raise ResourceNotFoundException("Client", ctx.client_id)

        user = await self._user_repo.create_user(
            username,
            password,
            role,
            reset_password=reset_password,
            client_id=client.id if client is not None else None,
        )
        if client is not None:
            await self._client_repo.add_member(client, user)
        logger.info(
            "User created: user_id=%s role=%s client_id=%s by=%s",
            user.id,
            role.value,
            user.client_id,
            ctx.user_id,
        )
        return user

    async def reset_password(
        self, ctx: AuthContext, user_id: str, new_password: str
    ) -> Any:
        """Set a new password and clear the forced-reset flag.

        Allowed for the user themself, a masterAdmin, or an Admin of the user's client.
        """
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("User", user_id, message="User not found!")
        if ctx.user_id != user.id:
            enforce_role(ctx.role, MANAGER_ROLES)
            enforce_tenant_access(
                ctx.role,
                ctx.client_id,
                user.client_id,
                resource_type="User",
                resource_id=user_id,
            )
        updated = await self._user_repo.update_password(user, new_password)
        logger.info("Password reset: user_id=%s by=%s", user.id, ctx.user_id)
        return updated
