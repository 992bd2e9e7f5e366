"""Client (tenant) application service: scoped reads, updates and deletion."""

from __future__ import annotations

import logging
from typing import Any

from nexus_obra.application.dtos.auth import AuthContext
from nexus_obra.application.interfaces.repositories import (
    IClientRepository,
    IObraRepository,
    IUserRepository,
)
from nexus_obra.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from nexus_obra.domain.policy import enforce_tenant_access, is_unrestricted

logger = logging.getLogger(__name__)

CLIENT_FORBIDDEN_MESSAGE = "Access denied. Insufficient permissions for this client."

# Fields an Admin may change on their own client.
SELF_SERVICE_FIELDS = frozenset({"client_name", "client_logo", "client_email", "client_phone"})
# Fields only a masterAdmin may change.
MASTER_ONLY_FIELDS = frozenset({"client_admin_id", "sub_status"})


def _normalize(fields: dict[str, Any]) -> dict[str, Any]:
    data = dict(fields)
    if data.get("client_name") is not None:
        data["client_name"] = data["client_name"].strip().lower()
    if "client_email" in data and data["client_email"] is not None:
        data["client_email"] = data["client_email"].strip().lower() or None
    if "client_phone" in data and data["client_phone"] is not None:
        data["client_phone"] = data["client_phone"].strip() or None
    return data


class ClientService:
    def __init__(
        self,
        client_repo: IClientRepository,
        user_repo: IUserRepository,
        obra_repo: IObraRepository,
    ) -> None:
        self._client_repo = client_repo
        self._user_repo = user_repo
        self._obra_repo = obra_repo

    def authorize_client(self, ctx: AuthContext, client_id: str) -> None:
        """Tenant check on the path id itself (runs before the lookup)."""
        enforce_tenant_access(
            ctx.role,
            ctx.client_id,
            client_id,
            resource_type="Client",
            resource_id=client_id,
            forbidden_message=CLIENT_FORBIDDEN_MESSAGE,
        )

    async def _get_or_404(self, client_id: str) -> Any:
        client = await self._client_repo.get_by_id(client_id)
        if client is None:
            raise ResourceNotFoundException("Client", client_id)
        return client

    async def list_clients(self, ctx: AuthContext) -> list[Any]:
        if is_unrestricted(ctx.role):
            return await self._client_repo.list_all()
        if not ctx.client_id:
            raise AuthorizationException("Access denied. No client association.")
        client = await self._client_repo.get_by_id(ctx.client_id)
        return [client] if client is not None else []

    async def get_client(self, ctx: AuthContext, client_id: str) -> Any:
        self.authorize_client(ctx, client_id)
        return await self._get_or_404(client_id)

    async def get_own_client(self, ctx: AuthContext) -> Any:
        if not ctx.client_id:
            raise ValidationException("Client association missing.")
        return await self._get_or_404(ctx.client_id)

    async def list_members(self, ctx: AuthContext, client_id: str) -> list[Any]:
        client = await self.get_client(ctx, client_id)
        return list(client.members)

    async def update_own_client(self, ctx: AuthContext, fields: dict[str, Any]) -> Any:
        """Admin self-service update restricted to name, logo, email and phone."""
        if not ctx.client_id:
            raise ValidationException("Client association missing.")
        changes = {k: v for k, v in fields.items() if k in SELF_SERVICE_FIELDS}
        if not changes:
            raise ValidationException("No valid fields to update.")
        client = await self._get_or_404(ctx.client_id)
        return await self._apply(client, changes)

    async def update_client(
        self, ctx: AuthContext, client_id: str, fields: dict[str, Any]
    ) -> Any:
        """Update a client in scope. clientAdmin and subStatus are masterAdmin-only.

        A new designated admin must already be a member of the client.
        """
        self.authorize_client(ctx, client_id)
        if not fields:
            raise ValidationException("No valid fields to update.")
        if not is_unrestricted(ctx.role) and MASTER_ONLY_FIELDS.intersection(fields):
            raise AuthorizationException(
                "Access denied. Only masterAdmin can change clientAdmin or subStatus."
            )
        client = await self._get_or_404(client_id)
        new_admin = fields.get("client_admin_id")
        if new_admin is not None and new_admin not in client.member_ids:
            raise ValidationException(
                "Client admin must be a member of the client.", field="clientAdmin"
            )
        return await self._apply(client, fields)

    async def _apply(self, client: Any, fields: dict[str, Any]) -> Any:
        changes = _normalize(fields)
        await self._client_repo.ensure_unique(
            client_name=changes.get("client_name"),
            client_email=changes.get("client_email"),
            client_phone=changes.get("client_phone"),
            exclude_id=client.id,
        )
        for key, value in changes.items():
            setattr(client, key, value)
        updated = await self._client_repo.update(client)
        logger.info("Client updated: client_id=%s fields=%s", client.id, sorted(changes))
        return updated

    async def delete_client(self, ctx: AuthContext, client_id: str) -> None:
        """Unset clientId on every member, then delete the client. Users are never deleted.

        The client's obras survive without a client and lose their responsible users.
        """
        client = await self._get_or_404(client_id)
        await self._obra_repo.drop_responsible(client.id)
        unlinked = await self._user_repo.clear_client(client.id)
        await self._client_repo.delete(client)
        logger.info(
            "Client deleted: client_id=%s unlinked_users=%s by=%s",
            client_id,
            unlinked,
            ctx.user_id,
        )
