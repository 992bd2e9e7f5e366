"""Obra (project) application service. Every operation is tenant scoped."""

from __future__ import annotations

import logging
from enum import Enum
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
from nexus_obra.domain.policy import (
    enforce_tenant_access,
    enforce_tenant_reassignment,
    is_unrestricted,
    tenant_matches,
)

logger = logging.getLogger(__name__)

OBRA_FORBIDDEN_MESSAGE = "Access denied. Insufficient permissions for this obra."


class ObraService:
    def __init__(
        self,
        obra_repo: IObraRepository,
        client_repo: IClientRepository,
        user_repo: IUserRepository,
    ) -> None:
        self._obra_repo = obra_repo
        self._client_repo = client_repo
        self._user_repo = user_repo

    async def list_obras(self, ctx: AuthContext) -> list[Any]:
        if is_unrestricted(ctx.role):
            return await self._obra_repo.list_obras()
        if not ctx.client_id:
            raise AuthorizationException("Access denied. No client associated with user.")
        return await self._obra_repo.list_obras(client_id=ctx.client_id)

    async def get_obra(self, ctx: AuthContext, obra_id: str) -> Any:
        """Existence first (404), then tenant scope (403)."""
        obra = await self._obra_repo.get_by_id(obra_id)
        enforce_tenant_access(
            ctx.role,
            ctx.client_id,
            obra.client_id if obra is not None else None,
            resource_type="Obra",
            resource_id=obra_id,
            resource_exists=obra is not None,
            forbidden_message=OBRA_FORBIDDEN_MESSAGE,
        )
        return obra

    async def create_obra(self, ctx: AuthContext, fields: dict[str, Any]) -> Any:
        data = _column_values(fields)
        responsible_ids = data.pop("responsible_users", None) or []
        client_id = data["client_id"]
        if not is_unrestricted(ctx.role) and not tenant_matches(ctx.client_id, client_id):
            raise AuthorizationException(
                "Access denied. Cannot create obra for another client."
            )
        if await self._client_repo.get_by_id(client_id) is None:
            raise ResourceNotFoundException("Client", client_id)
        _check_dates(data)
        responsible = await self._resolve_responsible(responsible_ids, client_id)
        obra = await self._obra_repo.create_obra(data, responsible)
        logger.info("Obra created: obra_id=%s client_id=%s", obra.id, client_id)
        return obra

    async def update_obra(
        self, ctx: AuthContext, obra_id: str, fields: dict[str, Any]
    ) -> Any:
        if not fields:
            raise ValidationException("No valid fields to update.")
        obra = await self.get_obra(ctx, obra_id)
        data = _column_values(fields)
        responsible_ids = data.pop("responsible_users", None)

        target_client_id = obra.client_id
        if "client_id" in data:
            target_client_id = data["client_id"]
            enforce_tenant_reassignment(ctx.role, ctx.client_id, target_client_id)
            if await self._client_repo.get_by_id(target_client_id) is None:
                raise ResourceNotFoundException("Client", target_client_id)

        _check_dates(
            {
                "start_date": data.get("start_date", obra.start_date),
                "end_date": data.get("end_date", obra.end_date),
            }
        )
        responsible = None
        if responsible_ids is not None:
            responsible = await self._resolve_responsible(responsible_ids, target_client_id)
        elif target_client_id != obra.client_id:
            # Current responsible users must follow the obra to its new client.
            await self._resolve_responsible(
                [u.id for u in obra.responsible_users], target_client_id
            )
        updated = await self._obra_repo.update_obra(obra, data, responsible)
        logger.info("Obra updated: obra_id=%s fields=%s", obra_id, sorted(fields))
        return updated

    async def delete_obra(self, ctx: AuthContext, obra_id: str) -> None:
        obra = await self.get_obra(ctx, obra_id)
        await self._obra_repo.delete(obra)
        logger.info("Obra deleted: obra_id=%s by=%s", obra_id, ctx.user_id)

    async def _resolve_responsible(
        self, user_ids: list[str], client_id: str | None
    ) -> list[Any]:
        """Load responsible users; every one must exist and belong to client_id."""
        wanted = list(dict.fromkeys(user_ids))
        if not wanted:
            return []
        users = await self._user_repo.get_many(wanted)
        if len(users) != len(wanted):
            raise ValidationException(
                "One or more responsible users do not exist.", field="responsibleUsers"
            )
        if any(not tenant_matches(u.client_id, client_id) for u in users):
            raise ValidationException(
                "Responsible users must belong to the obra's client.",
                field="responsibleUsers",
            )
        return users


def _column_values(fields: dict[str, Any]) -> dict[str, Any]:
    """Enum members are stored by value."""
    return {k: v.value if isinstance(v, Enum) else v for k, v in fields.items()}


def _check_dates(data: dict[str, Any]) -> None:
    start, end = data.get("start_date"), data.get("end_date")
    if start is not None and end is not None and _comparable(end) < _comparable(start):
        raise ValidationException("endDate must not be before startDate.", field="endDate")


def _comparable(value: Any) -> Any:
    # SQLite hands back naive datetimes; request payloads may be aware.
    if getattr(value, "tzinfo", None) is not None:
        return value.replace(tzinfo=None) - value.utcoffset()
    return value
