"""Obra (project) API schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import Field, StringConstraints

from nexus_obra.domain.enums import ObraStatus
from nexus_obra.schemas.base import CamelModel, EntityId, RequestModel

TrimmedName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
OptionalText = Annotated[str, StringConstraints(strip_whitespace=True)]


class ObraCreate(RequestModel):
    obra_name: TrimmedName
    obra_description: OptionalText | None = None
    obra_location: OptionalText | None = None
    obra_status: ObraStatus = ObraStatus.PLANNING
    start_date: datetime | None = None
    end_date: datetime | None = None
    budget: float | None = Field(default=None, ge=0)
    client_id: EntityId
    responsible_users: list[EntityId] = Field(default_factory=list)


class ObraUpdate(RequestModel):
    """Partial update; an empty body is rejected."""

    obra_name: TrimmedName | None = None
    obra_description: OptionalText | None = None
    obra_location: OptionalText | None = None
    obra_status: ObraStatus | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    budget: float | None = Field(default=None, ge=0)
    client_id: EntityId | None = None
    responsible_users: list[EntityId] | None = None


class ObraClient(CamelModel):
    id: str
    client_name: str


class ObraUser(CamelModel):
    id: str
    username: str


class ObraResponse(CamelModel):
    id: str
    obra_name: str
    obra_description: str | None = None
    obra_location: str | None = None
    obra_status: ObraStatus
    start_date: datetime | None = None
    end_date: datetime | None = None
    budget: float | None = None
    client_id: str | None = None
    client: ObraClient | None = None
    responsible_users: list[ObraUser] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
