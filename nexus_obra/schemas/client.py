"""Client (tenant) API schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import EmailStr, Field, StringConstraints

from nexus_obra.schemas.base import CamelModel, EntityId, RequestModel

TrimmedName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
OptionalText = Annotated[str, StringConstraints(strip_whitespace=True)]


class ClientCreateRequest(RequestModel):
    """Request body for creating a client together with its Admin user."""

    client_name: TrimmedName
    admin_username: TrimmedName
    admin_password: str = Field(..., min_length=1)
    client_logo: OptionalText | None = None


class ClientCreateResponse(CamelModel):
    message: str = "Client and admin created successfully."
    client_id: str
    admin_id: str


class ClientSelfUpdate(RequestModel):
    """PATCH /clients/me: the fields an Admin may change on their own client."""

    client_name: TrimmedName | None = None
    client_email: EmailStr | None = None
    client_phone: TrimmedName | None = None
    client_logo: OptionalText | None = None


class ClientUpdate(ClientSelfUpdate):
    """PATCH /clients/{clientId}. clientAdmin and subStatus are masterAdmin-only."""

    client_admin_id: EntityId | None = Field(default=None, alias="clientAdmin")
    sub_status: bool | None = None


class MemberRequest(RequestModel):
    user_id: EntityId


class ClientMember(CamelModel):
    id: str
    username: str
    role: str


class ClientResponse(CamelModel):
    id: str
    client_name: str
    client_email: str | None = None
    client_phone: str | None = None
    client_logo: str | None = None
    client_admin_id: str = Field(..., serialization_alias="clientAdmin")
    sub_status: bool
    members: list[ClientMember] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
