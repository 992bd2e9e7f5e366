"""Client (tenant) API: provisioning, scoped reads and updates, member management.

Routes under /me act on the caller's own client; routes under /{client_id}
run the tenant check on the path id before looking the client up.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from nexus_obra.api.dependencies import (
    AdminContext,
    CurrentContext,
    ManagerContext,
    MasterAdminContext,
    get_client_service,
    get_client_service_for_write,
    get_membership_service,
    get_provisioning_saga,
)
from nexus_obra.application.dtos.auth import AuthContext
from nexus_obra.application.services import (
    ClientProvisioningSaga,
    ClientService,
    MembershipService,
)
from nexus_obra.domain.exceptions import ValidationException
from nexus_obra.schemas.base import MessageResponse
from nexus_obra.schemas.client import (
    ClientCreateRequest,
    ClientCreateResponse,
    ClientMember,
    ClientResponse,
    ClientSelfUpdate,
    ClientUpdate,
    MemberRequest,
)

router = APIRouter()

ReadClients = Annotated[ClientService, Depends(get_client_service)]
WriteClients = Annotated[ClientService, Depends(get_client_service_for_write)]
Members = Annotated[MembershipService, Depends(get_membership_service)]


def _own_client_id(ctx: AuthContext) -> str:
    if not ctx.client_id:
        raise ValidationException("Client association missing.")
    return ctx.client_id


@router.get("", response_model=list[ClientResponse])
async def list_clients(ctx: CurrentContext, client_svc: ReadClients):
    """masterAdmin: every client sorted by name. Others: their own client only."""
    return await client_svc.list_clients(ctx)


@router.post("", response_model=ClientCreateResponse, status_code=201)
@router.post(
    "/createClient",
    response_model=ClientCreateResponse,
    status_code=201,
    include_in_schema=False,
)
async def create_client(
    body: ClientCreateRequest,
    ctx: MasterAdminContext,
    saga: Annotated[ClientProvisioningSaga, Depends(get_provisioning_saga)],
):
    """Create a client and its Admin user (forced password reset on first login)."""
    result = await saga.run(
        body.client_name,
        body.admin_username,
        body.admin_password,
        client_logo=body.client_logo,
    )
    return ClientCreateResponse(client_id=result.client_id, admin_id=result.admin_id)


@router.get("/me", response_model=ClientResponse)
async def get_my_client(ctx: CurrentContext, client_svc: ReadClients):
    return await client_svc.get_own_client(ctx)


@router.patch("/me", response_model=ClientResponse)
async def update_my_client(body: ClientSelfUpdate, ctx: AdminContext, client_svc: WriteClients):
    """Admin self-service: clientName, clientLogo, clientEmail, clientPhone."""
    fields = body.model_dump(exclude_unset=True, exclude_none=True)
    return await client_svc.update_own_client(ctx, fields)


@router.get("/me/members", response_model=list[ClientMember])
async def list_my_members(ctx: CurrentContext, client_svc: ReadClients):
    client = await client_svc.get_own_client(ctx)
    return client.members


@router.post("/me/members", response_model=ClientResponse)
async def add_my_member(body: MemberRequest, ctx: AdminContext, members: Members):
    return await members.add_member(_own_client_id(ctx), body.user_id)


@router.delete("/me/members/{user_id}", response_model=ClientResponse)
async def remove_my_member(user_id: str, ctx: AdminContext, members: Members):
    return await members.remove_member(_own_client_id(ctx), user_id)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(client_id: str, ctx: CurrentContext, client_svc: ReadClients):
    return await client_svc.get_client(ctx, client_id)


@router.patch("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: str,
    body: ClientUpdate,
    ctx: ManagerContext,
    client_svc: WriteClients,
):
    """Update a client in scope. clientAdmin and subStatus require masterAdmin."""
    fields = body.model_dump(exclude_unset=True, exclude_none=True)
    return await client_svc.update_client(ctx, client_id, fields)


@router.delete("/{client_id}", response_model=MessageResponse)
async def delete_client(client_id: str, ctx: MasterAdminContext, client_svc: WriteClients):
    """Unlink every member, then delete the client. Users and obras are kept."""
    await client_svc.delete_client(ctx, client_id)
    return MessageResponse(message="Client deleted successfully.")


@router.get("/{client_id}/members", response_model=list[ClientMember])
async def list_members(client_id: str, ctx: CurrentContext, client_svc: ReadClients):
    return await client_svc.list_members(ctx, client_id)


@router.post("/{client_id}/members", response_model=ClientResponse)
async def add_member(
    client_id: str,
    body: MemberRequest,
    ctx: ManagerContext,
    client_svc: WriteClients,
    members: Members,
):
    client_svc.authorize_client(ctx, client_id)
    return await members.add_member(client_id, body.user_id)


@router.delete("/{client_id}/members/{user_id}", response_model=ClientResponse)
async def remove_member(
    client_id: str,
    user_id: str,
    ctx: ManagerContext,
    client_svc: WriteClients,
    members: Members,
):
    client_svc.authorize_client(ctx, client_id)
    return await members.remove_member(client_id, user_id)
