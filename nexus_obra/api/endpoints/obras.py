"""Obra (project) API. Reads are open to any authenticated caller in scope;
mutations require masterAdmin or Admin."""

from typing import Annotated

from fastapi import APIRouter, Depends

from nexus_obra.api.dependencies import (
    CurrentContext,
    ManagerContext,
    get_obra_service,
    get_obra_service_for_write,
)
from nexus_obra.application.services import ObraService
from nexus_obra.schemas.base import MessageResponse
from nexus_obra.schemas.obra import ObraCreate, ObraResponse, ObraUpdate

router = APIRouter()

ReadObras = Annotated[ObraService, Depends(get_obra_service)]
WriteObras = Annotated[ObraService, Depends(get_obra_service_for_write)]


@router.get("", response_model=list[ObraResponse])
async def list_obras(ctx: CurrentContext, obra_svc: ReadObras):
    """masterAdmin: every obra. Others: obras of their own client (filtered in the query)."""
    return await obra_svc.list_obras(ctx)


@router.post("", response_model=ObraResponse, status_code=201)
@router.post("/createObra", response_model=ObraResponse, status_code=201, include_in_schema=False)
async def create_obra(body: ObraCreate, ctx: ManagerContext, obra_svc: WriteObras):
    return await obra_svc.create_obra(ctx, body.model_dump(exclude_none=True))


@router.get("/{obra_id}", response_model=ObraResponse)
async def get_obra(obra_id: str, ctx: CurrentContext, obra_svc: ReadObras):
    return await obra_svc.get_obra(ctx, obra_id)


@router.patch("/{obra_id}", response_model=ObraResponse)
async def update_obra(obra_id: str, body: ObraUpdate, ctx: ManagerContext, obra_svc: WriteObras):
    fields = body.model_dump(exclude_unset=True, exclude_none=True)
    return await obra_svc.update_obra(ctx, obra_id, fields)


@router.delete("/{obra_id}", response_model=MessageResponse)
async def delete_obra(obra_id: str, ctx: ManagerContext, obra_svc: WriteObras):
    await obra_svc.delete_obra(ctx, obra_id)
    return MessageResponse(message="Obra deleted successfully.")
