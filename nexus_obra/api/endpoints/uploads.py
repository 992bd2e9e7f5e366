"""Signed upload credentials (Cloudinary)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from nexus_obra.api.dependencies import CurrentContext, get_upload_signature_service
from nexus_obra.application.services import UploadSignatureService
from nexus_obra.domain.enums import UploadResourceType
from nexus_obra.schemas.upload import UploadSignatureRequest, UploadSignatureResponse

router = APIRouter()


@router.post("/cloudinary/signature", response_model=UploadSignatureResponse)
async def cloudinary_signature(
    ctx: CurrentContext,
    upload_svc: Annotated[UploadSignatureService, Depends(get_upload_signature_service)],
    body: UploadSignatureRequest | None = None,
):
    """Return a time-stamped signature the browser uses to upload directly."""
    resource_type = body.resource_type if body is not None else UploadResourceType.IMAGE
    signed = upload_svc.sign(resource_type)
    return UploadSignatureResponse(
        cloud_name=signed.cloud_name,
        api_key=signed.api_key,
        timestamp=signed.timestamp,
        signature=signed.signature,
        folder=signed.folder,
        resource_type=signed.resource_type,
    )
