"""Upload signature API schemas."""

from nexus_obra.domain.enums import UploadResourceType
from nexus_obra.schemas.base import CamelModel, RequestModel


class UploadSignatureRequest(RequestModel):
    resource_type: UploadResourceType = UploadResourceType.IMAGE


class UploadSignatureResponse(CamelModel):
    cloud_name: str
    api_key: str
    timestamp: int
    signature: str
    folder: str
    resource_type: UploadResourceType
