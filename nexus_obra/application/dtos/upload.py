"""DTOs for signed upload credentials."""

from dataclasses import dataclass

from nexus_obra.domain.enums import UploadResourceType


@dataclass(frozen=True)
class UploadSignature:
    cloud_name: str
    api_key: str
    timestamp: int
    signature: str
    folder: str
    resource_type: UploadResourceType
