"""Signed upload credentials for direct browser uploads to Cloudinary."""

import hashlib

from nexus_obra.application.dtos.upload import UploadSignature
from nexus_obra.core.config import Settings
from nexus_obra.domain.enums import UploadResourceType
from nexus_obra.domain.exceptions import UploadNotConfiguredException
from nexus_obra.shared.utils.datetime import to_unix_seconds, utc_now


def sign_params(params: dict[str, str | int], api_secret: str) -> str:
    """Cloudinary signature: SHA-1 hex of sorted "k=v" pairs joined by "&", then the secret."""
    to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


class UploadSignatureService:
    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def _folder_for(self, resource_type: UploadResourceType) -> str:
        if resource_type is UploadResourceType.RAW:
            return self._settings.cloudinary_raw_folder
        return self._settings.cloudinary_image_folder

    def sign(
        self,
        resource_type: UploadResourceType = UploadResourceType.IMAGE,
        *,
        timestamp: int | None = None,
    ) -> UploadSignature:
        """Return a signature over folder and timestamp.

        Raises:
            UploadNotConfiguredException: cloud name, API key or API secret is missing.
        """
        settings = self._settings
        if not settings.cloudinary_configured:
            raise UploadNotConfiguredException()
        ts = timestamp if timestamp is not None else to_unix_seconds(utc_now())
        folder = self._folder_for(resource_type)
        signature = sign_params(
            {"folder": folder, "timestamp": ts},
            settings.cloudinary_api_secret.get_secret_value(),
        )
        return UploadSignature(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            timestamp=ts,
            signature=signature,
            folder=folder,
            resource_type=resource_type,
        )
