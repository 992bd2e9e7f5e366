"""Application DTOs (no ORM dependency)."""

from nexus_obra.application.dtos.auth import AuthContext, LoginResult
from nexus_obra.application.dtos.client import ClientCreationResult
from nexus_obra.application.dtos.upload import UploadSignature

__all__ = ["AuthContext", "ClientCreationResult", "LoginResult", "UploadSignature"]
