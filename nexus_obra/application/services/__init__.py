"""Application services (use cases)."""

from nexus_obra.application.services.authenticator import Authenticator
from nexus_obra.application.services.client_provisioning import (
    ClientProvisioningSaga,
    ProvisioningState,
)
from nexus_obra.application.services.client_service import ClientService
from nexus_obra.application.services.membership_service import MembershipService
from nexus_obra.application.services.obra_service import ObraService
from nexus_obra.application.services.upload_signature_service import UploadSignatureService
from nexus_obra.application.services.user_service import UserService

__all__ = [
    "Authenticator",
    "ClientProvisioningSaga",
    "ClientService",
    "MembershipService",
    "ObraService",
    "ProvisioningState",
    "UploadSignatureService",
    "UserService",
]
