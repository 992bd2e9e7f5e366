"""Dependency composition for the API routers."""

from nexus_obra.api.dependencies.auth import (
    AdminContext,
    AuthSecurity,
    CurrentContext,
    ManagerContext,
    MasterAdminContext,
    extract_token,
    get_auth_context,
    get_auth_security,
    require_roles,
)
from nexus_obra.api.dependencies.services import (
    get_authenticator,
    get_client_service,
    get_client_service_for_write,
    get_membership_service,
    get_obra_service,
    get_obra_service_for_write,
    get_provisioning_saga,
    get_upload_signature_service,
    get_user_service,
    get_user_service_for_write,
)

__all__ = [
    "AdminContext",
    "AuthSecurity",
    "CurrentContext",
    "ManagerContext",
    "MasterAdminContext",
    "extract_token",
    "get_auth_context",
    "get_auth_security",
    "get_authenticator",
    "get_client_service",
    "get_client_service_for_write",
    "get_membership_service",
    "get_obra_service",
    "get_obra_service_for_write",
    "get_provisioning_saga",
    "get_upload_signature_service",
    "get_user_service",
    "get_user_service_for_write",
    "require_roles",
]
