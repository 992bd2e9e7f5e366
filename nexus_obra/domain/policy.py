"""Access policy: role gate and tenant scoping as pure decision tables.

No I/O and no framework imports. Callers pass the caller's role and client id
(taken from verified token claims) plus what they know about the target; the
functions return a decision or raise the matching domain exception.

Ordering rule: for resources addressed by path id whose client is only known
after a lookup (obras, users), the lookup runs first so a missing resource is
reported as not found before any tenant check. When the target client id is
the path parameter itself (clients), the tenant check runs before the lookup.
"""

from collections.abc import Iterable
from enum import Enum

from nexus_obra.domain.enums import Role
from nexus_obra.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ResourceNotFoundException,
)

UNRESTRICTED_ROLES: frozenset[Role] = frozenset({Role.MASTER_ADMIN})
MANAGER_ROLES: frozenset[Role] = frozenset({Role.MASTER_ADMIN, Role.ADMIN})


class AccessDecision(str, Enum):
    """Outcome of a tenant-scoped access check."""

    ALLOW = "allow"
    FORBID = "forbid"
    NOT_FOUND = "not_found"


# (resource_exists, unrestricted_role, tenant_match) -> decision
_TENANT_DECISIONS: dict[tuple[bool, bool, bool], AccessDecision] = {
    (False, True, True): AccessDecision.NOT_FOUND,
    (False, True, False): AccessDecision.NOT_FOUND,
    (False, False, True): AccessDecision.NOT_FOUND,
    (False, False, False): AccessDecision.NOT_FOUND,
    (True, True, True): AccessDecision.ALLOW,
    (True, True, False): AccessDecision.ALLOW,
    (True, False, True): AccessDecision.ALLOW,
    (True, False, False): AccessDecision.FORBID,
}


def is_unrestricted(role: Role | None) -> bool:
    """Return True if role operates across all clients."""
    return role in UNRESTRICTED_ROLES


def tenant_matches(caller_client_id: str | None, target_client_id: str | None) -> bool:
    """Return True when both ids are set and equal. A caller without a client never matches."""
    if not caller_client_id or not target_client_id:
        return False
    return str(caller_client_id) == str(target_client_id)


def decide_tenant_access(
    role: Role | None,
    tenant_match: bool,
    resource_exists: bool = True,
) -> AccessDecision:
    """Look up the decision for (role, tenant match, existence)."""
    return _TENANT_DECISIONS[(resource_exists, is_unrestricted(role), tenant_match)]


def role_allowed(role: Role | None, allowed_roles: Iterable[Role]) -> bool:
    """Return True if role is one of allowed_roles. Unknown roles are never allowed."""
    return role is not None and role in frozenset(allowed_roles)


def enforce_role(
    role: Role | None,
    allowed_roles: Iterable[Role],
    *,
    authenticated: bool = True,
) -> None:
    """Raise unless the caller is authenticated and holds one of allowed_roles.

    Raises:
        AuthenticationException: No authorization context (guard ordering error).
        AuthorizationException: Role not in allowed_roles.
    """
    if not authenticated:
        raise AuthenticationException("Authentication required")
    allowed = list(allowed_roles)
    if not role_allowed(role, allowed):
        raise AuthorizationException(required_roles=[r.value for r in allowed])


def enforce_tenant_access(
    role: Role | None,
    caller_client_id: str | None,
    target_client_id: str | None,
    *,
    resource_type: str,
    resource_id: str | None = None,
    resource_exists: bool = True,
    forbidden_message: str | None = None,
) -> None:
    """Raise ResourceNotFoundException or AuthorizationException per the decision table."""
    decision = decide_tenant_access(
        role,
        tenant_matches(caller_client_id, target_client_id),
        resource_exists,
    )
    if decision is AccessDecision.NOT_FOUND:
        raise ResourceNotFoundException(resource_type, resource_id)
    if decision is AccessDecision.FORBID:
        raise AuthorizationException(
            forbidden_message
            or f"Access denied. Insufficient permissions for this {resource_type.lower()}."
        )


def enforce_tenant_reassignment(
    role: Role | None,
    caller_client_id: str | None,
    new_client_id: str | None,
) -> None:
    """Only unrestricted roles may move a resource to a client other than their own."""
    if new_client_id is None or is_unrestricted(role):
        return
    if not tenant_matches(caller_client_id, new_client_id):
        raise AuthorizationException("Access denied. Cannot change client assignment.")
