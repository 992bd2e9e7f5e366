"""Token Guard and Role Policy dependencies.

The guard takes the token from the authToken cookie first, then from an
``Authorization: Bearer`` header (the literal values "null", "undefined" and
the empty string are ignored). Claims are trusted for the token's lifetime;
the user record is not re-read per request.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import Depends, Request

from nexus_obra.application.dtos.auth import AuthContext
from nexus_obra.core.config import get_settings
from nexus_obra.domain.enums import Role
from nexus_obra.domain.exceptions import AuthenticationException, AuthorizationException
from nexus_obra.domain.policy import enforce_role
from nexus_obra.infrastructure.security.jwt import create_access_token, verify_token

logger = logging.getLogger(__name__)

_IGNORED_BEARER_VALUES = frozenset({"", "null", "undefined"})


class AuthSecurity:
    """Token issuance and verification provided via DI (no direct infra imports in routes)."""

    def create_access_token(self, data: dict[str, Any]) -> str:
        return create_access_token(data)

    def verify_token(self, token: str) -> dict[str, Any]:
        return verify_token(token)


def get_auth_security() -> AuthSecurity:
    return AuthSecurity()


def extract_token(request: Request) -> str | None:
    """Return the cookie token, else a usable bearer token, else None."""
    cookie_token = request.cookies.get(get_settings().auth_cookie_name)
    if cookie_token:
        return cookie_token
    header = request.headers.get("Authorization") or ""
    scheme, _, credentials = header.partition(" ")
    if scheme != "Bearer":
        return None
    token = credentials.strip()
    if token in _IGNORED_BEARER_VALUES:
        return None
    return token


async def get_auth_context(
    request: Request,
    auth_security: Annotated[AuthSecurity, Depends(get_auth_security)],
) -> AuthContext:
    """Token Guard: verify the presented token and expose its claims.

    Raises:
        AuthenticationException: no usable token, or verification failed for any reason.
    """
    token = extract_token(request)
    if token is None:
        raise AuthenticationException("Missing authorization header")
    try:
        claims = auth_security.verify_token(token)
    except ValueError as e:
        logger.debug("Token rejected: path=%s reason=%s", request.url.path, e)
        raise AuthenticationException("Invalid token") from e
    ctx = AuthContext.from_claims(claims)
    request.state.auth_context = ctx
    return ctx


def require_roles(*roles: Role):
    """Dependency factory: Token Guard, then 403 unless the caller holds one of roles."""
    allowed = frozenset(roles)

    async def _require(
        request: Request,
        ctx: Annotated[AuthContext | None, Depends(get_auth_context)],
    ) -> AuthContext:
        role = ctx.role if ctx is not None else None
        try:
            enforce_role(role, allowed, authenticated=ctx is not None)
        except (AuthenticationException, AuthorizationException):
            logger.debug(
                "Role denied: path=%s role=%s allowed=%s",
                request.url.path,
                role.value if role else None,
                sorted(r.value for r in allowed),
            )
            raise
        return ctx

    return _require


CurrentContext = Annotated[AuthContext, Depends(get_auth_context)]
ManagerContext = Annotated[AuthContext, Depends(require_roles(Role.MASTER_ADMIN, Role.ADMIN))]
MasterAdminContext = Annotated[AuthContext, Depends(require_roles(Role.MASTER_ADMIN))]
AdminContext = Annotated[AuthContext, Depends(require_roles(Role.ADMIN))]
