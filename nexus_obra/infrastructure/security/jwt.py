"""Access tokens: HS256 JWTs carrying sub, username, role and clientId.

Tokens are valid for settings.access_token_expire_days (10 by default) and are
not revocable; verification trusts the claims until exp.
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from nexus_obra.core.config import get_settings
from nexus_obra.shared.utils.datetime import utc_now

_REQUIRED_CLAIMS = {"require_exp": True, "require_sub": True}


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Sign data as a JWT, adding iat and exp.

    Args:
        data: Claims to embed.
        expires_delta: Lifetime override (tests use a negative one for expired tokens).
    """
    settings = get_settings()
    lifetime = expires_delta or timedelta(days=settings.access_token_expire_days)
    issued_at = utc_now()
    claims = {**data, "iat": issued_at, "exp": issued_at + lifetime}
    token = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, token)


def verify_token(token: str) -> dict[str, Any]:
    """Return the claims of a valid token.

    Only the configured algorithm is accepted.

    Raises:
        ValueError: Bad signature, wrong algorithm, expired, or no subject.
    """
    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options=_REQUIRED_CLAIMS,
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not claims.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return claims
