"""DTOs for authentication (token claims and login result)."""

from dataclasses import dataclass
from typing import Any

from nexus_obra.domain.enums import Role


@dataclass(frozen=True)
class AuthContext:
    """Authorization context decoded from a verified token.

    Claims are trusted for the token's lifetime; role or client changes take
    effect on the next login.
    """

    user_id: str
    username: str
    role: Role | None
    client_id: str | None

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "AuthContext":
        """Build from a decoded JWT payload. Unknown role strings become None."""
        return cls(
            user_id=str(claims["sub"]),
            username=str(claims.get("username") or ""),
            role=Role.parse(claims.get("role")),
            client_id=claims.get("clientId") or None,
        )

    def to_claims(self) -> dict[str, Any]:
        return {
            "sub": self.user_id,
            "username": self.username,
            "role": self.role.value if self.role else None,
            "clientId": self.client_id,
        }


@dataclass(frozen=True)
class LoginResult:
    """Issued token plus a summary of the user for client convenience."""

    token: str
    user_id: str
    role: Role
    client_id: str | None
    reset_password: bool
