"""Domain enumerations for the back office.

Enums represent closed sets of domain values (roles, obra status).
"""

from enum import Enum


class Role(str, Enum):
    """User role. Drives the role gate and tenant scoping decisions.

    masterAdmin operates across every client; Admin manages exactly one client;
    user and guest only read within their own client.
    """

    MASTER_ADMIN = "masterAdmin"
    ADMIN = "Admin"
    USER = "user"
    GUEST = "guest"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid role values as strings."""
        return [role.value for role in cls]

    @classmethod
    def parse(cls, value: str | None) -> "Role | None":
        """Return the Role for value, or None when value is not a known role."""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class ObraStatus(str, Enum):
    """Obra (project) lifecycle status."""

    PLANNING = "planning"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ON_HOLD = "on-hold"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings."""
        return [status.value for status in cls]


class UploadResourceType(str, Enum):
    """Asset kind for signed uploads; selects the destination folder."""

    IMAGE = "image"
    RAW = "raw"
