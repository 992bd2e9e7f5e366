"""DTOs for client (tenant) use cases."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ClientCreationResult:
    """Result of client provisioning. The admin password is never included."""

    client_id: str
    admin_id: str
