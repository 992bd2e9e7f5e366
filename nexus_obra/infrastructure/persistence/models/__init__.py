"""ORM models. Importing this package registers every table on Base.metadata."""

from nexus_obra.infrastructure.persistence.models.client import Client, client_member
from nexus_obra.infrastructure.persistence.models.obra import Obra, obra_responsible
from nexus_obra.infrastructure.persistence.models.user import User

__all__ = ["Client", "Obra", "User", "client_member", "obra_responsible"]
