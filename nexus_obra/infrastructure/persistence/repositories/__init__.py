"""Repositories over the async SQLAlchemy session."""

from nexus_obra.infrastructure.persistence.repositories.base import BaseRepository
from nexus_obra.infrastructure.persistence.repositories.client_repo import ClientRepository
from nexus_obra.infrastructure.persistence.repositories.obra_repo import ObraRepository
from nexus_obra.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = ["BaseRepository", "ClientRepository", "ObraRepository", "UserRepository"]
