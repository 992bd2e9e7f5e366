"""Ports implemented by infrastructure (repositories)."""

from nexus_obra.application.interfaces.repositories import (
    IClientRepository,
    IObraRepository,
    IUserRepository,
)

__all__ = ["IClientRepository", "IObraRepository", "IUserRepository"]
