"""Repository and service providers (composition root).

Read endpoints get a plain session; write endpoints get a transactional one
that commits on success and rolls back when the handler raises.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from nexus_obra.api.dependencies.auth import AuthSecurity, get_auth_security
from nexus_obra.application.services import (
    Authenticator,
    ClientProvisioningSaga,
    ClientService,
    MembershipService,
    ObraService,
    UploadSignatureService,
    UserService,
)
from nexus_obra.core.config import get_settings
from nexus_obra.infrastructure.persistence.database import get_db, get_db_transactional
from nexus_obra.infrastructure.persistence.repositories import (
    ClientRepository,
    ObraRepository,
    UserRepository,
)

ReadSession = Annotated[AsyncSession, Depends(get_db)]
WriteSession = Annotated[AsyncSession, Depends(get_db_transactional)]


async def get_authenticator(
    db: ReadSession,
    auth_security: Annotated[AuthSecurity, Depends(get_auth_security)],
) -> Authenticator:
    return Authenticator(UserRepository(db), auth_security.create_access_token)


async def get_user_service(db: ReadSession) -> UserService:
    return UserService(UserRepository(db), ClientRepository(db))


async def get_user_service_for_write(db: WriteSession) -> UserService:
    return UserService(UserRepository(db), ClientRepository(db))


async def get_client_service(db: ReadSession) -> ClientService:
    return ClientService(ClientRepository(db), UserRepository(db), ObraRepository(db))


async def get_client_service_for_write(db: WriteSession) -> ClientService:
    return ClientService(ClientRepository(db), UserRepository(db), ObraRepository(db))


async def get_provisioning_saga(db: WriteSession) -> ClientProvisioningSaga:
    """A fresh saga per request, sharing the request transaction."""
    return ClientProvisioningSaga(UserRepository(db), ClientRepository(db))


async def get_membership_service(db: WriteSession) -> MembershipService:
    return MembershipService(UserRepository(db), ClientRepository(db), ObraRepository(db))


async def get_obra_service(db: ReadSession) -> ObraService:
    return ObraService(ObraRepository(db), ClientRepository(db), UserRepository(db))


async def get_obra_service_for_write(db: WriteSession) -> ObraService:
    return ObraService(ObraRepository(db), ClientRepository(db), UserRepository(db))


def get_upload_signature_service() -> UploadSignatureService:
    return UploadSignatureService(get_settings())
