"""Client provisioning saga: admin user, then client, then the admin's link back.

Every step has a compensating action. The request runs in one database
transaction, so a failure also rolls back at the storage level; the explicit
compensations keep the flow correct on stores without multi-statement
transactions and make the state machine observable.

    STARTED -> ADMIN_CREATED -> CLIENT_CREATED -> LINKED
        any failure after ADMIN_CREATED -> COMPENSATED
"""

from __future__ import annotations

import logging
from enum import Enum

from nexus_obra.application.dtos.client import ClientCreationResult
from nexus_obra.application.interfaces.repositories import (
    IClientRepository,
    IUserRepository,
)
from nexus_obra.domain.enums import Role
from nexus_obra.domain.exceptions import ClientLinkException

logger = logging.getLogger(__name__)


class ProvisioningState(str, Enum):
    STARTED = "started"
    ADMIN_CREATED = "admin_created"
    CLIENT_CREATED = "client_created"
    LINKED = "linked"
    COMPENSATED = "compensated"


class ClientProvisioningSaga:
    """One provisioning run. Create a new instance per request."""

    def __init__(self, user_repo: IUserRepository, client_repo: IClientRepository) -> None:
        self._user_repo = user_repo
        self._client_repo = client_repo
        self.state = ProvisioningState.STARTED
        self.admin_id: str | None = None
        self.client_id: str | None = None

    async def run(
        self,
        client_name: str,
        admin_username: str,
        admin_password: str,
        *,
        client_logo: str | None = None,
    ) -> ClientCreationResult:
        """Provision a client with its Admin user.

        Raises:
            DuplicateResourceException: Username or client name taken (after compensation
                when the admin was already created).
            ClientLinkException: The admin could not be linked to the new client; both
                the client and the admin have been removed.
        """
        if self.state is not ProvisioningState.STARTED:
            raise RuntimeError(f"Saga already ran (state={self.state.value})")

        admin = await self._user_repo.create_user(
            admin_username,
            admin_password,
            Role.ADMIN,
            reset_password=True,
        )
        self.admin_id = admin.id
        self.state = ProvisioningState.ADMIN_CREATED

        try:
            client = await self._client_repo.create_client(
                client_name, admin, client_logo=client_logo
            )
        except Exception:
            await self._compensate()
            raise
        self.client_id = client.id
        self.state = ProvisioningState.CLIENT_CREATED

        try:
            await self._user_repo.set_client(admin, client.id)
        except Exception as e:
            logger.error(
                "Linking admin to client failed: admin_id=%s client_id=%s error=%s",
                self.admin_id,
                self.client_id,
                e,
            )
            await self._compensate()
            raise ClientLinkException() from e
        self.state = ProvisioningState.LINKED

        logger.info(
            "Client provisioned: client_id=%s admin_id=%s", self.client_id, self.admin_id
        )
        return ClientCreationResult(client_id=client.id, admin_id=admin.id)

    async def _compensate(self) -> None:
        """Undo completed steps in reverse order. Failures are logged, never raised."""
        if self.state is ProvisioningState.CLIENT_CREATED and self.client_id:
            try:
                await self._client_repo.delete_by_id(self.client_id)
            except Exception:
                logger.warning(
                    "Compensation failed: could not delete client_id=%s",
                    self.client_id,
                    exc_info=True,
                )
        if self.admin_id:
            try:
                await self._user_repo.delete_by_id(self.admin_id)
            except Exception:
                logger.warning(
                    "Compensation failed: could not delete admin user_id=%s",
                    self.admin_id,
                    exc_info=True,
                )
        self.state = ProvisioningState.COMPENSATED
