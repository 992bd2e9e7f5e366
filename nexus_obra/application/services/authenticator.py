"""Login: verify credentials against the credential store and issue a signed token."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from nexus_obra.application.dtos.auth import AuthContext, LoginResult
from nexus_obra.application.interfaces.repositories import IUserRepository
from nexus_obra.domain.enums import Role
from nexus_obra.domain.exceptions import AuthenticationException, ResourceNotFoundException

logger = logging.getLogger(__name__)


class Authenticator:
    """Issues tokens embedding user id, username, role and client id.

    Unknown usernames and wrong passwords are reported separately (404 vs 401).
    """

    def __init__(
        self,
        user_repo: IUserRepository,
        token_issuer: Callable[[dict[str, Any]], str],
    ) -> None:
        self._user_repo = user_repo
        self._issue_token = token_issuer

    async def login(self, username: str, password: str) -> LoginResult:
        """Return a token for valid credentials.

        Raises:
            ResourceNotFoundException: No user with this exact username.
            AuthenticationException: Password does not match.
        """
        user = await self._user_repo.get_by_username(username)
        if user is None:
            logger.info("Login failed: unknown username=%s", username)
            raise ResourceNotFoundException("User", message="User not found!")
        if not await self._user_repo.check_password(user, password):
            logger.info("Login failed: bad password for user_id=%s", user.id)
            raise AuthenticationException("Invalid Credentials")

        role = Role(user.role)
        context = AuthContext(
            user_id=user.id,
            username=user.username,
            role=role,
            client_id=user.client_id,
        )
        token = self._issue_token(context.to_claims())
        logger.info("Login succeeded: user_id=%s role=%s", user.id, role.value)
        return LoginResult(
            token=token,
            user_id=user.id,
            role=role,
            client_id=user.client_id,
            reset_password=user.reset_password,
        )
