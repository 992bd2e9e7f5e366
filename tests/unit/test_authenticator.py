"""Unit tests for Authenticator.login (mocked user repository and issuer)."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from nexus_obra.application.services.authenticator import Authenticator
from nexus_obra.domain.enums import Role
from nexus_obra.domain.exceptions import AuthenticationException, ResourceNotFoundException


def _user(**overrides) -> SimpleNamespace:
    values = {
        "id": "u1",
        "username": "acme_admin",
        "role": "Admin",
        "client_id": "c1",
        "reset_password": True,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def _authenticator(user, password_ok: bool = True):
    repo = MagicMock()
    repo.get_by_username = AsyncMock(return_value=user)
    repo.check_password = AsyncMock(return_value=password_ok)
    issuer = MagicMock(return_value="signed-token")
    return Authenticator(repo, issuer), issuer


async def test_login_issues_token_with_claims() -> None:
    auth, issuer = _authenticator(_user())

    result = await auth.login("acme_admin", "pw")

    assert result.token == "signed-token"
    assert result.role is Role.ADMIN
    assert result.client_id == "c1"
    assert result.reset_password is True
    issuer.assert_called_once_with(
        {"sub": "u1", "username": "acme_admin", "role": "Admin", "clientId": "c1"}
    )


async def test_unknown_user_is_not_found() -> None:
    auth, issuer = _authenticator(None)
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await auth.login("ghost", "pw")
    assert exc_info.value.message == "User not found!"
    issuer.assert_not_called()


async def test_wrong_password_is_unauthenticated() -> None:
    auth, issuer = _authenticator(_user(), password_ok=False)
    with pytest.raises(AuthenticationException) as exc_info:
        await auth.login("acme_admin", "bad")
    assert exc_info.value.message == "Invalid Credentials"
    issuer.assert_not_called()


async def test_master_admin_token_has_no_client() -> None:
    auth, issuer = _authenticator(_user(role="masterAdmin", client_id=None))
    await auth.login("root", "pw")
    assert issuer.call_args.args[0]["clientId"] is None
