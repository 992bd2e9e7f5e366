"""Tests for token extraction order (cookie first, then bearer header)."""

import pytest
from starlette.requests import Request

from nexus_obra.api.dependencies.auth import extract_token


def _request(*headers: tuple[str, str]) -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/users/me",
            "headers": [(k.lower().encode(), v.encode()) for k, v in headers],
        }
    )


def test_cookie_takes_precedence_over_bearer() -> None:
    request = _request(("Cookie", "authToken=from-cookie"), ("Authorization", "Bearer from-header"))
    assert extract_token(request) == "from-cookie"


def test_bearer_used_without_cookie() -> None:
    assert extract_token(_request(("Authorization", "Bearer abc.def.ghi"))) == "abc.def.ghi"


@pytest.mark.parametrize("value", ["null", "undefined", ""])
def test_placeholder_bearer_values_are_ignored(value: str) -> None:
    assert extract_token(_request(("Authorization", f"Bearer {value}"))) is None


def test_non_bearer_scheme_is_ignored() -> None:
    assert extract_token(_request(("Authorization", "Basic dXNlcjpwdw=="))) is None


def test_no_credentials() -> None:
    assert extract_token(_request()) is None


def test_empty_cookie_falls_back_to_bearer() -> None:
    request = _request(("Cookie", "authToken="), ("Authorization", "Bearer from-header"))
    assert extract_token(request) == "from-header"
