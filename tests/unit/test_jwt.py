"""Tests for access token creation and verification."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from nexus_obra.core.config import get_settings
from nexus_obra.infrastructure.security.jwt import create_access_token, verify_token


def test_token_round_trip_keeps_claims() -> None:
    token = create_access_token({"sub": "u1", "role": "Admin", "clientId": "c1"})
    payload = verify_token(token)
    assert payload["sub"] == "u1"
    assert payload["role"] == "Admin"
    assert payload["clientId"] == "c1"


def test_default_lifetime_is_ten_days() -> None:
    payload = verify_token(create_access_token({"sub": "u1"}))
    assert payload["exp"] - payload["iat"] == 10 * 24 * 3600


def test_expired_token_is_rejected() -> None:
    token = create_access_token({"sub": "u1"}, expires_delta=timedelta(seconds=-5))
    with pytest.raises(ValueError):
        verify_token(token)


def test_token_without_subject_is_rejected() -> None:
    token = create_access_token({"username": "nobody"})
    with pytest.raises(ValueError):
        verify_token(token)


def test_token_signed_with_other_secret_is_rejected() -> None:
    token = jwt.encode(
        {"sub": "u1", "exp": datetime.now(UTC) + timedelta(hours=1)},
        "another-secret",
        algorithm="HS256",
    )
    with pytest.raises(ValueError):
        verify_token(token)


def test_other_algorithm_is_rejected() -> None:
    secret = get_settings().secret_key.get_secret_value()
    token = jwt.encode(
        {"sub": "u1", "exp": datetime.now(UTC) + timedelta(hours=1)},
        secret,
        algorithm="HS512",
    )
    with pytest.raises(ValueError):
        verify_token(token)
