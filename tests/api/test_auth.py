"""Tests for login, the token guard and the role gate."""

from datetime import timedelta

from httpx import AsyncClient
from jose import jwt

from nexus_obra.core.config import get_settings
from nexus_obra.infrastructure.security.jwt import create_access_token


async def test_login_returns_token_with_role_and_client_claims(
    client: AsyncClient, provision
) -> None:
    """Correct credentials: 200 and the token carries the stored role and clientId."""
    acme = await provision("Acme", "acme_admin")

    response = await client.post(
        "/users/login", json={"username": "acme_admin", "password": "pw123456"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "Admin"
    assert body["clientId"] == acme["clientId"]
    assert body["userId"] == acme["adminId"]
    assert body["resetPassword"] is True
    claims = jwt.get_unverified_claims(body["authToken"])
    assert claims["sub"] == acme["adminId"]
    assert claims["username"] == "acme_admin"
    assert claims["role"] == "Admin"
    assert claims["clientId"] == acme["clientId"]
    assert claims["exp"] - claims["iat"] == 10 * 24 * 3600


async def test_login_wrong_password_returns_401(client: AsyncClient, master_admin: dict) -> None:
    response = await client.post(
        "/users/login", json={"username": master_admin["username"], "password": "nope"}
    )
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid Credentials"}


async def test_login_unknown_username_returns_404(client: AsyncClient, master_admin: dict) -> None:
    response = await client.post(
        "/users/login", json={"username": "ghost", "password": "whatever"}
    )
    assert response.status_code == 404
    assert response.json()["message"] == "User not found!"


async def test_login_missing_fields_returns_400_with_errors(client: AsyncClient) -> None:
    """Request shape is rejected before any lookup runs."""
    response = await client.post("/users/login", json={"username": "root"})
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert any("password" in e for e in body["errors"])


async def test_protected_route_without_token_returns_401(client: AsyncClient) -> None:
    response = await client.get("/obras")
    assert response.status_code == 401
    assert response.json() == {"message": "Missing authorization header"}


async def test_bearer_placeholder_values_are_ignored(client: AsyncClient) -> None:
    """Bearer values 'null', 'undefined' and '' count as no token."""
    for value in ("null", "undefined", ""):
        response = await client.get("/obras", headers={"Authorization": f"Bearer {value}"})
        assert response.status_code == 401
        assert response.json()["message"] == "Missing authorization header"


async def test_tampered_token_returns_401(client: AsyncClient, master_headers: dict) -> None:
    token = master_headers["Authorization"].removeprefix("Bearer ")
    head, payload, signature = token.split(".")
    flipped = ("A" if signature[0] != "A" else "B") + signature[1:]
    tampered = f"{head}.{payload}.{flipped}"
    response = await client.get("/obras", headers={"Authorization": f"Bearer {tampered}"})
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid token"}


async def test_token_signed_with_other_secret_returns_401(client: AsyncClient) -> None:
    forged = jwt.encode({"sub": "x", "role": "masterAdmin"}, "other-secret", algorithm="HS256")
    response = await client.get("/obras", headers={"Authorization": f"Bearer {forged}"})
    assert response.status_code == 401


async def test_expired_token_returns_401(client: AsyncClient, master_admin: dict) -> None:
    token = create_access_token(
        {"sub": master_admin["id"], "role": "masterAdmin", "clientId": None},
        expires_delta=timedelta(seconds=-5),
    )
    response = await client.get("/obras", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


async def test_cookie_takes_precedence_over_bearer(
    client: AsyncClient, master_headers: dict
) -> None:
    """A valid cookie wins over a garbage header; a garbage cookie wins over a valid header."""
    token = master_headers["Authorization"].removeprefix("Bearer ")
    cookie_name = get_settings().auth_cookie_name

    ok = await client.get(
        "/obras",
        headers={"Cookie": f"{cookie_name}={token}", "Authorization": "Bearer garbage"},
    )
    assert ok.status_code == 200

    denied = await client.get(
        "/obras", headers={"Cookie": f"{cookie_name}=garbage", **master_headers}
    )
    assert denied.status_code == 401


async def test_unknown_role_claim_is_forbidden_on_role_gated_route(client: AsyncClient) -> None:
    token = create_access_token({"sub": "someone", "role": "superuser", "clientId": None})
    response = await client.post(
        "/obras",
        json={"obraName": "X", "clientId": "c1"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 403


async def test_signup_by_plain_user_returns_403(
    client: AsyncClient, provision, signup, login
) -> None:
    acme = await provision("Acme", "acme_admin")
    await signup(acme["headers"], "worker")
    worker_headers = await login("worker")

    response = await client.post(
        "/users/signup",
        json={"username": "another", "password": "pw123456"},
        headers=worker_headers,
    )

    assert response.status_code == 403
    assert response.json()["message"] == "Access denied. Insufficient permissions."
