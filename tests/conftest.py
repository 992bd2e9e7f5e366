"""Pytest configuration and fixtures for nexus-obra.

Every test that needs HTTP gets its own application (own rate limiter) and a
throwaway SQLite database under tmp_path. Settings are read from the
environment, so they are set here before anything calls get_settings().
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-do-not-use-in-production"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_MAX"] = "10000"
os.environ["AUTH_RATE_LIMIT_MAX"] = "10000"
os.environ["DATABASE_AUTO_CREATE"] = "false"
for _name in ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET"):
    os.environ.pop(_name, None)

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from nexus_obra.core.config import get_settings  # noqa: E402
from nexus_obra.domain.enums import Role  # noqa: E402
from nexus_obra.infrastructure.persistence import database  # noqa: E402
from nexus_obra.infrastructure.persistence.repositories import UserRepository  # noqa: E402
from nexus_obra.main import create_app  # noqa: E402

MASTER_USERNAME = "root"
MASTER_PASSWORD = "root-password-123"
DEFAULT_PASSWORD = "pw123456"


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Each test starts and ends with an empty settings cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def app(monkeypatch, tmp_path):
    """FastAPI app bound to a fresh SQLite database with all tables created."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    get_settings.cache_clear()
    await database.dispose_engine()
    await database.init_models()
    application = create_app()
    yield application
    await database.dispose_engine()


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def master_admin(app) -> dict:
    """Insert the bootstrap masterAdmin directly (no API can create the first one)."""
    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            user = await UserRepository(session).create_user(
                MASTER_USERNAME, MASTER_PASSWORD, Role.MASTER_ADMIN, reset_password=False
            )
    return {"id": user.id, "username": MASTER_USERNAME, "password": MASTER_PASSWORD}


@pytest.fixture
def login(client: AsyncClient):
    """Return an async helper: login(username, password) -> Authorization headers."""

    async def _login(username: str, password: str = DEFAULT_PASSWORD) -> dict[str, str]:
        response = await client.post(
            "/users/login", json={"username": username, "password": password}
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['authToken']}"}

    return _login


@pytest.fixture
async def master_headers(master_admin: dict, login) -> dict[str, str]:
    return await login(master_admin["username"], master_admin["password"])


@pytest.fixture
def provision(client: AsyncClient, master_headers: dict[str, str], login):
    """Return an async helper that creates a client with its Admin and logs the Admin in.

    Result keys: clientId, adminId, headers.
    """

    async def _provision(
        client_name: str, admin_username: str, admin_password: str = DEFAULT_PASSWORD
    ) -> dict:
        response = await client.post(
            "/clients",
            json={
                "clientName": client_name,
                "adminUsername": admin_username,
                "adminPassword": admin_password,
            },
            headers=master_headers,
        )
        assert response.status_code == 201, response.text
        data = response.json()
        data["headers"] = await login(admin_username, admin_password)
        return data

    return _provision


@pytest.fixture
def signup(client: AsyncClient):
    """Return an async helper: signup(headers, username, role=...) -> created user JSON."""

    async def _signup(
        headers: dict[str, str],
        username: str,
        role: str = "user",
        password: str = DEFAULT_PASSWORD,
    ) -> dict:
        response = await client.post(
            "/users/signup",
            json={"username": username, "password": password, "role": role},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["user"]

    return _signup
