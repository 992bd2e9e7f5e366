"""Tests for the Cloudinary upload signature endpoint."""

import hashlib

from httpx import AsyncClient

from nexus_obra.core.config import get_settings


def _configure_cloudinary(monkeypatch) -> None:
    monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "demo-cloud")
    monkeypatch.setenv("CLOUDINARY_API_KEY", "1234567890")
    monkeypatch.setenv("CLOUDINARY_API_SECRET", "shh-secret")
    get_settings.cache_clear()


async def test_signature_requires_authentication(client: AsyncClient) -> None:
    response = await client.post("/uploads/cloudinary/signature")
    assert response.status_code == 401


async def test_signature_without_configuration_returns_500(
    client: AsyncClient, master_headers: dict
) -> None:
    response = await client.post("/uploads/cloudinary/signature", headers=master_headers)

    assert response.status_code == 500
    assert response.json() == {"message": "Cloudinary configuration is missing on the server."}


async def test_signature_matches_folder_and_timestamp(
    client: AsyncClient, master_headers: dict, monkeypatch
) -> None:
    _configure_cloudinary(monkeypatch)

    response = await client.post("/uploads/cloudinary/signature", headers=master_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["cloudName"] == "demo-cloud"
    assert body["apiKey"] == "1234567890"
    assert body["folder"] == "nexus-obra/images"
    assert body["resourceType"] == "image"
    expected = hashlib.sha1(
        f"folder={body['folder']}&timestamp={body['timestamp']}shh-secret".encode()
    ).hexdigest()
    assert body["signature"] == expected
    assert "apiSecret" not in body


async def test_raw_uploads_use_raw_folder(
    client: AsyncClient, provision, signup, login, monkeypatch
) -> None:
    acme = await provision("Acme", "acme_admin")
    await signup(acme["headers"], "acme_guest", role="guest")
    _configure_cloudinary(monkeypatch)

    response = await client.post(
        "/uploads/cloudinary/signature",
        json={"resourceType": "raw"},
        headers=await login("acme_guest"),
    )

    assert response.status_code == 200
    assert response.json()["folder"] == "nexus-obra/raw"


async def test_unknown_resource_type_is_rejected(
    client: AsyncClient, master_headers: dict, monkeypatch
) -> None:
    _configure_cloudinary(monkeypatch)
    response = await client.post(
        "/uploads/cloudinary/signature",
        json={"resourceType": "video"},
        headers=master_headers,
    )
    assert response.status_code == 400
