"""Tests for client provisioning, scoped reads/updates, deletion and members."""

from httpx import AsyncClient


async def test_create_client_links_admin_to_client(
    client: AsyncClient, master_headers: dict, login
) -> None:
    """Acme scenario: 201 with ids; the Admin logs in with clientId of the new client."""
    response = await client.post(
        "/clients",
        json={"clientName": "Acme", "adminUsername": "acme_admin", "adminPassword": "pw123456"},
        headers=master_headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Client and admin created successfully."

    login_resp = await client.post(
        "/users/login", json={"username": "acme_admin", "password": "pw123456"}
    )
    assert login_resp.status_code == 200
    assert login_resp.json()["role"] == "Admin"
    assert login_resp.json()["clientId"] == body["clientId"]
    assert login_resp.json()["userId"] == body["adminId"]

    detail = await client.get(f"/clients/{body['clientId']}", headers=master_headers)
    assert detail.status_code == 200
    data = detail.json()
    assert data["clientName"] == "acme"
    assert data["clientAdmin"] == body["adminId"]
    assert data["subStatus"] is False
    assert [m["id"] for m in data["members"]] == [body["adminId"]]


async def test_legacy_create_client_path_is_accepted(
    client: AsyncClient, master_headers: dict
) -> None:
    response = await client.post(
        "/clients/createClient",
        json={"clientName": "Legacy", "adminUsername": "legacy_admin", "adminPassword": "pw"},
        headers=master_headers,
    )
    assert response.status_code == 201


async def test_create_client_requires_master_admin(client: AsyncClient, provision) -> None:
    acme = await provision("Acme", "acme_admin")
    response = await client.post(
        "/clients",
        json={"clientName": "Other", "adminUsername": "other_admin", "adminPassword": "pw"},
        headers=acme["headers"],
    )
    assert response.status_code == 403


async def test_duplicate_client_name_is_case_insensitive_and_rolls_back_admin(
    client: AsyncClient, master_headers: dict, provision
) -> None:
    """409 on clientName; the admin created in the first step no longer exists."""
    await provision("Acme", "acme_admin")

    response = await client.post(
        "/clients",
        json={"clientName": "  ACME ", "adminUsername": "second_admin", "adminPassword": "pw"},
        headers=master_headers,
    )

    assert response.status_code == 409
    assert response.json()["field"] == "clientName"
    login_resp = await client.post(
        "/users/login", json={"username": "second_admin", "password": "pw"}
    )
    assert login_resp.status_code == 404


async def test_duplicate_admin_username_returns_409_and_creates_nothing(
    client: AsyncClient, master_headers: dict, provision
) -> None:
    await provision("Acme", "acme_admin")
    response = await client.post(
        "/clients",
        json={"clientName": "Globex", "adminUsername": "acme_admin", "adminPassword": "pw"},
        headers=master_headers,
    )
    assert response.status_code == 409
    assert response.json()["field"] == "username"

    clients = await client.get("/clients", headers=master_headers)
    assert [c["clientName"] for c in clients.json()] == ["acme"]


async def test_create_client_with_members_array_is_rejected(
    client: AsyncClient, master_headers: dict
) -> None:
    response = await client.post(
        "/clients",
        json={"clientName": "A", "adminUsername": "b", "adminPassword": "c", "Members": []},
        headers=master_headers,
    )
    assert response.status_code == 400


async def test_list_clients_scoping(client: AsyncClient, master_headers: dict, provision) -> None:
    acme = await provision("Zeta", "zeta_admin")
    await provision("Alpha", "alpha_admin")

    all_clients = await client.get("/clients", headers=master_headers)
    assert [c["clientName"] for c in all_clients.json()] == ["alpha", "zeta"]

    own = await client.get("/clients", headers=acme["headers"])
    assert [c["id"] for c in own.json()] == [acme["clientId"]]


async def test_admin_reading_other_client_is_forbidden_even_when_missing(
    client: AsyncClient, provision
) -> None:
    acme = await provision("Acme", "acme_admin")
    globex = await provision("Globex", "globex_admin")

    other = await client.get(f"/clients/{globex['clientId']}", headers=acme["headers"])
    assert other.status_code == 403
    missing = await client.get("/clients/does-not-exist", headers=acme["headers"])
    assert missing.status_code == 403


async def test_master_admin_reading_missing_client_returns_404(
    client: AsyncClient, master_headers: dict
) -> None:
    response = await client.get("/clients/does-not-exist", headers=master_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Client not found."


async def test_get_my_client_requires_client_association(
    client: AsyncClient, master_headers: dict, provision
) -> None:
    acme = await provision("Acme", "acme_admin")
    mine = await client.get("/clients/me", headers=acme["headers"])
    assert mine.status_code == 200
    assert mine.json()["id"] == acme["clientId"]

    master = await client.get("/clients/me", headers=master_headers)
    assert master.status_code == 400
    assert master.json()["message"] == "Client association missing."


async def test_admin_updates_own_client(client: AsyncClient, provision) -> None:
    acme = await provision("Acme", "acme_admin")
    response = await client.patch(
        "/clients/me",
        json={"clientEmail": "Office@Acme.io", "clientPhone": " 555-0100 ", "clientLogo": "logo.png"},
        headers=acme["headers"],
    )
    assert response.status_code == 200
    body = response.json()
    assert body["clientEmail"] == "office@acme.io"
    assert body["clientPhone"] == "555-0100"
    assert body["clientLogo"] == "logo.png"


async def test_patch_me_rejects_empty_body_and_master_only_fields(
    client: AsyncClient, provision
) -> None:
    acme = await provision("Acme", "acme_admin")
    empty = await client.patch("/clients/me", json={}, headers=acme["headers"])
    assert empty.status_code == 400
    assert empty.json()["message"] == "No valid fields to update."

    sub = await client.patch("/clients/me", json={"subStatus": True}, headers=acme["headers"])
    assert sub.status_code == 400


async def test_patch_me_requires_admin_role(
    client: AsyncClient, master_headers: dict
) -> None:
    response = await client.patch("/clients/me", json={"clientLogo": "x"}, headers=master_headers)
    assert response.status_code == 403


async def test_duplicate_email_between_clients_returns_409(client: AsyncClient, provision) -> None:
    acme = await provision("Acme", "acme_admin")
    globex = await provision("Globex", "globex_admin")
    await client.patch("/clients/me", json={"clientEmail": "hq@globex.io"}, headers=acme["headers"])

    response = await client.patch(
        "/clients/me", json={"clientEmail": "HQ@globex.io"}, headers=globex["headers"]
    )

    assert response.status_code == 409
    assert response.json()["field"] == "clientEmail"


async def test_admin_cannot_change_sub_status_or_client_admin(
    client: AsyncClient, provision
) -> None:
    acme = await provision("Acme", "acme_admin")
    response = await client.patch(
        f"/clients/{acme['clientId']}", json={"subStatus": True}, headers=acme["headers"]
    )
    assert response.status_code == 403


async def test_master_admin_changes_client_admin_only_to_a_member(
    client: AsyncClient, master_headers: dict, provision, signup
) -> None:
    acme = await provision("Acme", "acme_admin")
    worker = await signup(acme["headers"], "acme_worker")
    outsider = await signup(master_headers, "outsider")

    rejected = await client.patch(
        f"/clients/{acme['clientId']}",
        json={"clientAdmin": outsider["id"]},
        headers=master_headers,
    )
    assert rejected.status_code == 400
    assert rejected.json()["field"] == "clientAdmin"

    accepted = await client.patch(
        f"/clients/{acme['clientId']}",
        json={"clientAdmin": worker["id"], "subStatus": True},
        headers=master_headers,
    )
    assert accepted.status_code == 200
    assert accepted.json()["clientAdmin"] == worker["id"]
    assert accepted.json()["subStatus"] is True


async def test_admin_cannot_patch_other_client(client: AsyncClient, provision) -> None:
    acme = await provision("Acme", "acme_admin")
    globex = await provision("Globex", "globex_admin")
    response = await client.patch(
        f"/clients/{globex['clientId']}", json={"clientLogo": "x"}, headers=acme["headers"]
    )
    assert response.status_code == 403


async def test_delete_client_unlinks_members_and_keeps_users(
    client: AsyncClient, master_headers: dict, provision, signup, login
) -> None:
    acme = await provision("Acme", "acme_admin")
    await signup(acme["headers"], "acme_worker")

    response = await client.delete(f"/clients/{acme['clientId']}", headers=master_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Client deleted successfully."}

    relogin = await client.post(
        "/users/login", json={"username": "acme_worker", "password": "pw123456"}
    )
    assert relogin.status_code == 200
    assert relogin.json()["clientId"] is None
    gone = await client.get(f"/clients/{acme['clientId']}", headers=master_headers)
    assert gone.status_code == 404


async def test_delete_client_is_master_only_and_404_when_missing(
    client: AsyncClient, master_headers: dict, provision
) -> None:
    acme = await provision("Acme", "acme_admin")
    forbidden = await client.delete(f"/clients/{acme['clientId']}", headers=acme["headers"])
    assert forbidden.status_code == 403
    missing = await client.delete("/clients/nope", headers=master_headers)
    assert missing.status_code == 404


async def test_add_member_twice_keeps_one_occurrence(
    client: AsyncClient, master_headers: dict, provision, signup
) -> None:
    acme = await provision("Acme", "acme_admin")
    loner = await signup(master_headers, "loner")

    for _ in range(2):
        response = await client.post(
            "/clients/me/members", json={"userId": loner["id"]}, headers=acme["headers"]
        )
        assert response.status_code == 200

    member_ids = [m["id"] for m in response.json()["members"]]
    assert member_ids.count(loner["id"]) == 1
    assert sorted(member_ids) == sorted([acme["adminId"], loner["id"]])


async def test_add_member_rules(
    client: AsyncClient, master_headers: dict, master_admin: dict, provision, signup
) -> None:
    acme = await provision("Acme", "acme_admin")
    globex = await provision("Globex", "globex_admin")

    master = await client.post(
        "/clients/me/members", json={"userId": master_admin["id"]}, headers=acme["headers"]
    )
    assert master.status_code == 400

    unknown = await client.post(
        "/clients/me/members", json={"userId": "nobody"}, headers=acme["headers"]
    )
    assert unknown.status_code == 404

    taken = await client.post(
        "/clients/me/members", json={"userId": globex["adminId"]}, headers=acme["headers"]
    )
    assert taken.status_code == 409


async def test_remove_member_rules(
    client: AsyncClient, master_headers: dict, provision, signup, login
) -> None:
    acme = await provision("Acme", "acme_admin")
    worker = await signup(acme["headers"], "acme_worker")
    outsider = await signup(master_headers, "outsider")

    admin = await client.delete(
        f"/clients/me/members/{acme['adminId']}", headers=acme["headers"]
    )
    assert admin.status_code == 400

    not_member = await client.delete(
        f"/clients/me/members/{outsider['id']}", headers=acme["headers"]
    )
    assert not_member.status_code == 404

    removed = await client.delete(
        f"/clients/me/members/{worker['id']}", headers=acme["headers"]
    )
    assert removed.status_code == 200
    assert worker["id"] not in [m["id"] for m in removed.json()["members"]]
    relogin = await client.post(
        "/users/login", json={"username": "acme_worker", "password": "pw123456"}
    )
    assert relogin.json()["clientId"] is None


async def test_member_routes_by_id_are_tenant_scoped(
    client: AsyncClient, master_headers: dict, provision, signup
) -> None:
    acme = await provision("Acme", "acme_admin")
    globex = await provision("Globex", "globex_admin")
    loner = await signup(master_headers, "loner")

    cross = await client.post(
        f"/clients/{globex['clientId']}/members",
        json={"userId": loner["id"]},
        headers=acme["headers"],
    )
    assert cross.status_code == 403

    by_master = await client.post(
        f"/clients/{globex['clientId']}/members",
        json={"userId": loner["id"]},
        headers=master_headers,
    )
    assert by_master.status_code == 200

    listing = await client.get(f"/clients/{globex['clientId']}/members", headers=master_headers)
    assert {m["username"] for m in listing.json()} == {"globex_admin", "loner"}

    removed = await client.delete(
        f"/clients/{globex['clientId']}/members/{loner['id']}", headers=globex["headers"]
    )
    assert removed.status_code == 200


async def test_member_id_must_look_like_an_id(client: AsyncClient, provision) -> None:
    acme = await provision("Acme", "acme_admin")
    response = await client.post(
        "/clients/me/members", json={"userId": "not an id!"}, headers=acme["headers"]
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"
