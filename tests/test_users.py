import pytest

from hostel_ops.core import ValidationError
from hostel_ops.services import get_collection


async def _admin_id(client, headers):
    resp = await client.get("/api/v1/users", headers=headers)
    return next(u["id"] for u in resp.json()["data"] if u["username"] == "admin")


async def test_create_user_hides_password(client, admin_headers):
    resp = await client.post(
        "/api/v1/users",
        json={"username": "ploy", "password": "secret1", "role": "Staff"},
        headers=admin_headers,
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == 'User "ploy" created successfully!'
    assert set(body["data"]) == {"id", "username", "role", "staffId", "isActive", "createdAt"}


@pytest.mark.parametrize("payload, field", [
    ({"username": "ab", "password": "secret1", "role": "Staff"}, "username"),
    ({"username": "ploy", "password": "12345", "role": "Staff"}, "password"),
])
async def test_user_rules(client, admin_headers, payload, field):
    resp = await client.post("/api/v1/users", json=payload, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["details"]["field"] == field


async def test_duplicate_username_rejected(client, admin_headers):
    payload = {"username": "ploy", "password": "secret1", "role": "Staff"}
    assert (await client.post("/api/v1/users", json=payload, headers=admin_headers)).status_code == 201
    resp = await client.post("/api/v1/users", json=payload, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Username already exists"


async def test_cannot_delete_own_account(client, admin_headers):
    admin_id = await _admin_id(client, admin_headers)
    resp = await client.delete(f"/api/v1/users/{admin_id}", headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "You cannot delete your own account"


async def test_last_active_admin_cannot_be_deleted(session, state, monkeypatch):
    users = get_collection("users").make_service(session, state)
    admin = await users.create({"username": "boss", "password": "secret1", "role": "Admin"})

    calls = []
    original_delete = users.repository.delete

    async def spy_delete(*, id):
        calls.append(id)
        return await original_delete(id=id)

    monkeypatch.setattr(users.repository, "delete", spy_delete)
    with pytest.raises(ValidationError) as exc:
        await users.delete(admin["id"], actor_id="someone-else")
    assert exc.value.message == "Cannot delete the last active admin"
    assert calls == []


async def test_second_admin_can_be_deleted(client, admin_headers):
    resp = await client.post(
        "/api/v1/users",
        json={"username": "boss", "password": "secret1", "role": "Admin"},
        headers=admin_headers,
    )
    boss_id = resp.json()["data"]["id"]
    resp = await client.delete(f"/api/v1/users/{boss_id}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "User deleted successfully!"

    usernames = [u["username"] for u in (await client.get("/api/v1/users", headers=admin_headers)).json()["data"]]
    assert usernames == ["admin"]


async def test_update_keeps_password_when_blank(client, admin_headers):
    resp = await client.post(
        "/api/v1/users",
        json={"username": "ploy", "password": "secret1", "role": "Staff"},
        headers=admin_headers,
    )
    user_id = resp.json()["data"]["id"]
    resp = await client.put(
        f"/api/v1/users/{user_id}",
        json={"username": "ploy2", "role": "Staff", "isActive": True},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["username"] == "ploy2"

    login = await client.post("/api/v1/auth/login", json={"username": "ploy2", "password": "secret1"})
    assert login.status_code == 200


async def test_last_admin_cannot_be_demoted(client, admin_headers):
    admin_id = await _admin_id(client, admin_headers)
    resp = await client.put(
        f"/api/v1/users/{admin_id}",
        json={"username": "admin", "role": "Staff", "isActive": True},
        headers=admin_headers,
    )
    assert resp.status_code == 400
