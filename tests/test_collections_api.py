import pytest
from sqlalchemy.exc import OperationalError

from hostel_ops.core import BaseRepository


async def test_crud_round_trip(client, admin_headers):
    resp = await client.post(
        "/api/v1/activities",
        json={"name": "Kayak Tour", "price": 800, "type": "External", "companyCost": 300},
        headers=admin_headers,
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == 'Activity "Kayak Tour" created successfully!'
    activity = body["data"]
    assert activity["companyCost"] == 300
    assert activity["imageUrl"] == ""

    activity_id = activity["id"]
    resp = await client.put(
        f"/api/v1/activities/{activity_id}",
        json={"name": "Kayak Tour", "price": 900, "type": "External", "companyCost": 300},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["price"] == 900

    resp = await client.get(f"/api/v1/activities/{activity_id}", headers=admin_headers)
    assert resp.json()["data"]["price"] == 900

    resp = await client.delete(f"/api/v1/activities/{activity_id}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Activity deleted successfully!"}

    resp = await client.get(f"/api/v1/activities/{activity_id}", headers=admin_headers)
    assert resp.status_code == 404


async def test_list_in_display_order(client, admin_headers):
    for name in ("Snorkeling", "Fishing", "Hiking"):
        await client.post("/api/v1/activities", json={"name": name, "price": 100}, headers=admin_headers)
    resp = await client.get("/api/v1/activities", headers=admin_headers)
    assert [a["name"] for a in resp.json()["data"]] == ["Fishing", "Hiking", "Snorkeling"]


async def test_update_missing_record(client, admin_headers):
    resp = await client.put(
        "/api/v1/payment-types/missing", json={"name": "Cash"}, headers=admin_headers
    )
    assert resp.status_code == 404
    assert resp.json()["error"] == "PaymentType with id missing not found"


async def test_delete_missing_record_keeps_others(client, admin_headers):
    await client.post("/api/v1/payment-types", json={"name": "Cash"}, headers=admin_headers)
    await client.get("/api/v1/payment-types", headers=admin_headers)
    resp = await client.delete("/api/v1/payment-types/missing", headers=admin_headers)
    assert resp.status_code == 404
    resp = await client.get("/api/v1/payment-types", headers=admin_headers)
    assert [p["name"] for p in resp.json()["data"]] == ["Cash"]


async def test_invalid_body_is_422(client, admin_headers):
    resp = await client.post("/api/v1/tasks", json={"description": "Fix fan"}, headers=admin_headers)
    assert resp.status_code == 422
    assert resp.json()["error"] == "Validation error"


async def test_walk_in_guest_for_room(client, staff_headers):
    room = (await client.post(
        "/api/v1/rooms",
        json={"name": "Dorm B", "beds": [{"number": 1}, {"number": 2}]},
        headers=staff_headers,
    )).json()["data"]
    assert [b["status"] for b in room["beds"]] == ["Ready", "Ready"]

    resp = await client.post(
        "/api/v1/walk-in-guests",
        json={"guestName": "Sam", "roomId": room["id"], "bedNumber": 2, "checkInDate": "2024-03-01",
              "numberOfNights": 3, "pricePerNight": 350, "paymentMethod": "Cash", "status": "Paid"},
        headers=staff_headers,
    )
    assert resp.status_code == 201, resp.text
    assert resp.json()["message"] == 'Walk-in guest "Sam" created successfully!'


async def test_store_failure_is_503_and_leaves_list_unchanged(client, admin_headers, monkeypatch):
    await client.post("/api/v1/payment-types", json={"name": "Cash"}, headers=admin_headers)
    before = (await client.get("/api/v1/payment-types", headers=admin_headers)).json()["data"]

    async def broken_insert(self, *, obj_in):
        raise OperationalError("INSERT", {}, Exception("connection lost"))

    monkeypatch.setattr(BaseRepository, "insert", broken_insert)
    resp = await client.post("/api/v1/payment-types", json={"name": "QR"}, headers=admin_headers)
    assert resp.status_code == 503
    assert resp.json()["error"] == "Failed to add payment type. Please try again."

    monkeypatch.undo()
    after = (await client.get("/api/v1/payment-types", headers=admin_headers)).json()["data"]
    assert after == before


@pytest.mark.parametrize("path", ["/api/v1/utility-records", "/api/v1/external-sales", "/api/v1/shifts"])
async def test_newest_first(client, admin_headers, path):
    bodies = {
        "/api/v1/utility-records": lambda d: {"utilityType": "Water", "date": d, "cost": 10},
        "/api/v1/external-sales": lambda d: {"date": d, "amount": 10},
        "/api/v1/shifts": lambda d: {"date": d, "staffName": "Nok", "startTime": "08:00", "endTime": "16:00"},
    }
    for day in ("2024-01-02", "2024-03-01", "2024-02-10"):
        resp = await client.post(path, json=bodies[path](day), headers=admin_headers)
        assert resp.status_code == 201, resp.text
    resp = await client.get(path, headers=admin_headers)
    assert [r["date"] for r in resp.json()["data"]] == ["2024-03-01", "2024-02-10", "2024-01-02"]


async def test_deleting_staff_refreshes_hr_and_user_lists(client, admin_headers, staff_member):
    staff_id = staff_member["id"]
    await client.post("/api/v1/absences", json={"staffId": staff_id, "date": "2024-03-06", "reason": "sick"},
                      headers=admin_headers)
    await client.post("/api/v1/salary-advances", json={"staffId": staff_id, "date": "2024-03-05", "amount": 500},
                      headers=admin_headers)
    await client.post("/api/v1/users", json={"username": "nok", "password": "secret1", "role": "Staff",
                                             "staffId": staff_id}, headers=admin_headers)

    # Load every mirror before the delete
    assert len((await client.get("/api/v1/absences", headers=admin_headers)).json()["data"]) == 1
    assert len((await client.get("/api/v1/salary-advances", headers=admin_headers)).json()["data"]) == 1
    await client.get("/api/v1/users", headers=admin_headers)

    resp = await client.delete(f"/api/v1/staff/{staff_id}", headers=admin_headers)
    assert resp.status_code == 200, resp.text

    assert (await client.get("/api/v1/absences", headers=admin_headers)).json()["data"] == []
    assert (await client.get("/api/v1/salary-advances", headers=admin_headers)).json()["data"] == []
    users = (await client.get("/api/v1/users", headers=admin_headers)).json()["data"]
    assert {u["username"]: u["staffId"] for u in users}["nok"] is None


async def test_room_with_guests_cannot_be_deleted(client, admin_headers):
    room = (await client.post("/api/v1/rooms", json={"name": "Dorm B", "beds": [{"number": 1}]},
                              headers=admin_headers)).json()["data"]
    guest = (await client.post(
        "/api/v1/walk-in-guests",
        json={"guestName": "Sam", "roomId": room["id"], "bedNumber": 1, "checkInDate": "2024-03-01",
              "numberOfNights": 2, "pricePerNight": 350, "paymentMethod": "Cash", "status": "Paid"},
        headers=admin_headers,
    )).json()["data"]
    await client.get("/api/v1/rooms", headers=admin_headers)

    resp = await client.delete(f"/api/v1/rooms/{room['id']}", headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == 'Room "Dorm B" has 1 walk-in guest(s) and cannot be deleted'
    rooms = (await client.get("/api/v1/rooms", headers=admin_headers)).json()["data"]
    assert [r["id"] for r in rooms] == [room["id"]]

    await client.delete(f"/api/v1/walk-in-guests/{guest['id']}", headers=admin_headers)
    resp = await client.delete(f"/api/v1/rooms/{room['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert (await client.get("/api/v1/rooms", headers=admin_headers)).json()["data"] == []
