import pytest


@pytest.fixture
async def island_hopping(client, admin_headers):
    resp = await client.post(
        "/api/v1/activities",
        json={"name": "Island Hopping", "price": 1000, "type": "Internal", "commission": 50},
        headers=admin_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def _activity_sale(activity_id, staff_id, **kw):
    body = {
        "activityId": activity_id,
        "staffId": staff_id,
        "bookingDate": "2024-03-01",
        "paymentMethod": "Cash",
        "numberOfPeople": 2,
        "discount": 100,
        "extras": [{"name": "Snorkel set", "price": 200}],
        "fuelCost": 500,
        "captainCost": 300,
    }
    body.update(kw)
    return body


async def test_sell_activity(client, staff_headers, staff_member, island_hopping):
    resp = await client.post(
        "/api/v1/bookings/activity",
        json=_activity_sale(island_hopping["id"], staff_member["id"]),
        headers=staff_headers,
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    booking = body["data"]
    assert booking["itemType"] == "activity"
    assert booking["itemName"] == "Island Hopping"
    assert booking["customerPrice"] == 2000
    assert booking["itemCost"] == 800
    assert booking["extrasTotal"] == 200
    assert booking["employeeCommission"] == 100
    assert booking["bookingDate"] == "2024-03-01"
    assert "Booking confirmed for Island Hopping by Nok!" in body["message"]
    assert "Final Price: 2100 THB" in body["message"]

    listed = await client.get("/api/v1/bookings", headers=staff_headers)
    assert [b["id"] for b in listed.json()["data"]] == [booking["id"]]


async def test_computed_fields_cannot_be_posted(client, admin_headers, staff_member, island_hopping):
    body = _activity_sale(island_hopping["id"], staff_member["id"], customerPrice=1)
    resp = await client.post("/api/v1/bookings/activity", json=body, headers=admin_headers)
    assert resp.status_code == 201
    assert resp.json()["data"]["customerPrice"] == 2000


async def test_unknown_activity_persists_nothing(client, admin_headers, staff_member):
    resp = await client.post(
        "/api/v1/bookings/activity",
        json=_activity_sale("missing", staff_member["id"]),
        headers=admin_headers,
    )
    assert resp.status_code == 404
    assert resp.json()["details"]["entity"] == "Activity"
    listed = await client.get("/api/v1/bookings", headers=admin_headers, params={"refresh": "true"})
    assert listed.json()["data"] == []


async def test_unknown_seller_rejected(client, admin_headers, island_hopping):
    resp = await client.post(
        "/api/v1/bookings/activity",
        json=_activity_sale(island_hopping["id"], "ghost"),
        headers=admin_headers,
    )
    assert resp.status_code == 404
    assert resp.json()["details"]["entity"] == "Staff"


async def test_zero_people_rejected(client, admin_headers, staff_member, island_hopping):
    resp = await client.post(
        "/api/v1/bookings/activity",
        json=_activity_sale(island_hopping["id"], staff_member["id"], numberOfPeople=0),
        headers=admin_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["details"]["field"] == "numberOfPeople"


async def test_sell_private_tour(client, admin_headers, staff_member):
    resp = await client.post(
        "/api/v1/bookings/private-tour",
        json={
            "staffId": staff_member["id"], "bookingDate": "2024-03-02", "paymentMethod": "Transfer",
            "tourType": "Half Day", "price": 3000, "numberOfPeople": 4,
            "fuelCost": 400, "captainCost": 200, "employeeCommission": 150, "hostelCommission": 300,
        },
        headers=admin_headers,
    )
    assert resp.status_code == 201, resp.text
    booking = resp.json()["data"]
    assert booking["itemId"] == "private_tour"
    assert booking["itemCost"] == 600
    assert booking["employeeCommission"] == 150
    assert booking["hostelCommission"] == 300


async def test_sell_paddle_board(client, admin_headers, staff_member):
    resp = await client.post(
        "/api/v1/extras",
        json={"id": "paddle_hour", "name": "Paddle Board (hour)", "price": 150},
        headers=admin_headers,
    )
    assert resp.status_code == 201, resp.text
    assert resp.json()["data"]["id"] == "paddle_hour"

    resp = await client.post(
        "/api/v1/bookings/extra",
        json={"staffId": staff_member["id"], "bookingDate": "2024-03-02", "paymentMethod": "Cash",
              "extraId": "paddle_hour", "quantity": 3},
        headers=admin_headers,
    )
    assert resp.status_code == 201, resp.text
    booking = resp.json()["data"]
    assert booking["itemName"] == "Paddle Board (hour) (3 hours)"
    assert booking["customerPrice"] == 450


async def test_sell_speedboat_and_taxi_boat(client, admin_headers, staff_member):
    trip = (await client.post(
        "/api/v1/speed-boat-trips",
        json={"route": "Pier - Koh Tao", "company": "Lomprayah", "price": 600, "cost": 0, "commission": 30},
        headers=admin_headers,
    )).json()["data"]
    option = (await client.post(
        "/api/v1/taxi-boat-options",
        json={"name": "Round Trip", "price": 400, "commission": 20},
        headers=admin_headers,
    )).json()["data"]
    sale = {"staffId": staff_member["id"], "bookingDate": "2024-03-03", "paymentMethod": "Cash", "numberOfPeople": 2}

    resp = await client.post("/api/v1/bookings/speedboat", json={**sale, "tripId": trip["id"]}, headers=admin_headers)
    assert resp.status_code == 201, resp.text
    assert resp.json()["data"]["itemCost"] == 0
    assert resp.json()["data"]["employeeCommission"] == 60

    resp = await client.post("/api/v1/bookings/taxi-boat", json={**sale, "optionId": option["id"]}, headers=admin_headers)
    assert resp.status_code == 201, resp.text
    assert resp.json()["data"]["itemName"] == "Taxi Boat - Round Trip"
    assert resp.json()["data"]["customerPrice"] == 800


async def test_replace_booking_reruns_calculator(client, admin_headers, staff_member, island_hopping):
    created = (await client.post(
        "/api/v1/bookings/activity",
        json=_activity_sale(island_hopping["id"], staff_member["id"]),
        headers=admin_headers,
    )).json()["data"]

    body = _activity_sale(island_hopping["id"], staff_member["id"], numberOfPeople=3, itemType="activity")
    resp = await client.put(f"/api/v1/bookings/{created['id']}", json=body, headers=admin_headers)
    assert resp.status_code == 200, resp.text
    replaced = resp.json()["data"]
    assert replaced["id"] == created["id"]
    assert replaced["customerPrice"] == 3000
    assert replaced["employeeCommission"] == 150


async def test_replace_missing_booking(client, admin_headers, staff_member, island_hopping):
    body = _activity_sale(island_hopping["id"], staff_member["id"], itemType="activity")
    resp = await client.put("/api/v1/bookings/missing", json=body, headers=admin_headers)
    assert resp.status_code == 404


async def test_delete_booking_twice(client, admin_headers, staff_member, island_hopping):
    created = (await client.post(
        "/api/v1/bookings/activity",
        json=_activity_sale(island_hopping["id"], staff_member["id"]),
        headers=admin_headers,
    )).json()["data"]
    await client.get("/api/v1/bookings", headers=admin_headers)

    assert (await client.delete(f"/api/v1/bookings/{created['id']}", headers=admin_headers)).status_code == 200
    assert (await client.delete(f"/api/v1/bookings/{created['id']}", headers=admin_headers)).status_code == 404
    assert (await client.get("/api/v1/bookings", headers=admin_headers)).json()["data"] == []


async def test_export_csv(client, admin_headers, staff_member, island_hopping):
    await client.post(
        "/api/v1/bookings/activity",
        json=_activity_sale(island_hopping["id"], staff_member["id"]),
        headers=admin_headers,
    )
    resp = await client.get("/api/v1/bookings/export", params={"format": "csv"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    lines = resp.text.strip().splitlines()
    assert lines[0].startswith("id,itemId,itemType,itemName")
    assert len(lines) == 2


async def test_staff_summary(client, admin_headers, staff_member, island_hopping):
    await client.post(
        "/api/v1/bookings/activity",
        json=_activity_sale(island_hopping["id"], staff_member["id"]),
        headers=admin_headers,
    )
    await client.post(
        "/api/v1/salary-advances",
        json={"staffId": staff_member["id"], "date": "2024-03-05", "amount": 1000},
        headers=admin_headers,
    )
    await client.post(
        "/api/v1/absences",
        json={"staffId": staff_member["id"], "date": "2024-03-06", "reason": "sick"},
        headers=admin_headers,
    )
    resp = await client.get(
        f"/api/v1/reports/staff/{staff_member['id']}",
        params={"dateFrom": "2024-03-01", "dateTo": "2024-03-31"},
        headers=admin_headers,
    )
    assert resp.status_code == 200, resp.text
    summary = resp.json()["data"]
    assert summary["salesCount"] == 1
    assert summary["commissionTotal"] == 100
    assert summary["salaryAdvancesTotal"] == 1000
    assert summary["absenceCount"] == 1
    assert summary["netPayable"] == 15000 + 100 - 1000


async def test_staff_with_sales_cannot_be_deleted(client, admin_headers, staff_member, island_hopping):
    await client.post(
        "/api/v1/bookings/activity",
        json=_activity_sale(island_hopping["id"], staff_member["id"]),
        headers=admin_headers,
    )
    await client.get("/api/v1/staff", headers=admin_headers)

    resp = await client.delete(f"/api/v1/staff/{staff_member['id']}", headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == 'Staff member "Nok" has 1 booking(s) and cannot be deleted'

    staff = (await client.get("/api/v1/staff", headers=admin_headers)).json()["data"]
    assert [s["id"] for s in staff] == [staff_member["id"]]
    bookings = (await client.get("/api/v1/bookings", headers=admin_headers, params={"refresh": "true"})).json()["data"]
    assert len(bookings) == 1


async def test_discount_above_total_is_rejected(client, admin_headers, staff_member, island_hopping):
    resp = await client.post(
        "/api/v1/bookings/activity",
        json=_activity_sale(island_hopping["id"], staff_member["id"], discount=5000),
        headers=admin_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["details"] == {"field": "discount"}
    listed = await client.get("/api/v1/bookings", headers=admin_headers, params={"refresh": "true"})
    assert listed.json()["data"] == []
