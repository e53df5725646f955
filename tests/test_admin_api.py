from villagestay.db.models import BookingStatus

from conftest import future, make_booking

HOMESTAY = {
    "name": "Lakeside Cabin",
    "slug": "lakeside-cabin",
    "description": "Wooden cabin right next to the lake.",
    "address": "Lake Road 5",
    "price_per_night": 175.5,
    "max_guests": 3,
    "facilities": ["WiFi"],
    "published": True,
}


async def test_admin_routes_need_admin(client, user_headers):
    r = await client.get("/api/admin/stats")
    assert r.status_code == 401
    r = await client.get("/api/admin/stats", headers=user_headers)
    assert r.status_code == 403
    r = await client.post("/api/admin/homestays", json=HOMESTAY, headers=user_headers)
    assert r.status_code == 403


async def test_homestay_crud(client, admin_headers):
    r = await client.post("/api/admin/homestays", json=HOMESTAY, headers=admin_headers)
    assert r.status_code == 201
    created = r.json()
    assert created["price_per_night"] == 175.5

    r = await client.post("/api/admin/homestays", json=HOMESTAY, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["reason"] == "DUPLICATE_SLUG"

    r = await client.patch(
        f"/api/admin/homestays/{created['id']}",
        json={"max_guests": 5, "featured": True},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["max_guests"] == 5
    assert r.json()["featured"] is True

    r = await client.get("/api/admin/homestays", headers=admin_headers)
    rows = r.json()
    assert rows[0]["booking_count"] == 0
    assert rows[0]["review_count"] == 0

    r = await client.delete(f"/api/admin/homestays/{created['id']}", headers=admin_headers)
    assert r.status_code == 200
    r = await client.get(f"/api/admin/homestays/{created['id']}", headers=admin_headers)
    assert r.status_code == 404


async def test_homestay_validation(client, admin_headers):
    bad = dict(HOMESTAY, slug="Not A Slug", price_per_night=0)
    r = await client.post("/api/admin/homestays", json=bad, headers=admin_headers)
    assert r.status_code == 422


async def test_booking_status_changes(client, db, homestay, user, admin_headers):
    booking = await make_booking(db, homestay, user, future(3), future(5))
    url = f"/api/admin/bookings/{booking.id}"

    r = await client.patch(url, json={"status": "COMPLETED"}, headers=admin_headers)
    assert r.status_code == 409

    r = await client.patch(url, json={"status": "CONFIRMED"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "CONFIRMED"
    assert r.json()["user"]["email"] == user.email

    r = await client.patch(url, json={"status": "COMPLETED"}, headers=admin_headers)
    assert r.json()["status"] == "COMPLETED"

    r = await client.patch(url, json={"status": "BOGUS"}, headers=admin_headers)
    assert r.status_code == 422


async def test_booking_list_filter_and_delete(client, db, homestay, user, admin_headers):
    pending = await make_booking(db, homestay, user, future(3), future(5))
    await make_booking(
        db, homestay, user, future(6), future(8), status=BookingStatus.CANCELLED
    )

    r = await client.get(
        "/api/admin/bookings", params={"status": "PENDING"}, headers=admin_headers
    )
    assert [b["id"] for b in r.json()["data"]] == [pending.id]

    r = await client.delete(f"/api/admin/bookings/{pending.id}", headers=admin_headers)
    assert r.status_code == 200
    r = await client.get(f"/api/admin/bookings/{pending.id}", headers=admin_headers)
    assert r.status_code == 404


async def test_stats(client, db, homestay, user, admin_headers):
    await make_booking(db, homestay, user, future(3), future(5))
    await make_booking(
        db, homestay, user, future(6), future(8), status=BookingStatus.CONFIRMED
    )

    r = await client.get("/api/admin/stats", headers=admin_headers)
    stats = r.json()
    assert stats["total_users"] == 2
    assert stats["total_homestays"] == 1
    assert stats["total_bookings"] == 2
    assert stats["bookings_by_status"]["PENDING"] == 1
    assert stats["bookings_by_status"]["CONFIRMED"] == 1
    assert stats["unread_messages"] == 0


async def test_user_roles(client, user, admin_headers):
    r = await client.put(
        f"/api/admin/users/{user.id}/role", json={"role": "admin"}, headers=admin_headers
    )
    assert r.status_code == 200
    assert r.json()["role"] == "admin"

    r = await client.put(
        "/api/admin/users/9999/role", json={"role": "admin"}, headers=admin_headers
    )
    assert r.status_code == 404

    r = await client.get("/api/admin/users", headers=admin_headers)
    assert len(r.json()["data"]) == 2


async def test_optional_homestay_fields_can_be_cleared(client, admin_headers):
    body = dict(HOMESTAY, maps_embed_code="<iframe src='x'></iframe>", latitude=-7.5)
    r = await client.post("/api/admin/homestays", json=body, headers=admin_headers)
    homestay_id = r.json()["id"]

    r = await client.patch(
        f"/api/admin/homestays/{homestay_id}",
        json={"maps_embed_code": None, "latitude": None},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["maps_embed_code"] is None
    assert r.json()["latitude"] is None
    assert r.json()["name"] == HOMESTAY["name"]

    r = await client.patch(
        f"/api/admin/homestays/{homestay_id}", json={"name": None}, headers=admin_headers
    )
    assert r.status_code == 422
