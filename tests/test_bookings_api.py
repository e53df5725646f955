from villagestay.db.models import BookingStatus

from conftest import auth_headers, future, make_booking, make_homestay


def _payload(homestay_id, check_in, check_out, guests=2, **extra):
    body = {
        "homestay_id": homestay_id,
        "check_in_date": check_in.isoformat(),
        "check_out_date": check_out.isoformat(),
        "number_of_guests": guests,
    }
    body.update(extra)
    return body


async def test_booking_requires_login(client, homestay):
    r = await client.post("/api/bookings", json=_payload(homestay.id, future(3), future(5)))
    assert r.status_code == 401


async def test_create_booking_ignores_client_total(client, homestay, user_headers):
    r = await client.post(
        "/api/bookings",
        json=_payload(homestay.id, future(3), future(6), total_price=1),
        headers=user_headers,
    )
    assert r.status_code == 201
    data = r.json()["data"]
    assert data["status"] == "PENDING"
    assert data["total_price"] == 300


async def test_invalid_dates_rejected_before_lookup(client, user_headers):
    r = await client.post(
        "/api/bookings",
        json=_payload(9999, future(5), future(3)),
        headers=user_headers,
    )
    assert r.status_code == 400
    assert r.json()["reason"] == "INVALID_DATES"


async def test_past_check_in(client, homestay, user_headers):
    r = await client.post(
        "/api/bookings",
        json=_payload(homestay.id, future(-2), future(2)),
        headers=user_headers,
    )
    assert r.status_code == 400
    assert r.json()["reason"] == "INVALID_DATES"


async def test_guest_limit(client, homestay, user_headers):
    r = await client.post(
        "/api/bookings",
        json=_payload(homestay.id, future(3), future(5), guests=9),
        headers=user_headers,
    )
    assert r.status_code == 400
    body = r.json()
    assert body["reason"] == "GUEST_LIMIT_EXCEEDED"
    assert body["detail"] == "Maximum guests is 4"


async def test_unpublished_homestay_is_not_found(client, db, user_headers):
    hidden = await make_homestay(db, published=False)
    r = await client.post(
        "/api/bookings",
        json=_payload(hidden.id, future(3), future(5)),
        headers=user_headers,
    )
    assert r.status_code == 404


async def test_overlapping_booking_conflicts(client, homestay, user_headers, other_user):
    r = await client.post(
        "/api/bookings",
        json=_payload(homestay.id, future(10), future(13)),
        headers=user_headers,
    )
    assert r.status_code == 201

    r = await client.post(
        "/api/bookings",
        json=_payload(homestay.id, future(11), future(12)),
        headers=auth_headers(other_user),
    )
    assert r.status_code == 409
    assert r.json()["reason"] == "NOT_AVAILABLE"

    r = await client.post(
        "/api/bookings",
        json=_payload(homestay.id, future(13), future(15)),
        headers=auth_headers(other_user),
    )
    assert r.status_code == 201


async def test_list_and_get_own_bookings(client, db, homestay, user, other_user, user_headers):
    mine = await make_booking(db, homestay, user, future(3), future(5))
    theirs = await make_booking(db, homestay, other_user, future(7), future(9))

    r = await client.get("/api/bookings", headers=user_headers)
    assert r.status_code == 200
    items = r.json()["items"]
    assert [b["id"] for b in items] == [mine.id]
    assert items[0]["homestay"]["slug"] == homestay.slug

    r = await client.get(f"/api/bookings/{mine.id}", headers=user_headers)
    assert r.status_code == 200

    r = await client.get(f"/api/bookings/{theirs.id}", headers=user_headers)
    assert r.status_code == 404


async def test_cancel_own_booking(client, db, homestay, user, user_headers):
    booking = await make_booking(db, homestay, user, future(3), future(5))

    r = await client.post(f"/api/bookings/{booking.id}/cancel", headers=user_headers)
    assert r.status_code == 200
    assert r.json()["data"]["status"] == "CANCELLED"

    r = await client.post(f"/api/bookings/{booking.id}/cancel", headers=user_headers)
    assert r.status_code == 409
    assert r.json()["reason"] == "INVALID_STATUS_TRANSITION"


async def test_completed_booking_cannot_be_cancelled(client, db, homestay, user, user_headers):
    booking = await make_booking(
        db, homestay, user, future(3), future(5), status=BookingStatus.COMPLETED
    )
    r = await client.post(f"/api/bookings/{booking.id}/cancel", headers=user_headers)
    assert r.status_code == 409
