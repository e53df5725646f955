from villagestay.db.models import BookingStatus

from conftest import auth_headers, future, make_booking


async def test_review_needs_completed_booking(client, db, homestay, user, user_headers):
    booking = await make_booking(db, homestay, user, future(3), future(5))
    r = await client.post(
        "/api/reviews",
        json={"homestay_id": homestay.id, "booking_id": booking.id, "rating": 5},
        headers=user_headers,
    )
    assert r.status_code == 400
    assert r.json()["reason"] == "REVIEW_NOT_ALLOWED"


async def test_one_review_per_homestay(client, db, homestay, user, user_headers):
    booking = await make_booking(
        db, homestay, user, future(-5), future(-2), status=BookingStatus.COMPLETED
    )
    payload = {
        "homestay_id": homestay.id,
        "booking_id": booking.id,
        "rating": 4,
        "comment": "  Lovely hosts  ",
    }

    r = await client.post("/api/reviews", json=payload, headers=user_headers)
    assert r.status_code == 201
    body = r.json()
    assert body["comment"] == "Lovely hosts"
    assert body["user"]["name"] == "Guest One"

    r = await client.post("/api/reviews", json=payload, headers=user_headers)
    assert r.status_code == 400

    r = await client.get("/api/reviews", params={"homestay_id": homestay.id})
    assert [rv["rating"] for rv in r.json()] == [4]


async def test_cannot_review_with_someone_elses_booking(client, db, homestay, user, other_user):
    booking = await make_booking(
        db, homestay, user, future(-5), future(-2), status=BookingStatus.COMPLETED
    )
    r = await client.post(
        "/api/reviews",
        json={"homestay_id": homestay.id, "booking_id": booking.id, "rating": 3},
        headers=auth_headers(other_user),
    )
    assert r.status_code == 400


async def test_rating_range(client, homestay, user_headers):
    r = await client.post(
        "/api/reviews",
        json={"homestay_id": homestay.id, "booking_id": 1, "rating": 6},
        headers=user_headers,
    )
    assert r.status_code == 422


async def test_reviews_of_missing_homestay(client):
    r = await client.get("/api/reviews", params={"homestay_id": 404})
    assert r.status_code == 404
