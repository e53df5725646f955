from decimal import Decimal

from villagestay.db.models import BookingStatus, Review

from conftest import future, make_booking, make_homestay


async def test_listing_shows_published_only(client, db):
    shown = await make_homestay(db, n=1, featured=True)
    await make_homestay(db, n=2, published=False)
    plain = await make_homestay(db, n=3)

    r = await client.get("/api/homestays")
    assert r.status_code == 200
    assert {h["id"] for h in r.json()} == {shown.id, plain.id}

    r = await client.get("/api/homestays", params={"featured": "true"})
    assert [h["id"] for h in r.json()] == [shown.id]


async def test_filter_by_price_guests_and_facilities(client, db):
    cheap = await make_homestay(
        db, n=1, price_per_night=Decimal("50"), facilities=["WiFi", "Kitchen"]
    )
    await make_homestay(db, n=2, price_per_night=Decimal("500"), facilities=["WiFi"])
    roomy = await make_homestay(
        db, n=3, price_per_night=Decimal("120"), max_guests=8, facilities=["Kitchen"]
    )

    r = await client.get("/api/homestays/filter", params={"max_price": 200, "sort": "price_asc"})
    body = r.json()
    assert body["success"] is True
    assert [h["id"] for h in body["data"]] == [cheap.id, roomy.id]
    assert body["count"] == 2

    r = await client.get("/api/homestays/filter", params={"guests": 6})
    assert [h["id"] for h in r.json()["data"]] == [roomy.id]

    r = await client.get(
        "/api/homestays/filter", params=[("facilities", "WiFi"), ("facilities", "Kitchen")]
    )
    assert [h["id"] for h in r.json()["data"]] == [cheap.id]


async def test_filter_rejects_unknown_sort(client):
    r = await client.get("/api/homestays/filter", params={"sort": "random"})
    assert r.status_code == 422


async def test_facilities_are_distinct_and_sorted(client, db):
    await make_homestay(db, n=1, facilities=["WiFi", "Kitchen"])
    await make_homestay(db, n=2, facilities=["Garden", "WiFi"])
    await make_homestay(db, n=3, facilities=["Pool"], published=False)

    r = await client.get("/api/homestays/facilities")
    assert r.json()["data"] == ["Garden", "Kitchen", "WiFi"]


async def test_detail_has_reviews_and_average(client, db, homestay, user, other_user):
    for author, rating in ((user, 5), (other_user, 4)):
        db.add(Review(user_id=author.id, homestay_id=homestay.id, rating=rating, comment="Nice"))
    await db.commit()

    r = await client.get(f"/api/homestays/{homestay.slug}")
    assert r.status_code == 200
    body = r.json()
    assert body["avg_rating"] == 4.5
    assert body["review_count"] == 2
    assert {rv["user"]["name"] for rv in body["reviews"]} == {"Guest One", "Guest Two"}


async def test_unpublished_detail_is_hidden(client, db):
    hidden = await make_homestay(db, published=False)
    r = await client.get(f"/api/homestays/{hidden.slug}")
    assert r.status_code == 404


async def test_availability_suggests_alternatives_when_taken(client, db, user):
    wanted = await make_homestay(db, n=1)
    other = await make_homestay(db, n=2)
    await make_booking(db, wanted, user, future(10), future(12), status=BookingStatus.CONFIRMED)

    r = await client.post(
        "/api/homestays/availability",
        json={
            "homestay_id": wanted.id,
            "check_in_date": future(11).isoformat(),
            "check_out_date": future(13).isoformat(),
            "number_of_guests": 2,
        },
    )
    assert r.status_code == 200
    body = r.json()
    assert body["available"] is False
    assert body["reason"] == "NOT_AVAILABLE"
    assert [h["id"] for h in body["alternatives"]] == [other.id]


async def test_availability_guest_limit_has_no_alternatives(client, homestay):
    r = await client.post(
        "/api/homestays/availability",
        json={
            "homestay_id": homestay.id,
            "check_in_date": future(3).isoformat(),
            "check_out_date": future(5).isoformat(),
            "number_of_guests": 10,
        },
    )
    body = r.json()
    assert body["reason"] == "GUEST_LIMIT_EXCEEDED"
    assert body["alternatives"] == []


async def test_availability_bad_dates_and_missing_homestay(client):
    r = await client.post(
        "/api/homestays/availability",
        json={
            "homestay_id": 1,
            "check_in_date": future(5).isoformat(),
            "check_out_date": future(5).isoformat(),
        },
    )
    assert r.status_code == 400
    assert r.json()["reason"] == "INVALID_DATES"

    r = await client.post(
        "/api/homestays/availability",
        json={
            "homestay_id": 404,
            "check_in_date": future(3).isoformat(),
            "check_out_date": future(5).isoformat(),
        },
    )
    assert r.status_code == 404


async def test_alternatives_endpoint(client, db):
    homestays = [await make_homestay(db, n=i) for i in range(1, 6)]
    r = await client.post(
        "/api/homestays/alternatives",
        json={
            "check_in_date": future(3).isoformat(),
            "check_out_date": future(5).isoformat(),
            "exclude_homestay_id": homestays[1].id,
        },
    )
    body = r.json()
    assert body["count"] == 3
    assert [h["id"] for h in body["alternatives"]] == [
        homestays[0].id,
        homestays[2].id,
        homestays[3].id,
    ]


async def test_availability_by_slug(client, db, homestay, user):
    await make_booking(db, homestay, user, future(3), future(5))

    r = await client.get(
        f"/api/homestays/{homestay.slug}/availability",
        params={"check_in": future(4).isoformat(), "check_out": future(6).isoformat()},
    )
    assert r.json()["available"] is False

    r = await client.get(
        f"/api/homestays/{homestay.slug}/availability",
        params={"check_in": future(5).isoformat(), "check_out": future(6).isoformat()},
    )
    assert r.json()["available"] is True
    assert r.json()["reason"] == "AVAILABLE"
