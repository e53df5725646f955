PLACE = {
    "name": "Sunrise Waterfall",
    "description": "A short hike through the forest to a tall waterfall.",
    "location": "North hills",
    "published": True,
}


async def _category(client, admin_headers, name="Travel Tips"):
    r = await client.post("/api/admin/categories", json={"name": name}, headers=admin_headers)
    assert r.status_code == 201
    return r.json()


async def test_posts_are_slugged_and_filtered(client, admin_headers):
    tips = await _category(client, admin_headers)
    food = await _category(client, admin_headers, "Food")
    assert tips["slug"] == "travel-tips"

    r = await client.post(
        "/api/admin/posts",
        json={
            "title": "Packing for the Village",
            "content": "Bring light clothes and a rain jacket for the afternoons.",
            "category_id": tips["id"],
            "published": True,
        },
        headers=admin_headers,
    )
    assert r.status_code == 201
    post = r.json()
    assert post["slug"] == "packing-for-the-village"
    assert post["author"]["name"] == "Admin"
    assert post["category"]["slug"] == "travel-tips"

    await client.post(
        "/api/admin/posts",
        json={
            "title": "Draft about noodles",
            "content": "Not ready yet, still tasting the noodles.",
            "category_id": food["id"],
        },
        headers=admin_headers,
    )

    r = await client.get("/api/posts")
    assert [p["slug"] for p in r.json()] == ["packing-for-the-village"]

    r = await client.get("/api/posts", params={"category": "food"})
    assert r.json() == []

    r = await client.get("/api/posts/draft-about-noodles")
    assert r.status_code == 404

    r = await client.get("/api/categories")
    assert [c["name"] for c in r.json()] == ["Food", "Travel Tips"]


async def test_post_needs_existing_category(client, admin_headers):
    r = await client.post(
        "/api/admin/posts",
        json={
            "title": "Orphan post title",
            "content": "This post points at a category that does not exist.",
            "category_id": 42,
        },
        headers=admin_headers,
    )
    assert r.status_code == 404


async def test_attractions_crud(client, admin_headers):
    r = await client.post("/api/admin/attractions", json=PLACE, headers=admin_headers)
    assert r.status_code == 201
    item = r.json()
    assert item["slug"] == "sunrise-waterfall"

    r = await client.post("/api/admin/attractions", json=PLACE, headers=admin_headers)
    assert r.status_code == 400

    r = await client.get("/api/attractions/sunrise-waterfall")
    assert r.status_code == 200

    r = await client.patch(
        f"/api/admin/attractions/{item['id']}",
        json={"published": False},
        headers=admin_headers,
    )
    assert r.json()["published"] is False
    r = await client.get("/api/attractions")
    assert r.json() == []

    r = await client.delete(f"/api/admin/attractions/{item['id']}", headers=admin_headers)
    assert r.status_code == 200


async def test_culinary_keeps_price_range(client, admin_headers):
    r = await client.post(
        "/api/admin/culinary",
        json=dict(PLACE, name="Grandma's Kitchen", price_range="20k - 50k"),
        headers=admin_headers,
    )
    assert r.status_code == 201
    slug = r.json()["slug"]

    r = await client.get(f"/api/culinary/{slug}")
    assert r.json()["price_range"] == "20k - 50k"


async def test_content_admin_needs_admin(client, user_headers):
    r = await client.post("/api/admin/categories", json={"name": "Culture"}, headers=user_headers)
    assert r.status_code == 403


async def test_culinary_price_range_can_be_cleared(client, admin_headers):
    r = await client.post(
        "/api/admin/culinary",
        json=dict(PLACE, name="Warung Sate", price_range="10k - 30k"),
        headers=admin_headers,
    )
    item_id = r.json()["id"]

    r = await client.patch(
        f"/api/admin/culinary/{item_id}",
        json={"price_range": None},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["price_range"] is None
    assert r.json()["location"] == PLACE["location"]

    r = await client.patch(
        f"/api/admin/culinary/{item_id}", json={"location": None}, headers=admin_headers
    )
    assert r.status_code == 422


async def test_name_without_latin_letters_is_rejected(client, admin_headers):
    r = await client.post("/api/admin/categories", json={"name": "日本"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["reason"] == "INVALID_NAME"

    r = await client.post("/api/admin/categories", json={"name": "Kafé Desa"}, headers=admin_headers)
    assert r.status_code == 201
    assert r.json()["slug"] == "kafe-desa"
