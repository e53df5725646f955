# scripts/seed.py
import asyncio
from decimal import Decimal

from villagestay.core.utils import generate_slug
from villagestay.db.base import Base
from villagestay.db.session import AsyncSessionLocal, engine
from villagestay.db import crud_content, crud_homestays
from villagestay.db.crud_users import create_user, get_user_by_email
from villagestay.db.models import Category

HOMESTAYS = [
    {
        "name": "Traditional Village House",
        "slug": "traditional-village-house",
        "description": "Experience authentic village life in this preserved traditional house with modern amenities.",
        "address": "Village Center, Main Street",
        "price_per_night": Decimal("250000"),
        "max_guests": 4,
        "facilities": ["WiFi", "Air Conditioning", "Kitchen", "Parking"],
        "featured": True,
    },
    {
        "name": "Mountain View Cottage",
        "slug": "mountain-view-cottage",
        "description": "Cozy cottage on the hillside with a view over the rice terraces.",
        "address": "Hillside Road 12",
        "price_per_night": Decimal("350000"),
        "max_guests": 6,
        "facilities": ["WiFi", "Kitchen", "Garden"],
        "featured": True,
    },
    {
        "name": "Riverside Bamboo Hut",
        "slug": "riverside-bamboo-hut",
        "description": "Simple bamboo hut next to the river, ideal for couples.",
        "address": "Riverside Path 3",
        "price_per_night": Decimal("150000"),
        "max_guests": 2,
        "facilities": ["Breakfast", "Garden"],
        "featured": False,
    },
]

CATEGORIES = ["Travel Tips", "Culture", "Food"]


async def seed():
    # create tables (if migrations not run)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        if not await get_user_by_email(db, "admin@villagestay.com"):
            await create_user(
                db,
                name="Admin User",
                email="admin@villagestay.com",
                password="admin123",
                role="admin",
            )

        existing = {c.slug for c in await crud_content.list_categories(db)}
        for name in CATEGORIES:
            if generate_slug(name) not in existing:
                await crud_content.create_item(db, Category, source=name, name=name)

        for data in HOMESTAYS:
            if not await crud_homestays.get_homestay_by_slug(db, data["slug"]):
                await crud_homestays.create_homestay(
                    db,
                    photos=["/static/uploads/sample.jpg"],
                    published=True,
                    **data,
                )
    print("Seed complete")


if __name__ == "__main__":
    asyncio.run(seed())
