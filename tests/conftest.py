"""
Shared fixtures: a throwaway SQLite file database and an HTTP client
wired straight to the ASGI app.
"""
import os
import tempfile
from datetime import date, timedelta
from decimal import Decimal

# settings are read on first import, so point them at the test database first
_TMP_DIR = tempfile.mkdtemp(prefix="villagestay-tests-")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(_TMP_DIR, "test.db")
os.environ["STATIC_UPLOAD_DIR"] = os.path.join(_TMP_DIR, "uploads")

import pytest
from httpx import ASGITransport, AsyncClient

from villagestay.core.security import create_access_token
from villagestay.db import crud_homestays, crud_users
from villagestay.db.base import Base
from villagestay.db.models import Booking, BookingStatus
from villagestay.db.session import AsyncSessionLocal, engine
from villagestay.main import app


def future(days: int) -> date:
    return date.today() + timedelta(days=days)


def auth_headers(user) -> dict:
    token = create_access_token({"user_id": user.id, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


async def make_homestay(db, **overrides):
    n = overrides.pop("n", 1)
    data = {
        "name": f"Homestay {n}",
        "slug": f"homestay-{n}",
        "description": "A quiet homestay near the rice fields.",
        "address": "Jalan Desa 1",
        "price_per_night": Decimal("100"),
        "max_guests": 4,
        "photos": [],
        "facilities": [],
        "published": True,
    }
    data.update(overrides)
    return await crud_homestays.create_homestay(db, **data)


async def make_booking(
    db,
    homestay,
    user,
    check_in: date,
    check_out: date,
    status: str = BookingStatus.PENDING,
    guests: int = 2,
):
    """
    Insert a booking directly, bypassing availability checks.
    """
    booking = Booking(
        homestay_id=homestay.id,
        user_id=user.id,
        check_in_date=check_in,
        check_out_date=check_out,
        number_of_guests=guests,
        total_price=Decimal("0"),
        status=status,
    )
    db.add(booking)
    await db.commit()
    await db.refresh(booking)
    return booking


@pytest.fixture
async def db_schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    # pooled connections must not outlive this test's event loop
    await engine.dispose()


@pytest.fixture
async def db(db_schema):
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def client(db_schema):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def user(db):
    return await crud_users.create_user(
        db, name="Guest One", email="guest@example.com", password="secret123"
    )


@pytest.fixture
async def other_user(db):
    return await crud_users.create_user(
        db, name="Guest Two", email="guest2@example.com", password="secret123"
    )


@pytest.fixture
async def admin(db):
    return await crud_users.create_user(
        db, name="Admin", email="admin@example.com", password="secret123", role="admin"
    )


@pytest.fixture
def user_headers(user):
    return auth_headers(user)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
async def homestay(db):
    return await make_homestay(db)
