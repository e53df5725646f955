# villagestay/db/crud_bookings.py

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from villagestay.db.models import Booking


async def get_booking(db: AsyncSession, booking_id: int) -> Optional[Booking]:
    stmt = (
        select(Booking)
        .options(selectinload(Booking.homestay), selectinload(Booking.user))
        .where(Booking.id == booking_id)
        .execution_options(populate_existing=True)
    )
    res = await db.execute(stmt)
    return res.scalars().first()


async def list_bookings_for_user(db: AsyncSession, user_id: int) -> List[Booking]:
    stmt = (
        select(Booking)
        .options(selectinload(Booking.homestay))
        .where(Booking.user_id == user_id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def list_all_bookings(
    db: AsyncSession,
    status: Optional[str] = None,
) -> List[Booking]:
    """
    Admin list: every booking with guest and homestay loaded.
    """
    stmt = select(Booking).options(
        selectinload(Booking.homestay),
        selectinload(Booking.user),
    )
    if status:
        stmt = stmt.where(Booking.status == status)
    stmt = stmt.order_by(Booking.created_at.desc(), Booking.id.desc())
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def delete_booking(db: AsyncSession, booking: Booking):
    await db.delete(booking)
    await db.commit()
    return True
