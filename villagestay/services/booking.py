# villagestay/services/booking.py
"""
Booking creation, pricing and the booking status machine.
"""
import logging
import math
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from villagestay.core.exceptions import (
    GuestLimitExceeded,
    HomestayNotFound,
    HomestayUnavailable,
    InvalidDateRange,
    InvalidStatusTransition,
)
from villagestay.db.models import Booking, BookingStatus, Homestay
from villagestay.services.availability import (
    has_overlapping_booking,
    validate_date_range,
)

logger = logging.getLogger("uvicorn.error")

SECONDS_PER_DAY = 24 * 60 * 60

ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.COMPLETED, BookingStatus.CANCELLED},
    BookingStatus.CANCELLED: set(),
    BookingStatus.COMPLETED: set(),
}


def calculate_nights(check_in, check_out) -> int:
    """
    Whole nights between two dates (or datetimes); partial days round up.
    """
    delta = check_out - check_in
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def calculate_total_price(price_per_night, check_in, check_out) -> Decimal:
    nights = calculate_nights(check_in, check_out)
    return Decimal(nights) * Decimal(str(price_per_night))


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, set())


async def _lock_homestay(db: AsyncSession, homestay_id: int) -> bool:
    """
    Take the homestay row write lock for the rest of the transaction.

    A plain UPDATE locks on every backend we run on (row lock on MySQL and
    PostgreSQL, database write lock on SQLite), so concurrent bookings for
    the same homestay queue up here instead of racing the overlap check.
    """
    stmt = (
        update(Homestay)
        .where(Homestay.id == homestay_id)
        .values(lock_version=Homestay.lock_version + 1)
        .execution_options(synchronize_session=False)
    )
    res = await db.execute(stmt)
    return res.rowcount > 0


async def create_booking(
    db: AsyncSession,
    *,
    user_id: int,
    homestay_id: int,
    check_in: date,
    check_out: date,
    number_of_guests: int,
    notes: Optional[str] = None,
    today: Optional[date] = None,
) -> Booking:
    """
    Create a PENDING booking with a server-computed total price.

    Lock, overlap check and insert share one transaction, so two callers
    asking for overlapping dates cannot both succeed.
    """
    validate_date_range(check_in, check_out)
    if check_in < (today or date.today()):
        raise InvalidDateRange("Check-in date cannot be in the past")

    try:
        if not await _lock_homestay(db, homestay_id):
            raise HomestayNotFound()

        homestay = await db.get(Homestay, homestay_id)
        if homestay is None or not homestay.published:
            raise HomestayNotFound()

        if number_of_guests > homestay.max_guests:
            raise GuestLimitExceeded(homestay.max_guests)

        if await has_overlapping_booking(
            db, homestay_id, check_in, check_out, for_update=True
        ):
            logger.info(
                "booking conflict: homestay=%s %s..%s user=%s",
                homestay_id,
                check_in,
                check_out,
                user_id,
            )
            raise HomestayUnavailable()

        booking = Booking(
            user_id=user_id,
            homestay_id=homestay_id,
            check_in_date=check_in,
            check_out_date=check_out,
            number_of_guests=number_of_guests,
            total_price=calculate_total_price(
                homestay.price_per_night, check_in, check_out
            ),
            notes=notes,
            status=BookingStatus.PENDING,
        )
        db.add(booking)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    await db.refresh(booking)
    logger.info(
        "booking %s created: homestay=%s %s..%s total=%s",
        booking.id,
        homestay_id,
        check_in,
        check_out,
        booking.total_price,
    )
    return booking


async def change_booking_status(
    db: AsyncSession,
    booking: Booking,
    target: str,
) -> Booking:
    """
    Move ``booking`` to ``target`` if the transition is allowed.

    The UPDATE only matches while the row still holds the status we checked,
    so a concurrent change (say the owner cancelling) makes this call fail
    instead of overwriting it.
    """
    current = booking.status
    if not can_transition(current, target):
        raise InvalidStatusTransition(current, target)

    booking_id = booking.id
    try:
        res = await db.execute(
            update(Booking)
            .where(Booking.id == booking_id, Booking.status == current)
            .values(status=target)
            .execution_options(synchronize_session=False)
        )
        if res.rowcount == 0:
            actual = (
                await db.execute(select(Booking.status).where(Booking.id == booking_id))
            ).scalar_one_or_none()
            logger.info(
                "booking %s changed concurrently: expected %s, found %s",
                booking_id,
                current,
                actual,
            )
            raise InvalidStatusTransition(actual or current, target)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    await db.refresh(booking)
    logger.info("booking %s: %s -> %s", booking_id, current, target)
    return booking
