# villagestay/services/availability.py
"""
Availability checks for homestays.

All date ranges are half-open: a guest leaving on the 4th frees the homestay
for a guest arriving on the 4th. Only PENDING and CONFIRMED bookings hold
dates.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from villagestay.core.config import get_settings
from villagestay.core.exceptions import InvalidDateRange
from villagestay.db.models import Booking, BookingStatus, Homestay

logger = logging.getLogger("uvicorn.error")


class AvailabilityReason:
    AVAILABLE = "AVAILABLE"
    NOT_AVAILABLE = "NOT_AVAILABLE"
    GUEST_LIMIT_EXCEEDED = "GUEST_LIMIT_EXCEEDED"


@dataclass
class AvailabilityResult:
    available: bool
    reason: str
    message: str


def overlaps(a_start, a_end, b_start, b_end) -> bool:
    return a_start < b_end and a_end > b_start


def validate_date_range(check_in: date, check_out: date) -> None:
    if check_in >= check_out:
        raise InvalidDateRange()


def overlapping_bookings_query(
    homestay_id: int,
    check_in: date,
    check_out: date,
):
    """
    SELECT for blocking bookings of ``homestay_id`` that intersect the range.
    Same predicate as ``overlaps`` with the existing booking on the left.
    """
    return select(Booking.id).where(
        Booking.homestay_id == homestay_id,
        Booking.status.in_(BookingStatus.BLOCKING),
        Booking.check_in_date < check_out,
        Booking.check_out_date > check_in,
    )


async def has_overlapping_booking(
    db: AsyncSession,
    homestay_id: int,
    check_in: date,
    check_out: date,
    *,
    for_update: bool = False,
) -> bool:
    stmt = overlapping_bookings_query(homestay_id, check_in, check_out).limit(1)
    if for_update:
        # locking read: sees rows committed after our snapshot was taken
        stmt = stmt.with_for_update()
    res = await db.execute(stmt)
    return res.first() is not None


async def check_availability(
    db: AsyncSession,
    homestay: Homestay,
    check_in: date,
    check_out: date,
    guests: Optional[int] = None,
) -> AvailabilityResult:
    validate_date_range(check_in, check_out)

    if guests is not None and guests > homestay.max_guests:
        return AvailabilityResult(
            available=False,
            reason=AvailabilityReason.GUEST_LIMIT_EXCEEDED,
            message=f"Number of guests exceeds the maximum capacity ({homestay.max_guests} guests)",
        )

    if await has_overlapping_booking(db, homestay.id, check_in, check_out):
        return AvailabilityResult(
            available=False,
            reason=AvailabilityReason.NOT_AVAILABLE,
            message="Homestay is not available for the selected dates",
        )

    return AvailabilityResult(
        available=True,
        reason=AvailabilityReason.AVAILABLE,
        message="Homestay is available for the selected dates",
    )


async def find_alternatives(
    db: AsyncSession,
    check_in: date,
    check_out: date,
    guests: Optional[int] = None,
    exclude_homestay_id: Optional[int] = None,
    limit: Optional[int] = None,
) -> List[Homestay]:
    """
    Published homestays, other than ``exclude_homestay_id``, that can take
    ``guests`` people and are free for the exact range. Scanned in insertion
    order, stopping as soon as ``limit`` matches are found.
    """
    validate_date_range(check_in, check_out)
    if limit is None:
        limit = get_settings().ALTERNATIVES_LIMIT

    stmt = select(Homestay).where(Homestay.published.is_(True))
    if exclude_homestay_id is not None:
        stmt = stmt.where(Homestay.id != exclude_homestay_id)
    stmt = stmt.order_by(Homestay.id.asc())

    res = await db.execute(stmt)
    candidates = list(res.scalars().all())

    found: List[Homestay] = []
    for homestay in candidates:
        if len(found) >= limit:
            break
        if guests is not None and guests > homestay.max_guests:
            continue
        if await has_overlapping_booking(db, homestay.id, check_in, check_out):
            continue
        found.append(homestay)

    logger.debug(
        "alternatives for %s..%s (guests=%s, exclude=%s): %s",
        check_in,
        check_out,
        guests,
        exclude_homestay_id,
        [h.id for h in found],
    )
    return found
