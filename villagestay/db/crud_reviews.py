# villagestay/db/crud_reviews.py

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from villagestay.core.exceptions import ReviewNotAllowed
from villagestay.db.models import Booking, BookingStatus, Review

LATEST_REVIEWS_LIMIT = 10


async def create_review(
    db: AsyncSession,
    *,
    user_id: int,
    homestay_id: int,
    booking_id: int,
    rating: int,
    comment: Optional[str] = None,
) -> Review:
    """
    A review needs a COMPLETED booking of this homestay by this user,
    and each user reviews a homestay at most once.
    """
    res = await db.execute(
        select(Booking.id).where(
            Booking.id == booking_id,
            Booking.user_id == user_id,
            Booking.homestay_id == homestay_id,
            Booking.status == BookingStatus.COMPLETED,
        )
    )
    if res.first() is None:
        raise ReviewNotAllowed()

    existing = await db.execute(
        select(Review.id).where(
            Review.user_id == user_id,
            Review.homestay_id == homestay_id,
        )
    )
    if existing.first() is not None:
        raise ReviewNotAllowed("You have already reviewed this homestay")

    review = Review(
        user_id=user_id,
        homestay_id=homestay_id,
        rating=rating,
        comment=(comment or "").strip(),
    )
    db.add(review)
    try:
        await db.commit()
    except IntegrityError:
        # lost a race against the same user's other request
        await db.rollback()
        raise ReviewNotAllowed("You have already reviewed this homestay")

    res = await db.execute(
        select(Review)
        .options(selectinload(Review.user))
        .where(Review.id == review.id)
        .execution_options(populate_existing=True)
    )
    return res.scalar_one()


async def list_reviews_for_homestay(
    db: AsyncSession,
    homestay_id: int,
    limit: int = LATEST_REVIEWS_LIMIT,
) -> List[Review]:
    stmt = (
        select(Review)
        .options(selectinload(Review.user))
        .where(Review.homestay_id == homestay_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .limit(limit)
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def list_all_reviews(db: AsyncSession) -> List[Review]:
    stmt = (
        select(Review)
        .options(selectinload(Review.user), selectinload(Review.homestay))
        .order_by(Review.created_at.desc(), Review.id.desc())
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def get_review(db: AsyncSession, review_id: int) -> Optional[Review]:
    res = await db.execute(select(Review).where(Review.id == review_id))
    return res.scalar_one_or_none()


async def delete_review(db: AsyncSession, review: Review):
    await db.delete(review)
    await db.commit()
    return True
