# villagestay/db/crud_homestays.py
from typing import Tuple, List, Dict, Any, Optional

from sqlalchemy import select, func, and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from villagestay.core.exceptions import DuplicateSlug
from villagestay.db.models import Homestay, Booking, Review

FEATURED_LIMIT = 6
FILTER_LIMIT = 50


async def list_published_homestays(
    db: AsyncSession,
    featured: bool = False,
) -> List[Homestay]:
    """
    Public listing: ALWAYS only published homestays, newest first.
    Featured-only listing is capped for the home page.
    """
    stmt = select(Homestay).where(Homestay.published.is_(True))
    if featured:
        stmt = stmt.where(Homestay.featured.is_(True)).limit(FEATURED_LIMIT)
    stmt = stmt.order_by(Homestay.created_at.desc(), Homestay.id.desc())
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def filter_homestays(db: AsyncSession, filters: dict = None) -> List[Homestay]:
    filters = filters or {}
    where_clauses = [Homestay.published.is_(True)]

    if filters.get("min_price") is not None:
        where_clauses.append(Homestay.price_per_night >= filters["min_price"])
    if filters.get("max_price") is not None:
        where_clauses.append(Homestay.price_per_night <= filters["max_price"])
    if filters.get("guests") is not None:
        where_clauses.append(Homestay.max_guests >= int(filters["guests"]))

    stmt = select(Homestay).where(and_(*where_clauses))

    sort = filters.get("sort")
    if sort == "price_asc":
        stmt = stmt.order_by(Homestay.price_per_night.asc())
    elif sort == "price_desc":
        stmt = stmt.order_by(Homestay.price_per_night.desc())
    else:
        # default: newest first
        stmt = stmt.order_by(Homestay.created_at.desc(), Homestay.id.desc())

    stmt = stmt.limit(FILTER_LIMIT)
    res = await db.execute(stmt)
    items = list(res.scalars().all())

    # JSON list column, so "has all facilities" is checked in Python
    wanted = filters.get("facilities") or []
    if wanted:
        items = [h for h in items if all(f in (h.facilities or []) for f in wanted)]
    return items


async def list_facilities(db: AsyncSession) -> List[str]:
    res = await db.execute(
        select(Homestay.facilities).where(Homestay.published.is_(True))
    )
    found = set()
    for facilities in res.scalars().all():
        for facility in facilities or []:
            if facility and isinstance(facility, str):
                found.add(facility)
    return sorted(found)


async def get_homestay(db: AsyncSession, homestay_id: int) -> Optional[Homestay]:
    res = await db.execute(select(Homestay).where(Homestay.id == homestay_id))
    return res.scalars().first()


async def get_homestay_by_slug(
    db: AsyncSession,
    slug: str,
    with_reviews: bool = False,
) -> Optional[Homestay]:
    stmt = select(Homestay).where(Homestay.slug == slug)
    if with_reviews:
        # eager load so response models never lazy-load (MissingGreenlet)
        stmt = stmt.options(selectinload(Homestay.reviews).selectinload(Review.user))
    res = await db.execute(stmt)
    return res.scalars().first()


def rating_summary(reviews) -> Tuple[float, int]:
    """
    (average rating rounded to one decimal, review count)
    """
    count = len(reviews)
    if not count:
        return 0.0, 0
    avg = sum(r.rating for r in reviews) / count
    return round(avg, 1), count


async def slug_taken(
    db: AsyncSession,
    slug: str,
    exclude_id: Optional[int] = None,
) -> bool:
    stmt = select(Homestay.id).where(Homestay.slug == slug)
    if exclude_id is not None:
        stmt = stmt.where(Homestay.id != exclude_id)
    res = await db.execute(stmt.limit(1))
    return res.first() is not None


async def create_homestay(db: AsyncSession, **kwargs) -> Homestay:
    if await slug_taken(db, kwargs["slug"]):
        raise DuplicateSlug("Slug is already in use. Choose another slug.")
    homestay = Homestay(**kwargs)
    db.add(homestay)
    await db.commit()
    await db.refresh(homestay)
    return homestay


async def update_homestay(db: AsyncSession, homestay: Homestay, data: dict) -> Homestay:
    slug = data.get("slug")
    if slug and slug != homestay.slug and await slug_taken(db, slug, homestay.id):
        raise DuplicateSlug("Slug is already in use. Choose another slug.")
    for k, v in data.items():
        setattr(homestay, k, v)
    db.add(homestay)
    await db.commit()
    await db.refresh(homestay)
    return homestay


async def delete_homestay(db: AsyncSession, homestay: Homestay):
    await db.delete(homestay)
    await db.commit()
    return True


# --- ADMIN: all homestays with booking/review counts ---

async def list_homestays_with_counts(db: AsyncSession) -> List[Dict[str, Any]]:
    booking_counts = (
        select(Booking.homestay_id, func.count(Booking.id).label("n"))
        .group_by(Booking.homestay_id)
        .subquery()
    )
    review_counts = (
        select(Review.homestay_id, func.count(Review.id).label("n"))
        .group_by(Review.homestay_id)
        .subquery()
    )
    stmt = (
        select(
            Homestay,
            func.coalesce(booking_counts.c.n, 0).label("booking_count"),
            func.coalesce(review_counts.c.n, 0).label("review_count"),
        )
        .outerjoin(booking_counts, booking_counts.c.homestay_id == Homestay.id)
        .outerjoin(review_counts, review_counts.c.homestay_id == Homestay.id)
        .order_by(Homestay.created_at.desc(), Homestay.id.desc())
    )
    res = await db.execute(stmt)
    return [
        {
            "homestay": row.Homestay,
            "booking_count": int(row.booking_count),
            "review_count": int(row.review_count),
        }
        for row in res.all()
    ]
