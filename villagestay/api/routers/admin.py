import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from villagestay.api.dependencies import require_admin
from villagestay.db import crud_bookings, crud_reviews, crud_users
from villagestay.db.models import (
    Booking,
    BookingStatus,
    ContactMessage,
    Homestay,
    MessageStatus,
    Review,
    User,
)
from villagestay.db.session import get_db
from villagestay.schemas.booking import BookingAdminOut, BookingStatusUpdate
from villagestay.schemas.review import ReviewAdminOut
from villagestay.schemas.user import UserBase, UserRoleUpdate
from villagestay.services import booking as booking_service

logger = logging.getLogger("uvicorn.error")

router = APIRouter(dependencies=[Depends(require_admin)])


async def _count(db: AsyncSession, stmt) -> int:
    return int((await db.execute(stmt)).scalar_one())


@router.get("/stats")
async def admin_stats(db: AsyncSession = Depends(get_db)):
    per_status = {status: 0 for status in BookingStatus.ALL}
    res = await db.execute(
        select(Booking.status, func.count(Booking.id)).group_by(Booking.status)
    )
    for status, n in res.all():
        per_status[status] = int(n)

    revenue = (
        await db.execute(
            select(func.coalesce(func.sum(Booking.total_price), 0)).where(
                Booking.status.in_((BookingStatus.CONFIRMED, BookingStatus.COMPLETED))
            )
        )
    ).scalar_one()

    return {
        "total_users": await _count(db, select(func.count(User.id))),
        "total_homestays": await _count(db, select(func.count(Homestay.id))),
        "total_bookings": sum(per_status.values()),
        "bookings_by_status": per_status,
        "total_reviews": await _count(db, select(func.count(Review.id))),
        "unread_messages": await _count(
            db,
            select(func.count(ContactMessage.id)).where(
                ContactMessage.status == MessageStatus.UNREAD
            ),
        ),
        "revenue": float(revenue),
    }


@router.get("/users")
async def admin_users(db: AsyncSession = Depends(get_db)):
    users = await crud_users.list_users(db)
    return {"data": [UserBase.model_validate(u) for u in users]}


@router.put("/users/{user_id}/role")
async def set_role(
    user_id: int,
    body: UserRoleUpdate,
    db: AsyncSession = Depends(get_db),
):
    try:
        user = await crud_users.update_user_role(db, user_id, body.role)
    except ValueError:
        raise HTTPException(status_code=404, detail="User not found")
    return UserBase.model_validate(user)


# --- bookings ---

@router.get("/bookings")
async def admin_bookings(
    db: AsyncSession = Depends(get_db),
    status: Optional[str] = Query(None, pattern="^(PENDING|CONFIRMED|CANCELLED|COMPLETED)$"),
):
    bookings = await crud_bookings.list_all_bookings(db, status=status)
    return {"data": [BookingAdminOut.model_validate(b) for b in bookings]}


@router.get("/bookings/{booking_id}")
async def admin_get_booking(booking_id: int, db: AsyncSession = Depends(get_db)):
    booking = await crud_bookings.get_booking(db, booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return BookingAdminOut.model_validate(booking)


@router.patch("/bookings/{booking_id}")
async def admin_update_booking_status(
    booking_id: int,
    body: BookingStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    """
    Manual status change; only the transitions of the booking lifecycle
    are accepted.
    """
    booking = await crud_bookings.get_booking(db, booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")

    await booking_service.change_booking_status(db, booking, body.status)
    booking = await crud_bookings.get_booking(db, booking_id)
    return BookingAdminOut.model_validate(booking)


@router.delete("/bookings/{booking_id}")
async def admin_delete_booking(booking_id: int, db: AsyncSession = Depends(get_db)):
    booking = await crud_bookings.get_booking(db, booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    await crud_bookings.delete_booking(db, booking)
    logger.info("booking %s deleted", booking_id)
    return {"message": "deleted"}


# --- reviews ---

@router.get("/reviews")
async def admin_reviews(db: AsyncSession = Depends(get_db)):
    reviews = await crud_reviews.list_all_reviews(db)
    return {"data": [ReviewAdminOut.from_review(r) for r in reviews]}


@router.delete("/reviews/{review_id}")
async def admin_delete_review(review_id: int, db: AsyncSession = Depends(get_db)):
    review = await crud_reviews.get_review(db, review_id)
    if not review:
        raise HTTPException(status_code=404, detail="Not found")
    await crud_reviews.delete_review(db, review)
    return {"message": "deleted"}
