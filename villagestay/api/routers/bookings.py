from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from villagestay.api.dependencies import get_current_user
from villagestay.db import crud_bookings
from villagestay.db.models import BookingStatus
from villagestay.db.session import get_db
from villagestay.schemas.booking import BookingCreate, BookingDetail, BookingOut
from villagestay.services import booking as booking_service

router = APIRouter()


async def _own_booking(db: AsyncSession, booking_id: int, user):
    booking = await crud_bookings.get_booking(db, booking_id)
    if not booking or booking.user_id != user.id:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_booking(
    body: BookingCreate,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user),
):
    booking = await booking_service.create_booking(
        db,
        user_id=current_user.id,
        homestay_id=body.homestay_id,
        check_in=body.check_in_date,
        check_out=body.check_out_date,
        number_of_guests=body.number_of_guests,
        notes=body.notes,
    )
    return {"success": True, "data": BookingOut.model_validate(booking)}


@router.get("")
async def list_bookings(
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user),
):
    bookings = await crud_bookings.list_bookings_for_user(db, current_user.id)
    return {"items": [BookingDetail.model_validate(b) for b in bookings]}


@router.get("/{booking_id}")
async def get_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user),
):
    booking = await _own_booking(db, booking_id, current_user)
    return BookingDetail.model_validate(booking)


@router.post("/{booking_id}/cancel")
async def cancel_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user),
):
    booking = await _own_booking(db, booking_id, current_user)
    booking = await booking_service.change_booking_status(
        db, booking, BookingStatus.CANCELLED
    )
    return {"message": "cancelled", "data": BookingOut.model_validate(booking)}
