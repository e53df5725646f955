# villagestay/schemas/booking.py
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from villagestay.schemas.homestay import HomestaySummary
from villagestay.schemas.user import UserContact

StatusLiteral = Literal["PENDING", "CONFIRMED", "CANCELLED", "COMPLETED"]


class BookingCreate(BaseModel):
    """
    Any client-sent total price is ignored; the server computes it.
    """
    homestay_id: int
    check_in_date: date
    check_out_date: date
    number_of_guests: int = Field(ge=1)
    notes: Optional[str] = Field(default=None, max_length=1000)


class BookingOut(BaseModel):
    id: int
    homestay_id: int
    user_id: int
    check_in_date: date
    check_out_date: date
    number_of_guests: int
    total_price: float
    status: str
    notes: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class BookingDetail(BookingOut):
    homestay: HomestaySummary


class BookingAdminOut(BookingDetail):
    user: UserContact


class BookingStatusUpdate(BaseModel):
    status: StatusLiteral
