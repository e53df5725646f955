# villagestay/schemas/homestay.py
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from villagestay.schemas.review import ReviewOut

SLUG_PATTERN = r"^[a-z0-9-]+$"


class HomestayBase(BaseModel):
    id: int
    name: str
    slug: str
    description: str
    address: str
    price_per_night: float
    max_guests: int
    photos: List[str] = []
    facilities: List[str] = []
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    maps_embed_code: Optional[str] = None
    featured: bool
    published: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class HomestayDetail(HomestayBase):
    reviews: List[ReviewOut] = []
    avg_rating: float = 0.0
    review_count: int = 0


class HomestayAdminItem(HomestayBase):
    booking_count: int = 0
    review_count: int = 0


class HomestaySummary(BaseModel):
    id: int
    name: str
    slug: str
    address: str
    price_per_night: float
    max_guests: int

    model_config = {"from_attributes": True}


class HomestayCreate(BaseModel):
    name: str = Field(min_length=3, max_length=100)
    slug: str = Field(min_length=3, max_length=100, pattern=SLUG_PATTERN)
    description: str = Field(min_length=10, max_length=5000)
    address: str = Field(min_length=5, max_length=200)
    price_per_night: Decimal = Field(gt=0)
    max_guests: int = Field(ge=1, le=50)
    photos: List[str] = []
    facilities: List[str] = []
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    maps_embed_code: Optional[str] = None
    featured: bool = False
    published: bool = False

    model_config = {"str_strip_whitespace": True}


class HomestayUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=3, max_length=100)
    slug: Optional[str] = Field(default=None, min_length=3, max_length=100, pattern=SLUG_PATTERN)
    description: Optional[str] = Field(default=None, min_length=10, max_length=5000)
    address: Optional[str] = Field(default=None, min_length=5, max_length=200)
    price_per_night: Optional[Decimal] = Field(default=None, gt=0)
    max_guests: Optional[int] = Field(default=None, ge=1, le=50)
    photos: Optional[List[str]] = None
    facilities: Optional[List[str]] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    maps_embed_code: Optional[str] = None
    featured: Optional[bool] = None
    published: Optional[bool] = None

    model_config = {"str_strip_whitespace": True}

    @field_validator(
        "name", "slug", "description", "address", "price_per_night",
        "max_guests", "photos", "facilities", "featured", "published",
    )
    @classmethod
    def required_not_null(cls, v):
        # only the optional columns may be cleared with null
        if v is None:
            raise ValueError("must not be null")
        return v


class AvailabilityRequest(BaseModel):
    homestay_id: int
    check_in_date: date
    check_out_date: date
    number_of_guests: Optional[int] = Field(default=None, ge=1)


class AlternativesRequest(BaseModel):
    check_in_date: date
    check_out_date: date
    number_of_guests: Optional[int] = Field(default=None, ge=1)
    exclude_homestay_id: Optional[int] = None


class AvailabilityOut(BaseModel):
    available: bool
    reason: str
    message: str
    homestay_id: int
    check_in_date: date
    check_out_date: date
    number_of_guests: Optional[int] = None
    # only filled when the dates are taken
    alternatives: List[HomestayBase] = []


class AlternativesOut(BaseModel):
    alternatives: List[HomestayBase]
    count: int
    check_in_date: date
    check_out_date: date
    number_of_guests: Optional[int] = None
