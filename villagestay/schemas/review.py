# villagestay/schemas/review.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from villagestay.schemas.user import UserSummary


class ReviewCreate(BaseModel):
    homestay_id: int
    booking_id: int
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=2000)


class ReviewOut(BaseModel):
    id: int
    rating: int
    comment: str
    homestay_id: int
    user_id: int
    created_at: datetime
    user: UserSummary

    model_config = {"from_attributes": True}


class ReviewAdminOut(ReviewOut):
    homestay_name: str

    @classmethod
    def from_review(cls, review) -> "ReviewAdminOut":
        data = ReviewOut.model_validate(review).model_dump()
        return cls(**data, homestay_name=review.homestay.name)
