from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from villagestay.api.dependencies import get_current_user
from villagestay.db import crud_homestays, crud_reviews
from villagestay.db.session import get_db
from villagestay.schemas.review import ReviewCreate, ReviewOut

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_review(
    body: ReviewCreate,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user),
):
    review = await crud_reviews.create_review(
        db,
        user_id=current_user.id,
        homestay_id=body.homestay_id,
        booking_id=body.booking_id,
        rating=body.rating,
        comment=body.comment,
    )
    return ReviewOut.model_validate(review)


@router.get("")
async def list_reviews(homestay_id: int, db: AsyncSession = Depends(get_db)):
    """
    Latest reviews of a homestay.
    """
    if not await crud_homestays.get_homestay(db, homestay_id):
        raise HTTPException(status_code=404, detail="Homestay not found")
    reviews = await crud_reviews.list_reviews_for_homestay(db, homestay_id)
    return [ReviewOut.model_validate(r) for r in reviews]
