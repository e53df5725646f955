# villagestay/api/routers/homestays.py
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from villagestay.db import crud_homestays
from villagestay.db.session import get_db
from villagestay.schemas.homestay import (
    AlternativesOut,
    AlternativesRequest,
    AvailabilityOut,
    AvailabilityRequest,
    HomestayBase,
    HomestayDetail,
)
from villagestay.services.availability import (
    check_availability,
    find_alternatives,
    validate_date_range,
    AvailabilityReason,
)

router = APIRouter()


@router.get("")
async def list_homestays(
    db: AsyncSession = Depends(get_db),
    featured: bool = False,
):
    """
    Public listing, published only; featured=true gives the home page picks.
    """
    items = await crud_homestays.list_published_homestays(db, featured=featured)
    return [HomestayBase.model_validate(h) for h in items]


@router.get("/filter")
async def filter_homestays(
    db: AsyncSession = Depends(get_db),
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    guests: Optional[int] = Query(None, ge=1),
    facilities: List[str] = Query([]),
    sort: Optional[str] = Query(None, pattern="^(newest|price_asc|price_desc)$"),
):
    filters = {
        "min_price": min_price,
        "max_price": max_price,
        "guests": guests,
        "facilities": facilities,
        "sort": sort,
    }
    items = await crud_homestays.filter_homestays(db, filters=filters)
    data = [HomestayBase.model_validate(h) for h in items]
    return {"success": True, "data": data, "count": len(data)}


@router.get("/facilities")
async def list_facilities(db: AsyncSession = Depends(get_db)):
    facilities = await crud_homestays.list_facilities(db)
    return {"success": True, "data": facilities, "count": len(facilities)}


@router.post("/availability", response_model=AvailabilityOut)
async def availability(body: AvailabilityRequest, db: AsyncSession = Depends(get_db)):
    """
    Taken dates are not an error: the answer is available=false plus up to
    three free alternatives.
    """
    validate_date_range(body.check_in_date, body.check_out_date)

    homestay = await crud_homestays.get_homestay(db, body.homestay_id)
    if not homestay:
        raise HTTPException(status_code=404, detail="Homestay not found")

    result = await check_availability(
        db,
        homestay,
        body.check_in_date,
        body.check_out_date,
        body.number_of_guests,
    )

    alternatives = []
    if result.reason == AvailabilityReason.NOT_AVAILABLE:
        alternatives = await find_alternatives(
            db,
            body.check_in_date,
            body.check_out_date,
            guests=body.number_of_guests,
            exclude_homestay_id=homestay.id,
        )

    return AvailabilityOut(
        available=result.available,
        reason=result.reason,
        message=result.message,
        homestay_id=homestay.id,
        check_in_date=body.check_in_date,
        check_out_date=body.check_out_date,
        number_of_guests=body.number_of_guests,
        alternatives=[HomestayBase.model_validate(h) for h in alternatives],
    )


@router.post("/alternatives", response_model=AlternativesOut)
async def alternatives(body: AlternativesRequest, db: AsyncSession = Depends(get_db)):
    validate_date_range(body.check_in_date, body.check_out_date)
    items = await find_alternatives(
        db,
        body.check_in_date,
        body.check_out_date,
        guests=body.number_of_guests,
        exclude_homestay_id=body.exclude_homestay_id,
    )
    return AlternativesOut(
        alternatives=[HomestayBase.model_validate(h) for h in items],
        count=len(items),
        check_in_date=body.check_in_date,
        check_out_date=body.check_out_date,
        number_of_guests=body.number_of_guests,
    )


@router.get("/{slug}")
async def get_homestay_detail(slug: str, db: AsyncSession = Depends(get_db)):
    homestay = await crud_homestays.get_homestay_by_slug(db, slug, with_reviews=True)
    if not homestay or not homestay.published:
        raise HTTPException(status_code=404, detail="Homestay not found")

    avg_rating, review_count = crud_homestays.rating_summary(homestay.reviews)
    detail = HomestayDetail.model_validate(homestay)
    # newest first
    detail.reviews.sort(key=lambda r: (r.created_at, r.id), reverse=True)
    detail.avg_rating = avg_rating
    detail.review_count = review_count
    return detail


@router.get("/{slug}/availability")
async def get_homestay_availability(
    slug: str,
    check_in: date,
    check_out: date,
    guests: Optional[int] = Query(None, ge=1),
    db: AsyncSession = Depends(get_db),
):
    validate_date_range(check_in, check_out)

    homestay = await crud_homestays.get_homestay_by_slug(db, slug)
    if not homestay:
        raise HTTPException(status_code=404, detail="Homestay not found")

    result = await check_availability(db, homestay, check_in, check_out, guests)
    return {
        "available": result.available,
        "reason": result.reason,
        "homestay_id": homestay.id,
        "check_in_date": check_in,
        "check_out_date": check_out,
    }
