from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from villagestay.api.dependencies import require_admin
from villagestay.db import crud_homestays
from villagestay.db.session import get_db
from villagestay.schemas.homestay import (
    HomestayAdminItem,
    HomestayBase,
    HomestayCreate,
    HomestayUpdate,
)

router = APIRouter(dependencies=[Depends(require_admin)])


async def _get_or_404(db: AsyncSession, homestay_id: int):
    homestay = await crud_homestays.get_homestay(db, homestay_id)
    if not homestay:
        raise HTTPException(status_code=404, detail="Homestay not found")
    return homestay


@router.get("")
async def admin_list_homestays(db: AsyncSession = Depends(get_db)):
    """
    Every homestay, published or not, with booking and review counts.
    """
    rows = await crud_homestays.list_homestays_with_counts(db)
    return [
        HomestayAdminItem.model_validate(row["homestay"]).model_copy(
            update={
                "booking_count": row["booking_count"],
                "review_count": row["review_count"],
            }
        )
        for row in rows
    ]


@router.post("", status_code=status.HTTP_201_CREATED)
async def admin_create_homestay(body: HomestayCreate, db: AsyncSession = Depends(get_db)):
    homestay = await crud_homestays.create_homestay(db, **body.model_dump())
    return HomestayBase.model_validate(homestay)


@router.get("/{homestay_id}")
async def admin_get_homestay(homestay_id: int, db: AsyncSession = Depends(get_db)):
    homestay = await _get_or_404(db, homestay_id)
    return HomestayBase.model_validate(homestay)


@router.patch("/{homestay_id}")
async def admin_update_homestay(
    homestay_id: int,
    body: HomestayUpdate,
    db: AsyncSession = Depends(get_db),
):
    homestay = await _get_or_404(db, homestay_id)
    homestay = await crud_homestays.update_homestay(
        db, homestay, body.model_dump(exclude_unset=True)
    )
    return HomestayBase.model_validate(homestay)


@router.delete("/{homestay_id}")
async def admin_delete_homestay(homestay_id: int, db: AsyncSession = Depends(get_db)):
    homestay = await _get_or_404(db, homestay_id)
    await crud_homestays.delete_homestay(db, homestay)
    return {"message": "Homestay deleted successfully"}
