from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from villagestay.api.dependencies import get_current_user
from villagestay.db import crud_users
from villagestay.db.session import get_db
from villagestay.schemas.user import UserBase, UserProfileUpdate

router = APIRouter()


@router.get("/me")
async def me(current_user=Depends(get_current_user)):
    return UserBase.model_validate(current_user)


@router.patch("/me")
async def update_me(
    body: UserProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user),
):
    user = await crud_users.update_user_profile(
        db, current_user, body.model_dump(exclude_unset=True)
    )
    return UserBase.model_validate(user)
