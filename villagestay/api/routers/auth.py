# villagestay/api/routers/auth.py
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status, Body
from jose import JWTError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from villagestay.core.security import (
    REFRESH,
    create_access_token,
    create_refresh_token,
    decode_token,
    verify_password,
)
from villagestay.db import crud_users
from villagestay.db.session import get_db
from villagestay.schemas.auth import LogoutRequest, RefreshRequest, Token
from villagestay.schemas.user import UserCreate, UserLogin, UserOut

logger = logging.getLogger("uvicorn.error")

router = APIRouter()


async def _issue_tokens(db: AsyncSession, user) -> Dict[str, Any]:
    """
    New access + refresh pair; the refresh token is persisted so it can be revoked.
    """
    data = {"user_id": user.id, "role": user.role}
    access = create_access_token(data)
    refresh = create_refresh_token(data)
    await crud_users.save_refresh_token(db, user.id, refresh)
    return {
        "access_token": access,
        "refresh_token": refresh,
        "token_type": "bearer",
        "user": UserOut.model_validate(user),
    }


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(payload: UserCreate, db: AsyncSession = Depends(get_db)):
    existing = await crud_users.get_user_by_email(db, payload.email)
    if existing:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email exists")

    try:
        user = await crud_users.create_user(
            db=db,
            name=payload.name,
            email=payload.email,
            password=payload.password,
            phone=payload.phone,
        )
    except IntegrityError:
        # another sign-up with the same email committed first
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email exists")
    logger.info("user %s registered", user.id)
    return await _issue_tokens(db, user)


@router.post("/login", response_model=Token)
async def login(payload: UserLogin, db: AsyncSession = Depends(get_db)):
    user = await crud_users.get_user_by_email(db, payload.email)
    if not user or not verify_password(payload.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    return await _issue_tokens(db, user)


@router.post("/refresh", response_model=Token)
async def refresh(body: RefreshRequest, db: AsyncSession = Depends(get_db)):
    try:
        payload = decode_token(body.refresh_token, REFRESH)
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
        )

    user_id = int(payload["user_id"])
    if not await crud_users.is_refresh_token_active(db, user_id, body.refresh_token):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Refresh token revoked",
        )

    user = await crud_users.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    return await _issue_tokens(db, user)


@router.post("/logout")
async def logout(
    body: LogoutRequest | None = Body(None),
    db: AsyncSession = Depends(get_db),
):
    if body and body.refresh_token:
        await crud_users.revoke_refresh_token(db, body.refresh_token)
    return {"ok": True}
