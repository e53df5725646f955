# villagestay/db/crud_users.py
"""
Accounts and their refresh tokens.

Emails are stored lower-cased; every lookup goes through ``normalize_email``
so "Budi@Example.com" and "budi@example.com" are the same account.
"""
from typing import Optional, List

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from villagestay.db.models import User, UserRefreshToken
from villagestay.core.security import get_password_hash

ROLES = ("user", "admin")


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    res = await db.execute(select(User).where(User.email == normalize_email(email)))
    return res.scalar_one_or_none()


async def list_users(db: AsyncSession) -> List[User]:
    res = await db.execute(select(User).order_by(User.created_at.desc(), User.id.desc()))
    return list(res.scalars().all())


async def create_user(
    db: AsyncSession,
    name: str,
    email: str,
    password: str,
    phone: Optional[str] = None,
    role: str = "user",
) -> User:
    if role not in ROLES:
        raise ValueError(f"Unknown role: {role}")

    user = User(
        name=name.strip(),
        email=normalize_email(email),
        phone=phone,
        hashed_password=get_password_hash(password),
        role=role,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def update_user_profile(db: AsyncSession, user: User, data: dict) -> User:
    """
    Name, phone and avatar only; email and role have their own paths.
    """
    for field in ("name", "phone", "image"):
        value = data.get(field)
        if value is not None:
            setattr(user, field, value)
    await db.commit()
    await db.refresh(user)
    return user


async def update_user_role(db: AsyncSession, user_id: int, role: str) -> User:
    if role not in ROLES:
        raise ValueError(f"Unknown role: {role}")
    user = await get_user(db, user_id)
    if not user:
        raise ValueError("User not found")

    user.role = role
    await db.commit()
    await db.refresh(user)
    return user


# --- refresh tokens ---

def _active_tokens(user_id: Optional[int] = None, token: Optional[str] = None):
    clauses = [UserRefreshToken.revoked.is_(False)]
    if user_id is not None:
        clauses.append(UserRefreshToken.user_id == user_id)
    if token is not None:
        clauses.append(UserRefreshToken.token == token)
    return clauses


async def save_refresh_token(db: AsyncSession, user_id: int, token: str) -> None:
    """
    One live refresh token per user: older ones are revoked in the same commit.
    """
    await db.execute(
        update(UserRefreshToken)
        .where(*_active_tokens(user_id=user_id))
        .values(revoked=True)
    )
    db.add(UserRefreshToken(user_id=user_id, token=token))
    await db.commit()


async def is_refresh_token_active(db: AsyncSession, user_id: int, token: str) -> bool:
    res = await db.execute(
        select(UserRefreshToken.id).where(*_active_tokens(user_id=user_id, token=token))
    )
    return res.first() is not None


async def revoke_refresh_token(db: AsyncSession, token: str) -> bool:
    res = await db.execute(
        update(UserRefreshToken)
        .where(*_active_tokens(token=token))
        .values(revoked=True)
    )
    await db.commit()
    return res.rowcount > 0
