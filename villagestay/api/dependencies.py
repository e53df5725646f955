# villagestay/api/dependencies.py
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from villagestay.core.security import decode_token
from villagestay.db import crud_users
from villagestay.db.models import User
from villagestay.db.session import get_db

logger = logging.getLogger("uvicorn.error")
security = HTTPBearer(auto_error=False)


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> User:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
        )

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        logger.info("rejected access token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token"
        )

    try:
        uid = int(payload["user_id"])
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token user id"
        )

    user = await crud_users.get_user(db, uid)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found"
        )
    return user


def require_role(role: str):
    """
    Dependency factory:
      current_user = Depends(require_role("admin"))
    """

    async def dep(user: User = Depends(get_current_user)) -> User:
        # admin passes every role check
        if user.role != role and user.role != "admin":
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions"
            )
        return user

    return dep


require_admin = require_role("admin")
