# villagestay/core/security.py

from datetime import datetime, timedelta
from typing import Any, Dict
from uuid import uuid4

from jose import jwt, JWTError
from passlib.context import CryptContext

from villagestay.core.config import settings

ACCESS = "access"
REFRESH = "refresh"

# pbkdf2_sha256: no 72-byte password limit, no bcrypt backend quirks
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def _secret_for(token_type: str) -> str:
    if token_type == REFRESH:
        return settings.JWT_REFRESH_SECRET_KEY
    return settings.JWT_SECRET_KEY


def _create_token(data: Dict[str, Any], expires_delta: timedelta, token_type: str) -> str:
    to_encode = data.copy()
    now = datetime.utcnow()
    to_encode.update(
        {
            "iat": now,
            "exp": now + expires_delta,
            "type": token_type,
            "jti": uuid4().hex,
        }
    )
    return jwt.encode(to_encode, _secret_for(token_type), algorithm=settings.JWT_ALGORITHM)


def create_access_token(data: Dict[str, Any]) -> str:
    return _create_token(
        data,
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        ACCESS,
    )


def create_refresh_token(data: Dict[str, Any]) -> str:
    return _create_token(
        data,
        timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        REFRESH,
    )


def decode_token(token: str, token_type: str = ACCESS) -> Dict[str, Any]:
    """
    Decode and validate a token of the given type.
    Raises JWTError on a bad signature, expiry, wrong type or missing user id.
    """
    payload = jwt.decode(
        token,
        _secret_for(token_type),
        algorithms=[settings.JWT_ALGORITHM],
    )

    if payload.get("type") != token_type:
        raise JWTError("Invalid token type")

    if "user_id" not in payload:
        raise JWTError("Missing user_id in token")

    return payload
