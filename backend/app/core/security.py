"""
Password hashing and access tokens.

Passwords are bcrypt hashes (cost factor 10). Access tokens are HS256 JWTs
whose claims identify the user by id, email and role.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import InvalidTokenError
from passlib.context import CryptContext

from app.core.config import settings

TOKEN_TYPE = "bearer"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(claims: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign ``claims`` into a JWT.

    Args:
        claims: ``sub``, ``id``, ``email`` and ``role`` of the user
        expires_delta: lifetime, ACCESS_TOKEN_EXPIRE_MINUTES when omitted

    Returns:
        The encoded token
    """
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {**claims, "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Claims of a valid token; None when the signature or expiry check fails."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except InvalidTokenError:
        return None


def get_token_user_id(token: str) -> Optional[int]:
    """
    Extract the user id from a token.

    Returns None for invalid tokens and for tokens without an integer ``id``
    claim.
    """
    payload = decode_access_token(token)
    if payload is None:
        return None
    user_id = payload.get("id")
    return user_id if isinstance(user_id, int) else None
