"""
Password hashing and one-time verification codes.

Passwords go through passlib's bcrypt; signup codes are six random digits.
"""
from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone

from passlib.context import CryptContext

from .config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Return a bcrypt hash for the given plain password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against its hashed form."""
    return pwd_context.verify(plain_password, hashed_password)


def generate_verify_code() -> str:
    """Six-digit numeric code, never starting with zero."""
    return str(100000 + secrets.randbelow(900000))


def verify_code_expiry(now: datetime | None = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now + timedelta(minutes=settings.VERIFY_CODE_EXPIRE_MINUTES)
