# hirefusion/token.py
from datetime import datetime, timedelta, timezone
import jwt
from .config import settings
from .schemas import SessionUser

def create_access_token(identity: SessionUser) -> str:
    """Sign the identity fields into a stateless session token."""
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": identity.email,
        "_id": identity.id,
        "username": identity.username,
        "isVerified": identity.is_verified,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

def decode_session(token: str) -> SessionUser:
    """Rebuild the session from the token claims alone; raises jwt.PyJWTError or ValueError."""
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    email = payload.get("sub")
    user_id = payload.get("_id")
    if not email or not user_id:
        raise ValueError("token is missing identity claims")
    return SessionUser(
        id=user_id,
        username=payload.get("username"),
        email=email,
        is_verified=bool(payload.get("isVerified")),
    )
