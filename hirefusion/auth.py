from __future__ import annotations

import logging

from fastapi import Request
import jwt
from sqlalchemy.orm import Session

from . import crud, security
from .errors import Unauthorized
from .schemas import SessionUser
from .token import decode_session

logger = logging.getLogger(__name__)


def authorize(db: Session, email: str, password: str) -> SessionUser:
    """
    Check credentials and return the identity used to issue a session.

    Raises ``Unauthorized`` with the reason: unknown email, unverified
    account, or wrong password.
    """
    user = crud.get_user_by_email(db, email)
    if not user:
        raise Unauthorized("No user found with this email")
    if not user.is_verified:
        raise Unauthorized("Please verify your account before logging in")
    if not security.verify_password(password, user.hashed_password):
        logger.warning("Failed login for %s", user.email)
        raise Unauthorized("Incorrect password")
    return SessionUser(id=user.id, username=user.username, email=user.email, is_verified=user.is_verified)


def get_token_from_cookie_or_header(request: Request) -> str | None:
    """Extract token from either Authorization header or access_token cookie"""
    authorization = request.headers.get("Authorization")
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:]

    cookie_token = request.cookies.get("access_token")
    if cookie_token and cookie_token.startswith("Bearer "):
        return cookie_token[7:]

    return None


def get_current_session(request: Request) -> SessionUser:
    """Materialise the session from the signed token; no database round-trip."""
    credentials_exception = Unauthorized(
        "Could not validate credentials", headers={"WWW-Authenticate": "Bearer"}
    )
    token = get_token_from_cookie_or_header(request)
    if not token:
        raise credentials_exception
    try:
        return decode_session(token)
    except (jwt.PyJWTError, ValueError):
        raise credentials_exception
