"""
Signup, email verification, login and session endpoints.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from urllib.parse import unquote

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import crud, validators
from ..auth import authorize, get_current_session
from ..config import settings
from ..database import get_db
from ..emails import Mailer, get_mailer, send_verification_email
from ..errors import BadRequest, Conflict, NotFound, ServerError, error_body
from ..schemas import (
    LoginIn,
    LoginOut,
    MessageOut,
    SessionOut,
    SessionUser,
    SignupIn,
    Token,
    UsersOut,
    VerifyCodeIn,
)
from ..token import create_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["accounts"])


@router.get("/check-username-unique", response_model=MessageOut)
def check_username_unique(username: str | None = Query(None), db: Session = Depends(get_db)):
    errors = validators.validate_username(username)
    if errors:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(errors, "validation_error"),
        )
    if crud.get_verified_user_by_username(db, username):
        raise Conflict("Username is already taken")
    return {"success": True, "message": "Username is unique"}


@router.post("/signup", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupIn, db: Session = Depends(get_db), mailer: Mailer = Depends(get_mailer)):
    if crud.get_verified_user_by_username(db, payload.username):
        raise Conflict("Username is already taken!")

    existing = crud.get_user_by_email(db, payload.email)
    if existing and existing.is_verified:
        raise Conflict("User already exists with this email")

    # The record is only committed once the code has actually been mailed;
    # a failed send leaves no half-registered account behind. The write
    # transaction stays open across the SMTP round-trip, which on SQLite holds
    # the database write lock; run on a server database in production.
    user = crud.stage_signup(db, payload.username, payload.email, payload.password, existing=existing)
    ok, message = send_verification_email(mailer, user.email, user.username, user.verify_code)
    if not ok:
        db.rollback()
        raise ServerError(message)
    db.commit()

    logger.info("%s signup for %s", "Reissued" if existing else "New", user.email)
    return {"success": True, "message": "User registered successfully. Please verify your email."}


@router.post("/verifycode", response_model=MessageOut)
def verify_code(payload: VerifyCodeIn, db: Session = Depends(get_db)):
    username = unquote(payload.username)
    candidates = crud.get_users_by_username(db, username)
    if not candidates:
        raise NotFound("User not found")

    # unverified signups may share a name; the code picks out the account
    user = next((u for u in candidates if u.verify_code == payload.code), None)
    if user is None:
        raise BadRequest("Invalid code")
    if crud.as_utc(user.verify_code_expire) <= datetime.now(timezone.utc):
        logger.warning("Expired verification code used for %s", user.email)
        raise BadRequest("Code expired")

    try:
        verified = crud.mark_verified(db, user, payload.code)
    except IntegrityError:
        db.rollback()
        raise Conflict("Username is already taken")
    if not verified:
        raise BadRequest("Invalid code")

    logger.info("Verified %s", user.email)
    return {"success": True, "message": "User verified successfully"}


@router.get("/users", response_model=UsersOut)
def list_users(db: Session = Depends(get_db)):
    return {"success": True, "message": crud.list_users(db)}


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key="access_token",
        value=f"Bearer {token}",
        httponly=True,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax",
    )


@router.post("/auth/login", response_model=LoginOut)
def login(payload: LoginIn, response: Response, db: Session = Depends(get_db)):
    identity = authorize(db, payload.email, payload.password)
    token = create_access_token(identity)
    _set_session_cookie(response, token)
    return {"access_token": token, "token_type": "bearer", "user": identity}


@router.post("/login", response_model=Token)
def login_form(form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    # OAuth2 form: the "username" field carries the email address
    identity = authorize(db, form.username, form.password)
    return {"access_token": create_access_token(identity), "token_type": "bearer"}


@router.get("/auth/session", response_model=SessionOut)
def read_session(session: SessionUser = Depends(get_current_session)):
    return {"user": session}


@router.post("/auth/logout", response_model=MessageOut)
def logout(response: Response):
    response.delete_cookie(key="access_token")
    return {"success": True, "message": "Signed out"}
