from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import crud, validators
from ..database import get_db
from ..errors import BadRequest, Conflict, NotFound
from ..schemas import ProfileEnvelope, ProfileIn, ProfileOut, ProfileUpdatedOut, UpdateUserIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["profile"])


def _check_job_ids(db: Session, job_ids: list[str]) -> None:
    bad = [j for j in job_ids if not validators.is_valid_id(j)]
    if bad:
        raise BadRequest(f"Invalid job ID: {', '.join(bad)}")
    known = crud.get_jobs_by_ids(db, job_ids)
    unknown = [j for j in job_ids if j not in known]
    if unknown:
        raise BadRequest(f"Unknown job ID: {', '.join(unknown)}")


@router.post("/addprofile", response_model=ProfileUpdatedOut)
def add_profile(payload: ProfileIn, db: Session = Depends(get_db)):
    if not payload.email:
        raise BadRequest("User email is required")
    user = crud.get_user_by_email(db, payload.email)
    if not user:
        raise NotFound("User not found")

    # Partial update: only keys sent in the body are written. Lists count as
    # sent when not null; preferences whenever the key is present, even as "".
    fields = {}
    if payload.skills is not None:
        fields["skills"] = payload.skills
    if payload.experience is not None:
        fields["experience"] = [e.model_dump(by_alias=True) for e in payload.experience]
    if "preferences" in payload.model_fields_set:
        fields["preferences"] = payload.preferences
    if payload.education is not None:
        fields["education"] = [e.model_dump(by_alias=True) for e in payload.education]
    if payload.saved_jobs is not None:
        _check_job_ids(db, payload.saved_jobs)
        fields["saved_jobs"] = payload.saved_jobs

    user = crud.update_profile(db, user, fields)
    logger.info("Profile of %s updated: %s", user.email, ", ".join(sorted(fields)) or "no fields")
    return {"message": "Profile updated", "user": ProfileOut.model_validate(user)}


@router.get("/getuser", response_model=ProfileEnvelope)
def get_user(email: str | None = Query(None), db: Session = Depends(get_db)):
    email = validators.normalize_email(email)
    if not email:
        raise BadRequest("Email query parameter is required")
    user = crud.get_user_by_email(db, email)
    if not user:
        raise NotFound("User not found")
    return {"profile": ProfileOut.model_validate(user)}


@router.post("/updateuser", response_model=ProfileEnvelope)
def update_user(payload: UpdateUserIn, db: Session = Depends(get_db)):
    if (
        not payload.email
        or not payload.username
        or payload.skills is None
        or payload.education is None
        or payload.experience is None
    ):
        raise BadRequest("Missing or invalid required fields")
    errors = validators.validate_username(payload.username)
    if errors:
        raise BadRequest("; ".join(errors))

    user = crud.get_user_by_email(db, payload.email)
    if not user:
        raise NotFound("User not found")

    fields = {
        "username": payload.username,
        "preferences": payload.preferences,
        "skills": payload.skills,
        "education": [e.model_dump(by_alias=True) for e in payload.education],
        "experience": [e.model_dump(by_alias=True) for e in payload.experience],
    }
    try:
        user = crud.update_profile(db, user, fields)
    except IntegrityError:
        db.rollback()
        raise Conflict("Username is already taken")
    return {"profile": ProfileOut.model_validate(user)}
