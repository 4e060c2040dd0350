from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .. import crud, models, validators
from ..database import get_db
from ..errors import BadRequest, Conflict, NotFound
from ..schemas import SavedJobIn, SavedJobListOut, SavedJobsOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/savedjobs", tags=["saved jobs"])


def _checked_email(email: str | None) -> str:
    email = validators.normalize_email(email)
    if not validators.is_valid_email(email):
        raise BadRequest("Invalid or missing email")
    return email


def _user_for(db: Session, email: str) -> models.User:
    user = crud.get_user_by_email(db, email)
    if not user:
        raise NotFound("User not found")
    return user


@router.post("/addjob", response_model=SavedJobsOut)
def add_saved_job(payload: SavedJobIn, db: Session = Depends(get_db)):
    email = _checked_email(payload.email)
    if not validators.is_valid_id(payload.job_id):
        raise BadRequest("Invalid job ID")
    user = _user_for(db, email)
    if not crud.get_job(db, payload.job_id):
        raise NotFound("Job not found")

    if not crud.save_job(db, user, payload.job_id):
        raise Conflict("Job already saved")
    logger.info("%s saved job %s", user.email, payload.job_id)
    return {"message": "Job saved successfully", "saved_jobs": crud.saved_job_ids(db, user)}


@router.post("/deletejob", response_model=SavedJobsOut)
def remove_saved_job(payload: SavedJobIn, db: Session = Depends(get_db)):
    email = _checked_email(payload.email)
    if not validators.is_valid_id(payload.job_id):
        raise BadRequest("Invalid job ID")
    user = _user_for(db, email)

    if crud.count_saved_jobs(db, user) == 0:
        raise BadRequest("User has no saved jobs")
    if not crud.remove_saved_job(db, user, payload.job_id):
        raise BadRequest("Job not found in saved jobs")
    logger.info("%s removed saved job %s", user.email, payload.job_id)
    return {"message": "Job removed successfully", "saved_jobs": crud.saved_job_ids(db, user)}


@router.get("/getallsavedjobs", response_model=SavedJobListOut)
def get_all_saved_jobs(email: str | None = Query(None), db: Session = Depends(get_db)):
    user = _user_for(db, _checked_email(email))
    jobs, ids = crud.list_saved_jobs(db, user)
    return {"jobs": jobs, "saved_job_ids": ids}
