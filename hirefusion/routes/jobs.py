"""
Job listing, filtering and recommendation endpoints.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.orm import Session

from .. import crud, models
from ..config import settings
from ..database import get_db
from ..errors import BadRequest, NotFound
from ..jobs.filters import filter_jobs
from ..recommender import rank_jobs
from ..schemas import (
    AddRecommendationsIn,
    GenerateRecommendationsIn,
    JobFilterIn,
    JobOut,
    RecommendationOut,
    RecommendationsOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["jobs"])


@router.get("/jobs/all-jobs", response_model=list[JobOut])
def list_all_jobs(db: Session = Depends(get_db)):
    return crud.list_jobs(db)


@router.post("/advancedfilteredjobs", response_model=list[JobOut])
def advanced_filtered_jobs(filters: JobFilterIn, db: Session = Depends(get_db)):
    return filter_jobs(db, filters)


def _validated_entries(db: Session, payload: AddRecommendationsIn) -> list[tuple[str, float]]:
    """Check the whole batch before anything is written."""
    entries = []
    for rec in payload.job_recommendations:
        if not rec.job_id:
            raise BadRequest("Each recommendation needs a jobID")
        if rec.match_percentage is None or not 0 <= rec.match_percentage <= 100:
            raise BadRequest("matchPercentage must be between 0 and 100")
        entries.append((rec.job_id, rec.match_percentage))

    known = crud.get_jobs_by_ids(db, (job_id for job_id, _ in entries))
    unknown = sorted({job_id for job_id, _ in entries if job_id not in known})
    if unknown:
        raise BadRequest(f"Unknown job ID: {', '.join(unknown)}")
    return entries


def _store_recommendations(db: Session, user: models.User, entries: list[tuple[str, float]]):
    if not entries:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"message": "No job recommendations found", "recommendations": []},
        )
    rows = crud.add_recommendations(db, user, entries)
    logger.info("Stored %d recommendations for %s", len(rows), user.email)
    return {
        "message": "Job recommendations added successfully",
        "recommendations": [RecommendationOut.model_validate(r) for r in rows],
    }


@router.post("/recommendations/addjob", response_model=RecommendationsOut, status_code=status.HTTP_201_CREATED)
def add_recommendations(payload: AddRecommendationsIn, db: Session = Depends(get_db)):
    if not payload.email:
        raise BadRequest("Missing email")
    user = crud.get_user_by_email(db, payload.email)
    if not user:
        raise NotFound("User not found with provided email")
    return _store_recommendations(db, user, _validated_entries(db, payload))


@router.post("/recommendations/generate", response_model=RecommendationsOut, status_code=status.HTTP_201_CREATED)
def generate_recommendations(payload: GenerateRecommendationsIn, db: Session = Depends(get_db)):
    if not payload.email:
        raise BadRequest("Missing email")
    user = crud.get_user_by_email(db, payload.email)
    if not user:
        raise NotFound("User not found with provided email")
    if not user.skills:
        raise BadRequest("User has no skills")

    jobs = db.execute(select(models.Job.id, models.Job.skills_required)).all()
    if not jobs:
        raise NotFound("No jobs available")

    matches = rank_jobs(user.skills, jobs, min_match=settings.RECOMMENDATION_MIN_MATCH)
    return _store_recommendations(db, user, [(m.job_id, m.match_percentage) for m in matches])


@router.get("/recommendations/getjobs", response_model=list[JobOut])
def get_recommended_jobs(email: str | None = Query(None), db: Session = Depends(get_db)):
    if not email:
        raise BadRequest("Missing email")
    user = crud.get_user_by_email(db, email)
    if not user:
        raise NotFound("User not found")
    jobs = crud.list_recommended_jobs(db, user)
    if not jobs:
        raise NotFound("No recommendations found for this user")
    return jobs
