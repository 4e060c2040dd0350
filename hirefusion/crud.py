from __future__ import annotations
from datetime import datetime, timezone
from typing import Iterable

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import models, security
from .validators import normalize_email


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


# Users
def get_user_by_email(db: Session, email: str) -> models.User | None:
    return db.execute(
        select(models.User).where(models.User.email == normalize_email(email))
    ).scalar_one_or_none()

def get_verified_user_by_username(db: Session, username: str) -> models.User | None:
    return db.execute(
        select(models.User).where(models.User.username == username, models.User.is_verified.is_(True))
    ).scalars().first()

def get_users_by_username(db: Session, username: str) -> list[models.User]:
    return list(
        db.execute(
            select(models.User)
            .where(models.User.username == username)
            .order_by(models.User.is_verified.desc(), models.User.updated_at.desc())
        ).scalars()
    )

def list_users(db: Session) -> list[models.User]:
    return list(db.execute(select(models.User).order_by(models.User.created_at.asc())).scalars())

def stage_signup(db: Session, username: str, email: str, password: str,
                 existing: models.User | None = None) -> models.User:
    """
    Create an unverified user, or reissue the code of an existing unverified
    one. The change is flushed but not committed; the caller commits once the
    verification email has gone out.
    """
    user = existing or models.User(email=email, is_verified=False)
    user.username = username
    user.password = password
    user.verify_code = security.generate_verify_code()
    user.verify_code_expire = security.verify_code_expiry()
    if existing is None:
        db.add(user)
    db.flush()
    return user

def mark_verified(db: Session, user: models.User, code: str) -> bool:
    """Flip is_verified only if the stored code still matches."""
    result = db.execute(
        update(models.User)
        .where(models.User.id == user.id, models.User.verify_code == code)
        .values(is_verified=True, updated_at=models.utcnow())
        .execution_options(synchronize_session="fetch")
    )
    db.commit()
    return result.rowcount == 1

def update_profile(db: Session, user: models.User, fields: dict) -> models.User:
    saved_jobs = fields.pop("saved_jobs", None)
    for key, value in fields.items():
        setattr(user, key, value)
    if saved_jobs is not None:
        replace_saved_jobs(db, user, saved_jobs)
    user.updated_at = models.utcnow()
    db.commit()
    db.refresh(user)
    return user


# Jobs
def list_jobs(db: Session) -> list[models.Job]:
    return list(db.execute(select(models.Job).order_by(models.Job.created_at.desc())).scalars())

def get_job(db: Session, job_id: str) -> models.Job | None:
    return db.get(models.Job, job_id)

def get_jobs_by_ids(db: Session, job_ids: Iterable[str]) -> dict[str, models.Job]:
    ids = set(job_ids)
    if not ids:
        return {}
    rows = db.execute(select(models.Job).where(models.Job.id.in_(ids))).scalars()
    return {job.id: job for job in rows}

def upsert_job(db: Session, j: dict) -> models.Job:
    """
    j is one scraped job dict. Matched by ``id`` when present, otherwise by
    (title, company, apply link) so re-imports don't duplicate postings.
    """
    row = None
    if j.get("id"):
        row = db.get(models.Job, str(j["id"]))
    if row is None:
        row = db.execute(
            select(models.Job).where(
                models.Job.title == (j.get("job_title") or ""),
                models.Job.company == j.get("company_name"),
                models.Job.apply_link == j.get("job_link"),
            )
        ).scalars().first()
    if row is None:
        row = models.Job(id=str(j["id"])) if j.get("id") else models.Job()
        db.add(row)

    row.title = j.get("job_title") or ""
    row.company = j.get("company_name")
    row.location = j.get("job_location")
    row.job_type = j.get("job_type")
    row.salary = j.get("salary")
    row.skills_required = list(j.get("skills_required") or [])
    row.description = j.get("description")
    row.apply_link = j.get("job_link")

    db.flush()
    return row


# Saved jobs
def saved_job_ids(db: Session, user: models.User) -> list[str]:
    return list(
        db.execute(
            select(models.SavedJob.job_id)
            .where(models.SavedJob.user_id == user.id)
            .order_by(models.SavedJob.id.asc())
        ).scalars()
    )

def save_job(db: Session, user: models.User, job_id: str) -> bool:
    """
    Add job_id to the user's saved list. Returns False if it is already there.

    The unique (user_id, job_id) constraint makes the add atomic, so two
    racing requests can't both insert.
    """
    db.add(models.SavedJob(user_id=user.id, job_id=job_id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return False
    return True

def count_saved_jobs(db: Session, user: models.User) -> int:
    return db.execute(
        select(func.count()).select_from(models.SavedJob).where(models.SavedJob.user_id == user.id)
    ).scalar_one()

def remove_saved_job(db: Session, user: models.User, job_id: str) -> bool:
    # single conditional delete; the unique constraint means at most one row
    result = db.execute(
        delete(models.SavedJob).where(
            models.SavedJob.user_id == user.id, models.SavedJob.job_id == job_id
        )
    )
    db.commit()
    return result.rowcount > 0

def list_saved_jobs(db: Session, user: models.User) -> tuple[list[models.Job], list[str]]:
    ids = saved_job_ids(db, user)
    by_id = get_jobs_by_ids(db, ids)
    return [by_id[i] for i in ids if i in by_id], ids

def replace_saved_jobs(db: Session, user: models.User, job_ids: list[str]) -> None:
    db.execute(delete(models.SavedJob).where(models.SavedJob.user_id == user.id))
    for job_id in dict.fromkeys(job_ids):
        db.add(models.SavedJob(user_id=user.id, job_id=job_id))
    db.flush()
    db.expire(user, ["saved"])


# Recommendations
def add_recommendations(db: Session, user: models.User,
                        entries: list[tuple[str, float]]) -> list[models.JobRecommendation]:
    rows = [
        models.JobRecommendation(user_id=user.id, job_id=job_id, match_percentage=pct)
        for job_id, pct in entries
    ]
    db.add_all(rows)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    return rows

def list_recommended_jobs(db: Session, user: models.User) -> list[models.Job] | None:
    """
    Jobs recommended to the user, best match first, each job once.
    Returns None when the user has no recommendations at all.
    """
    rows = db.execute(
        select(models.JobRecommendation.job_id, func.max(models.JobRecommendation.match_percentage))
        .where(models.JobRecommendation.user_id == user.id)
        .group_by(models.JobRecommendation.job_id)
    ).all()
    if not rows:
        return None
    ranked = sorted(rows, key=lambda r: r[1], reverse=True)
    by_id = get_jobs_by_ids(db, (r[0] for r in ranked))
    return [by_id[job_id] for job_id, _ in ranked if job_id in by_id]


# Notifications
def create_notification(db: Session, email: str, message: str, type_: str) -> models.Notification:
    notification = models.Notification(user_email=email, message=message, type=type_)
    db.add(notification)
    db.commit()
    db.refresh(notification)
    return notification

def list_notifications(db: Session, email: str) -> list[models.Notification]:
    return list(
        db.execute(
            select(models.Notification)
            .where(models.Notification.user_email == email)
            .order_by(models.Notification.created_at.desc())
        ).scalars()
    )

def delete_notification(db: Session, email: str, notification_id: str) -> bool:
    # ownership lives in the WHERE clause: both id and owner must match
    result = db.execute(
        delete(models.Notification).where(
            models.Notification.id == notification_id,
            models.Notification.user_email == email,
        )
    )
    db.commit()
    return result.rowcount > 0
