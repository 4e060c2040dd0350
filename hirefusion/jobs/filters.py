from __future__ import annotations
import re
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from hirefusion import models
from hirefusion.crud import as_utc
from hirefusion.schemas import JobFilterIn

DATE_POSTED_WINDOWS = {
    "last_24_hours": timedelta(days=1),
    "last_7_days": timedelta(days=7),
    "last_30_days": timedelta(days=30),
}


def _text_contains_any(text: str | None, needles: list[str]) -> bool:
    if not needles:
        return False
    tl = (text or "").lower()
    return any(n.lower() in tl for n in needles)


def parse_salary(salary: str | None) -> tuple[int, int] | None:
    """'$50,000 - $100,000' -> (50000, 100000); '$75,000' -> (75000, 75000)."""
    if not salary:
        return None
    numbers = [int(n) for n in re.findall(r"\d+", salary.replace(",", ""))]
    if not numbers:
        return None
    if "-" in salary and len(numbers) >= 2:
        return numbers[0], numbers[1]
    return numbers[0], numbers[0]


def salary_in_range(salary: str | None, salary_range: tuple[float, float] | None) -> bool:
    # jobs without a usable salary are never filtered out
    if not salary_range:
        return True
    parsed = parse_salary(salary)
    if parsed is None:
        return True
    low, high = parsed
    range_min, range_max = salary_range
    return low <= range_max and high >= range_min


def date_posted_cutoff(date_posted: str | None, now: datetime | None = None) -> datetime | None:
    window = DATE_POSTED_WINDOWS.get(date_posted or "")
    if window is None:
        return None
    return (now or datetime.now(timezone.utc)) - window


def passes_filters(job: models.Job, filters: JobFilterIn) -> bool:
    """Apply the in-Python part of the filter (the parts a plain column query can't express).

    - Companies: company must contain one of the given names (case-insensitive).
    - Skills: job must require every listed skill.
    - Remote: any remote option means the location must mention "remote".
    - Salary: the job's salary span must overlap the requested range.
    """
    if filters.companies and not _text_contains_any(job.company, filters.companies):
        return False
    if filters.skills:
        required = {s.lower() for s in job.skills_required or []}
        if not all(s.lower() in required for s in filters.skills):
            return False
    if filters.remote_options and not _text_contains_any(job.location, ["remote"]):
        return False
    return salary_in_range(job.salary, filters.salary_range)


def filter_jobs(db: Session, filters: JobFilterIn) -> list[models.Job]:
    q = select(models.Job).order_by(models.Job.created_at.desc())
    if filters.job_types:
        q = q.where(models.Job.job_type.in_(filters.job_types))

    cutoff = date_posted_cutoff(filters.date_posted)
    jobs = list(db.execute(q).scalars())
    if cutoff is not None:
        jobs = [j for j in jobs if as_utc(j.created_at) >= cutoff]
    return [j for j in jobs if passes_filters(j, filters)]
