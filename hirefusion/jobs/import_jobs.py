"""
Load scraped job postings into the jobs table.

    python -m hirefusion.jobs.import_jobs jobs.json

The file holds a JSON list (or ``{"jobs": [...]}``) of scraper records with
``job_title``, ``company_name``, ``job_location``, ``job_type``, ``salary``,
``skills_required``, ``description`` and ``job_link``.
"""
from __future__ import annotations
import argparse
import json
import logging
from pathlib import Path

from hirefusion.crud import upsert_job
from hirefusion.database import get_sessionmaker, init_db

logger = logging.getLogger(__name__)


def load_records(path: Path) -> list[dict]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("jobs") or data.get("results") or []
    return [j for j in data if isinstance(j, dict) and j.get("job_title")]


def import_jobs(path: Path) -> int:
    records = load_records(path)
    db = get_sessionmaker()()
    try:
        for j in records:
            upsert_job(db, j)
        db.commit()
        logger.info("Imported %d jobs from %s", len(records), path)
        return len(records)
    except Exception:
        db.rollback()
        logger.exception("Job import from %s failed", path)
        raise
    finally:
        db.close()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("path", type=Path, help="JSON file of scraped jobs")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    init_db()
    import_jobs(args.path)


if __name__ == "__main__":
    main()
