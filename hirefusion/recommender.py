"""
Skill-based job matching.

A user and a job are compared as binary vectors over the union of their
normalised skills; the cosine score is then curved so that partial overlaps
still read as a meaningful percentage.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Iterable

SKILL_SYNONYMS = {
    "js": "javascript",
    "node": "nodejs",
    "node.js": "nodejs",
    "python3": "python",
    "frontend": "frontend development",
    "front-end": "frontend development",
    "backend": "backend development",
    "back-end": "backend development",
}

FLOOR_SCORE = 0.3

_VERSION_RE = re.compile(r"\s*\d+(\.\d+)*\s*")


@dataclass
class Match:
    job_id: str
    match_percentage: int


def normalize_skill(skill: str) -> str:
    normalized = _VERSION_RE.sub("", skill.lower().strip())
    return SKILL_SYNONYMS.get(normalized, normalized)


def cosine_similarity(a: list[int], b: list[int]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    if not norm:
        return 0.0
    return dot / norm


def match_percentage(user_skills: set[str], job_skills: set[str], vocabulary: list[str]) -> int:
    user_vec = [1 if s in user_skills else 0 for s in vocabulary]
    job_vec = [1 if s in job_skills else 0 for s in vocabulary]
    score = cosine_similarity(user_vec, job_vec)
    score = min(math.sqrt(score) * 2.0, 1.0)
    score = max(score, FLOOR_SCORE)
    return round(score * 100)


def rank_jobs(user_skills: Iterable[str], jobs: Iterable[tuple[str, Iterable[str]]],
              min_match: int = 50) -> list[Match]:
    """
    Score each ``(job_id, skills_required)`` against the user's skills and
    return the matches at or above ``min_match``, best first.
    """
    user_set = {normalize_skill(s) for s in user_skills if s and s.strip()}
    normalized_jobs = [
        (job_id, {normalize_skill(s) for s in skills or [] if s and s.strip()})
        for job_id, skills in jobs
    ]
    vocabulary = sorted(user_set.union(*(skills for _, skills in normalized_jobs)))

    matches = [
        Match(job_id, match_percentage(user_set, skills, vocabulary))
        for job_id, skills in normalized_jobs
    ]
    matches = [m for m in matches if m.match_percentage >= min_match]
    matches.sort(key=lambda m: m.match_percentage, reverse=True)
    return matches
