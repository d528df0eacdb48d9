"""Skill-overlap fit scoring between a candidate and job listings."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from .models import JobRecord


NEUTRAL_SCORE = 0.5
MIN_SCORE = 0.1
MAX_SCORE = 1.0


def _skill_matches(job_skill: str, user_skills: Sequence[str]) -> bool:
    js = job_skill.lower()
    return any(us in js or js in us for us in user_skills)


def calculate_fit_score(user_skills: Iterable[str], job_skills: Sequence[str]) -> float:
    """Fraction of job skills covered by the user's skills, clamped to [0.1, 1.0].

    A user skill covers a job skill when either is a case-insensitive substring
    of the other. A job with no extracted skills gets a neutral 0.5: missing
    signal is not the same as no fit.
    """
    if not job_skills:
        return NEUTRAL_SCORE

    lowered = [s.lower() for s in user_skills if s]
    matched = sum(1 for skill in job_skills if _skill_matches(skill, lowered))
    return min(MAX_SCORE, max(MIN_SCORE, matched / len(job_skills)))


def rank_jobs(jobs: Iterable[JobRecord], user_skills: Sequence[str]) -> List[Tuple[JobRecord, float]]:
    """Pair each job with its fit score, best fit first (stable for ties)."""
    scored = [(job, calculate_fit_score(user_skills, job.skills)) for job in jobs]
    return sorted(scored, key=lambda pair: pair[1], reverse=True)
