"""Remotive jobs source connector.

Remotive provides a public JSON endpoint with no key, so it is the last
resort in the waterfall. It only supports category filtering, not free-text
search, so we fetch one unfiltered page and match the query locally.

Docs: https://remotive.com/api/remote-jobs

Note: Free APIs can change; treat this as a pluggable connector.
"""

from __future__ import annotations

from typing import Any, List, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict

from ..config import Settings
from ..models import JobRecord, Salary, SearchParams, SearchResult
from ..normalize import extract_skills_from_description, parse_salary
from ..utils import new_id, utc_now_iso
from .base import JobSource, first_text, unique_by_id


FETCH_LIMIT = 50
MAX_RESULTS = 30


class RemotiveJob(BaseModel):
    """One listing as returned by Remotive (only the fields we read)."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[Union[str, int]] = None
    title: Optional[str] = None
    company_name: Optional[str] = None
    candidate_required_location: Optional[str] = None
    salary: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    url: Optional[str] = None
    publication_date: Optional[str] = None
    job_type: Optional[str] = None


class RemotiveResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    jobs: Optional[List[RemotiveJob]] = None


def matches_query(job: RemotiveJob, query: str) -> bool:
    """Case-insensitive substring match against title, description and tags."""
    q = query.lower()
    if q in (job.title or "").lower() or q in (job.description or "").lower():
        return True
    return any(q in tag.lower() for tag in job.tags or [])


def to_record(job: RemotiveJob) -> JobRecord:
    """Map a Remotive listing onto the canonical record."""
    description = job.description or ""
    lo, hi = parse_salary(job.salary)
    # Remotive ships its own tag list; fall back to keyword extraction without it.
    skills = [t for t in job.tags or [] if t] or extract_skills_from_description(description)
    return JobRecord(
        id=first_text(job.id) or new_id(),
        title=first_text(job.title) or "Unknown Title",
        company=first_text(job.company_name) or "Unknown Company",
        location=first_text(job.candidate_required_location) or "Remote",
        salary=Salary(min=lo, max=hi, currency="USD"),
        description=description,
        skills=skills,
        url=first_text(job.url) or "#",
        posted_date=first_text(job.publication_date) or utc_now_iso(),
        employment_type=first_text(job.job_type) or "full_time",
        source="remotive",
    )


def parse_response(payload: Any, query: str = "") -> SearchResult:
    resp = RemotiveResponse.model_validate(payload)
    kept = [j for j in resp.jobs or [] if matches_query(j, query)][:MAX_RESULTS]
    jobs = unique_by_id(to_record(j) for j in kept)
    return SearchResult(jobs=jobs, total_count=len(jobs), source=RemotiveSource.display_name)


class RemotiveSource(JobSource):
    """Fetch jobs from Remotive and normalize them."""

    name = "remotive"
    display_name = "Remotive API (Free)"
    base_url = "https://remotive.com/api/remote-jobs"

    def fetch(self, client: httpx.Client, params: SearchParams, settings: Settings) -> Any:
        resp = client.get(self.base_url, params={"limit": FETCH_LIMIT})
        resp.raise_for_status()
        return resp.json()

    def parse(self, payload: Any, params: SearchParams) -> SearchResult:
        return parse_response(payload, params.query)
