"""JSearch (RapidAPI) source connector.

Docs: https://rapidapi.com/letscrape-6bRBa3QguO5/api/jsearch

Paid aggregator with the richest data (structured salary bounds, employment
type, apply links). Requires `RAPIDAPI_KEY`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict

from ..config import Settings
from ..models import JobRecord, Salary, SearchParams, SearchResult
from ..normalize import extract_skills_from_description, parse_salary
from ..utils import new_id, utc_now_iso
from .base import JobSource, first_text, unique_by_id


class JSearchJob(BaseModel):
    """One listing as returned by JSearch (only the fields we read)."""

    model_config = ConfigDict(extra="ignore")

    job_id: Optional[Union[str, int]] = None
    job_title: Optional[str] = None
    employer_name: Optional[str] = None
    job_city: Optional[str] = None
    job_state: Optional[str] = None
    job_country: Optional[str] = None
    job_salary: Optional[Union[str, float]] = None
    job_min_salary: Optional[float] = None
    job_max_salary: Optional[float] = None
    job_salary_currency: Optional[str] = None
    job_description: Optional[str] = None
    job_apply_link: Optional[str] = None
    job_google_link: Optional[str] = None
    job_posted_at_datetime_utc: Optional[str] = None
    job_employment_type: Optional[str] = None


class JSearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: Optional[List[JSearchJob]] = None
    count: Optional[int] = None


def _location(job: JSearchJob) -> str:
    city, state = first_text(job.job_city), first_text(job.job_state)
    if city and state:
        return f"{city}, {state}"
    return first_text(job.job_country) or "Remote"


def to_record(job: JSearchJob) -> JobRecord:
    """Map a JSearch listing onto the canonical record."""
    parsed_min, parsed_max = parse_salary(job.job_salary)
    description = job.job_description or ""
    return JobRecord(
        id=first_text(job.job_id) or new_id(),
        title=first_text(job.job_title) or "Unknown Title",
        company=first_text(job.employer_name) or "Unknown Company",
        location=_location(job),
        salary=Salary(
            min=job.job_min_salary or parsed_min,
            max=job.job_max_salary or parsed_max,
            currency=first_text(job.job_salary_currency) or "USD",
        ),
        description=description,
        skills=extract_skills_from_description(description),
        url=first_text(job.job_apply_link, job.job_google_link) or "#",
        posted_date=first_text(job.job_posted_at_datetime_utc) or utc_now_iso(),
        employment_type=first_text(job.job_employment_type) or "FULLTIME",
        source="jsearch",
    )


def parse_response(payload: Any) -> SearchResult:
    resp = JSearchResponse.model_validate(payload)
    jobs = unique_by_id(to_record(j) for j in resp.data or [])
    return SearchResult(jobs=jobs, total_count=resp.count or len(jobs), source=JSearchSource.display_name)


class JSearchSource(JobSource):
    """Fetch jobs from JSearch and normalize them."""

    name = "jsearch"
    display_name = "JSearch API"
    host = "jsearch.p.rapidapi.com"
    base_url = f"https://{host}/search"

    def has_credentials(self, settings: Settings) -> bool:
        return bool(settings.RAPIDAPI_KEY)

    def fetch(self, client: httpx.Client, params: SearchParams, settings: Settings) -> Any:
        location = params.location or "USA"
        query: Dict[str, Any] = {
            "query": f"{params.query} in {location}",
            "page": params.page or 1,
            "num_pages": params.num_pages or 1,
            "date_posted": "month",
        }
        if params.remote:
            query["remote_jobs_only"] = "true"

        resp = client.get(
            self.base_url,
            params=query,
            headers={"X-RapidAPI-Key": settings.RAPIDAPI_KEY, "X-RapidAPI-Host": self.host},
        )
        resp.raise_for_status()
        return resp.json()

    def parse(self, payload: Any, params: SearchParams) -> SearchResult:
        return parse_response(payload)
