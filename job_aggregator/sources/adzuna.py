"""Adzuna source connector.

Docs: https://developer.adzuna.com/

Needs both `ADZUNA_APP_ID` and `ADZUNA_API_KEY`. Salaries arrive as separate
numeric bounds; company and location are nested objects.
"""

from __future__ import annotations

from typing import Any, List, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict

from ..config import Settings
from ..models import JobRecord, Salary, SearchParams, SearchResult
from ..normalize import extract_skills_from_description
from ..utils import new_id, utc_now_iso
from .base import JobSource, first_text, unique_by_id


RESULTS_PER_PAGE = 20


class AdzunaNamed(BaseModel):
    model_config = ConfigDict(extra="ignore")

    display_name: Optional[str] = None


class AdzunaJob(BaseModel):
    """One listing as returned by Adzuna (only the fields we read)."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[Union[str, int]] = None
    title: Optional[str] = None
    company: Optional[AdzunaNamed] = None
    location: Optional[AdzunaNamed] = None
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    description: Optional[str] = None
    redirect_url: Optional[str] = None
    created: Optional[str] = None
    contract_type: Optional[str] = None


class AdzunaResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    results: Optional[List[AdzunaJob]] = None
    count: Optional[int] = None


def to_record(job: AdzunaJob) -> JobRecord:
    """Map an Adzuna listing onto the canonical record."""
    description = job.description or ""
    return JobRecord(
        id=first_text(job.id) or new_id(),
        title=first_text(job.title) or "Unknown Title",
        company=first_text(job.company.display_name if job.company else None) or "Unknown Company",
        location=first_text(job.location.display_name if job.location else None) or "Unknown Location",
        salary=Salary(min=job.salary_min or None, max=job.salary_max or None, currency="USD"),
        description=description,
        skills=extract_skills_from_description(description),
        url=first_text(job.redirect_url) or "#",
        posted_date=first_text(job.created) or utc_now_iso(),
        employment_type=first_text(job.contract_type) or "permanent",
        source="adzuna",
    )


def parse_response(payload: Any) -> SearchResult:
    resp = AdzunaResponse.model_validate(payload)
    jobs = unique_by_id(to_record(j) for j in resp.results or [])
    return SearchResult(jobs=jobs, total_count=resp.count or len(jobs), source=AdzunaSource.display_name)


class AdzunaSource(JobSource):
    """Fetch jobs from Adzuna and normalize them."""

    name = "adzuna"
    display_name = "Adzuna API"
    base_url = "https://api.adzuna.com/v1/api/jobs"

    def has_credentials(self, settings: Settings) -> bool:
        return bool(settings.ADZUNA_APP_ID and settings.ADZUNA_API_KEY)

    def fetch(self, client: httpx.Client, params: SearchParams, settings: Settings) -> Any:
        page = params.page or 1
        url = f"{self.base_url}/{settings.ADZUNA_COUNTRY}/search/{page}"
        resp = client.get(
            url,
            params={
                "app_id": settings.ADZUNA_APP_ID,
                "app_key": settings.ADZUNA_API_KEY,
                "what": params.query,
                "where": params.location or "",
                "results_per_page": RESULTS_PER_PAGE,
                "content-type": "application/json",
            },
        )
        resp.raise_for_status()
        return resp.json()

    def parse(self, payload: Any, params: SearchParams) -> SearchResult:
        return parse_response(payload)
