"""Data models for the job aggregator.

Every provider response is projected onto the same canonical `JobRecord`,
so callers never see provider-specific shapes. Records are built fresh for
each search and are frozen once constructed.

Field aliases carry the camelCase names of the public JSON contract
(`postedDate`, `employmentType`, `totalCount`, `numPages`); dump with
`by_alias=True` when serializing for callers.

This file uses Pydantic v2.
"""

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .normalize import MAX_SKILLS
from .utils import new_id, uniq_preserve_order, utc_now_iso


SourceName = Literal["jsearch", "adzuna", "remotive"]


class Salary(BaseModel):
    """Salary range; both bounds are None when the source gave no signal."""

    model_config = ConfigDict(frozen=True)

    min: Optional[float] = None
    max: Optional[float] = None
    currency: str = "USD"

    @model_validator(mode="before")
    @classmethod
    def _order_bounds(cls, data: Any) -> Any:
        if isinstance(data, dict):
            lo, hi = data.get("min"), data.get("max")
            if lo is not None and hi is not None and lo > hi:
                data = {**data, "min": hi, "max": lo}
        return data


class JobRecord(BaseModel):
    """A normalized job listing."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=new_id, description="Source id, or a generated token.")
    title: str = "Unknown Title"
    company: str = "Unknown Company"
    location: str = "Remote"
    salary: Salary = Field(default_factory=Salary)
    description: str = ""
    skills: List[str] = Field(default_factory=list)
    url: str = "#"
    posted_date: str = Field(default_factory=utc_now_iso, alias="postedDate")
    employment_type: str = Field(default="", alias="employmentType")
    source: SourceName

    @field_validator("skills")
    @classmethod
    def _cap_skills(cls, v: List[str]) -> List[str]:
        return uniq_preserve_order(v, limit=MAX_SKILLS)


class SearchParams(BaseModel):
    """Caller-supplied search parameters.

    `query` may be an empty string; callers apply their own default upstream.
    """

    model_config = ConfigDict(populate_by_name=True)

    query: str
    location: Optional[str] = None
    page: int = 1
    num_pages: int = Field(default=1, alias="numPages")
    remote: bool = False


class SearchResult(BaseModel):
    """Jobs from exactly one provider plus a tag naming that provider.

    On failure or missing credentials `jobs` is empty and `source` carries a
    diagnostic tag such as "adzuna (no key)" or "remotive (error)".
    """

    model_config = ConfigDict(populate_by_name=True)

    jobs: List[JobRecord] = Field(default_factory=list)
    total_count: int = Field(default=0, alias="totalCount")
    source: str

    @classmethod
    def empty(cls, source: str) -> "SearchResult":
        return cls(jobs=[], total_count=0, source=source)
