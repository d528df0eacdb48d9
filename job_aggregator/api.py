"""FastAPI application exposing the job search."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from .aggregator import search_jobs
from .models import SearchParams, SearchResult
from .notifications import NotificationBus

logger = logging.getLogger(__name__)

DEFAULT_QUERY = "software engineer"


class SearchRequest(BaseModel):
    """POST body; every field is optional."""

    model_config = ConfigDict(populate_by_name=True)

    query: Optional[str] = None
    location: Optional[str] = None
    page: Optional[int] = None
    num_pages: Optional[int] = Field(default=None, alias="numPages")
    remote: Optional[bool] = None


app = FastAPI(
    title="Job Aggregator API",
    description="Multi-provider job search with normalized listings",
    version="0.1.0",
)
app.state.bus = NotificationBus()


def _jobs_payload(result: SearchResult) -> list:
    return [job.model_dump(mode="json", by_alias=True) for job in result.jobs]


def _failure() -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Failed to search jobs", "jobs": []},
    )


@app.get("/jobs/search")
def get_search(
    query: str = Query(default=""),
    location: str = Query(default=""),
    page: int = Query(default=1),
    remote: bool = Query(default=False),
):
    """Search jobs from query-string parameters."""
    query = query or DEFAULT_QUERY
    params = SearchParams(query=query, location=location, page=page, num_pages=1, remote=remote)
    try:
        result = search_jobs(params, bus=app.state.bus)
    except Exception:
        logger.exception("Job search error")
        return _failure()

    return {
        "success": True,
        "jobs": _jobs_payload(result),
        "totalCount": result.total_count,
        "source": result.source,
        "query": query,
        "location": location,
    }


@app.post("/jobs/search")
def post_search(data: Optional[SearchRequest] = None):
    """Search jobs from a JSON body."""
    data = data or SearchRequest()
    params = SearchParams(
        query=data.query or DEFAULT_QUERY,
        location=data.location,
        page=data.page or 1,
        num_pages=data.num_pages or 1,
        remote=bool(data.remote),
    )
    try:
        result = search_jobs(params, bus=app.state.bus)
    except Exception:
        logger.exception("Job search error")
        return _failure()

    return {
        "success": True,
        "jobs": _jobs_payload(result),
        "totalCount": result.total_count,
        "source": result.source,
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
