"""Base class for provider adapters.

An adapter never raises out of `search`: missing credentials, transport
errors and malformed payloads all come back as an empty `SearchResult` with a
diagnostic `source` tag, so the aggregator can treat them like "no results".
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional

import httpx
from pydantic import ValidationError

from ..config import Settings, get_settings
from ..http import get_client
from ..models import JobRecord, SearchParams, SearchResult

logger = logging.getLogger(__name__)


class JobSource(ABC):
    """Abstract base class for a job provider adapter."""

    name: str
    display_name: str

    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.BaseTransport] = None) -> None:
        self._settings = settings
        self._transport = transport

    def has_credentials(self, settings: Settings) -> bool:
        """Whether the provider can be called; checked before any request."""
        return True

    @abstractmethod
    def fetch(self, client: httpx.Client, params: SearchParams, settings: Settings) -> Any:
        """Issue the provider request and return the decoded JSON payload."""
        raise NotImplementedError

    @abstractmethod
    def parse(self, payload: Any, params: SearchParams) -> SearchResult:
        """Map a decoded payload onto canonical records."""
        raise NotImplementedError

    def search(self, params: SearchParams) -> SearchResult:
        settings = self._settings or get_settings()

        if not self.has_credentials(settings):
            logger.warning("%s credentials not set, skipping", self.name)
            return SearchResult.empty(f"{self.name} (no key)")

        try:
            with get_client(settings, self._transport) as client:
                payload = self.fetch(client, params, settings)
            result = self.parse(payload, params)
        except httpx.HTTPStatusError as exc:
            logger.error("%s API error: HTTP %s", self.name, exc.response.status_code)
            return SearchResult.empty(f"{self.name} (error)")
        except httpx.HTTPError as exc:
            logger.error("%s request failed: %s", self.name, exc)
            return SearchResult.empty(f"{self.name} (error)")
        except (ValidationError, ValueError, TypeError, KeyError, AttributeError):
            logger.exception("%s returned an unparseable payload", self.name)
            return SearchResult.empty(f"{self.name} (error)")

        logger.info("%s returned %d jobs", self.name, len(result.jobs))
        return result


def unique_by_id(jobs: Iterable[JobRecord]) -> List[JobRecord]:
    """Drop records whose id was already seen, keeping the first."""
    seen = set()
    out: List[JobRecord] = []
    for job in jobs:
        if job.id in seen:
            continue
        seen.add(job.id)
        out.append(job)
    return out


def first_text(*values: Any) -> Optional[str]:
    """First value that is a non-blank string (or a number); strings are returned unchanged."""
    for v in values:
        if isinstance(v, bool) or v is None:
            continue
        if isinstance(v, (int, float)):
            return str(v)
        if isinstance(v, str) and v.strip():
            return v
    return None
