"""Provider waterfall.

Providers are tried one at a time in priority order (paid, richest data
first; free last). The first non-empty result wins and later providers are
never called. Results from different providers are never merged.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from .models import SearchParams, SearchResult
from .notifications import NotificationBus
from .sources import AdzunaSource, JobSource, JSearchSource, RemotiveSource

logger = logging.getLogger(__name__)


def default_sources() -> List[JobSource]:
    """JSearch, then Adzuna, then Remotive."""
    return [JSearchSource(), AdzunaSource(), RemotiveSource()]


def search_jobs(
    params: Union[SearchParams, Dict[str, Any]],
    sources: Optional[Sequence[JobSource]] = None,
    bus: Optional[NotificationBus] = None,
) -> SearchResult:
    """Return the first non-empty provider result, else the last provider's empty one.

    An empty list covers both "no matches" and "provider failed"; the two are
    only told apart by the `source` tag.
    """
    if not isinstance(params, SearchParams):
        params = SearchParams.model_validate(params)

    sources = list(sources) if sources is not None else default_sources()
    if not sources:
        raise ValueError("search_jobs needs at least one source")

    result = None
    for source in sources:
        result = source.search(params)
        if result.jobs:
            break
        logger.info("%s gave no jobs (%s), falling back", source.name, result.source)

    if bus is not None:
        if result.jobs:
            bus.publish(f"Found {len(result.jobs)} jobs via {result.source}", icon="✓")
        else:
            bus.publish("No jobs found", icon="!")
    return result
