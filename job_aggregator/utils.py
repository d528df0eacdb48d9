"""Utility helpers shared across the aggregator."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional


def new_id() -> str:
    """Generate a unique identifier for records whose source omits one."""
    return uuid.uuid4().hex


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def uniq_preserve_order(items: Iterable[str], limit: Optional[int] = None) -> List[str]:
    """Deduplicate while preserving first-seen order.

    Comparison is case-insensitive; the first spelling wins. Empty entries are dropped.
    """
    seen = set()
    out: List[str] = []
    for it in items:
        if not it:
            continue
        key = it.strip().lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(it)
        if limit is not None and len(out) >= limit:
            break
    return out
