"""Shared httpx client factory for provider requests."""

from __future__ import annotations

from typing import Optional

import httpx

from .config import Settings


def get_client(settings: Settings, transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    return httpx.Client(
        headers={"User-Agent": settings.USER_AGENT},
        timeout=settings.REQUEST_TIMEOUT,
        follow_redirects=True,
        transport=transport,
    )
