"""Per-provider connectors, each mapping its own response shape onto `JobRecord`."""

from .adzuna import AdzunaSource
from .base import JobSource
from .jsearch import JSearchSource
from .remotive import RemotiveSource

__all__ = ["AdzunaSource", "JSearchSource", "JobSource", "RemotiveSource"]
