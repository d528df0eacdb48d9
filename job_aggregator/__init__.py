"""Job aggregator package.

The package is structured around a stable canonical schema:
- `models.py` defines the provider-independent job record.
- `sources/` contains one adapter per provider, each owning its raw response shape.
- `normalize.py` holds deterministic parsing (skills, salaries).
- `aggregator.py` runs the provider waterfall; `scoring.py` rates skill fit.
"""

from .aggregator import default_sources, search_jobs
from .models import JobRecord, Salary, SearchParams, SearchResult
from .normalize import extract_skills_from_description, parse_salary
from .scoring import calculate_fit_score, rank_jobs

__all__ = [
    "JobRecord",
    "Salary",
    "SearchParams",
    "SearchResult",
    "calculate_fit_score",
    "default_sources",
    "extract_skills_from_description",
    "parse_salary",
    "rank_jobs",
    "search_jobs",
]
