"""Normalization & heuristics.

This module contains deterministic parsing logic:
- skill extraction from free-text job descriptions (closed keyword vocabulary)
- salary range parsing from free-text or numeric salary fields

Both functions are pure and total: they never raise on odd input and always
return a structurally valid value.
"""

from __future__ import annotations

import re
from typing import Any, List, Optional, Tuple

from .utils import uniq_preserve_order


MAX_SKILLS = 10

# Matched as case-insensitive substrings; output order follows this list.
SKILL_KEYWORDS = [
    # Programming languages
    "javascript", "typescript", "python", "java", "c++", "c#", "go", "golang",
    "rust", "ruby", "php", "swift", "kotlin", "scala",
    # Frontend
    "react", "vue", "angular", "next.js", "nextjs", "svelte", "html", "css",
    "tailwind", "sass", "webpack",
    # Backend
    "node.js", "nodejs", "express", "django", "flask", "spring", "rails",
    "fastapi", "graphql", "rest api",
    # Databases
    "postgresql", "postgres", "mysql", "mongodb", "redis", "elasticsearch",
    "dynamodb", "sql", "nosql",
    # Cloud & DevOps
    "aws", "azure", "gcp", "google cloud", "docker", "kubernetes", "k8s",
    "terraform", "jenkins", "ci/cd", "github actions",
    # AI/ML
    "machine learning", "deep learning", "tensorflow", "pytorch", "nlp",
    "computer vision", "llm", "openai", "langchain",
    # Data
    "data science", "data engineering", "spark", "hadoop", "airflow", "pandas",
    "numpy", "tableau", "power bi",
    # Mobile
    "ios", "android", "react native", "flutter", "mobile development",
    # Other
    "agile", "scrum", "git", "linux", "microservices", "api design",
    "system design", "leadership", "communication",
]


def format_skill(keyword: str) -> str:
    """Capitalize the first letter of each whitespace-separated token.

    The rest of each token is left untouched, so "node.js" becomes "Node.js".
    """
    return " ".join(word[:1].upper() + word[1:] for word in keyword.split(" "))


def extract_skills_from_description(description: Optional[str]) -> List[str]:
    """Return known skills mentioned in the description, in vocabulary order."""
    text = (description or "").lower()
    if not text:
        return []
    hits = [format_skill(kw) for kw in SKILL_KEYWORDS if kw in text]
    return uniq_preserve_order(hits, limit=MAX_SKILLS)


_CURRENCY_RE = re.compile(r"[$€£¥₹,]")
_NUM = r"(\d+(?:\.\d+)?)\s*k?"
_RANGE_RE = re.compile(_NUM + r"\s*(?:-|–|to)\s*" + _NUM)
_SINGLE_RE = re.compile(_NUM)


def _in_thousands(value: float) -> float:
    # Small figures are assumed to be quoted in thousands ("120k", "80-100").
    return value * 1000 if value < 1000 else value


def parse_salary(value: Any) -> Tuple[Optional[float], Optional[float]]:
    """Extract a (min, max) salary range from a free-text or numeric field.

    Examples:
        "100k-150k"   -> (100000.0, 150000.0)
        "$100,000"    -> (100000.0, 100000.0)
        "competitive" -> (None, None)
        None          -> (None, None)
    """
    if isinstance(value, bool) or value is None:
        return None, None

    if isinstance(value, (int, float)):
        amount = _in_thousands(float(value))
        return amount, amount

    if not isinstance(value, str) or not value.strip():
        return None, None

    cleaned = _CURRENCY_RE.sub("", value).lower()

    m = _RANGE_RE.search(cleaned)
    if m:
        lo = _in_thousands(float(m.group(1)))
        hi = _in_thousands(float(m.group(2)))
        return (lo, hi) if lo <= hi else (hi, lo)

    m = _SINGLE_RE.search(cleaned)
    if m:
        amount = _in_thousands(float(m.group(1)))
        return amount, amount

    return None, None
