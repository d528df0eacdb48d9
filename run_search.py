"""CLI entry point.

This script runs the provider waterfall once, optionally ranks the listings
by skill fit, and writes a JSON document to disk.

Examples:
    python run_search.py --out jobs.json
    python run_search.py --query "data engineer" --location Berlin
    python run_search.py --query python --remote --skills python,aws,docker

The output is a dict shaped like the HTTP API response (camelCase keys).
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from job_aggregator.aggregator import search_jobs
from job_aggregator.models import SearchParams
from job_aggregator.notifications import NotificationBus
from job_aggregator.scoring import rank_jobs


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Search jobs across providers with fallback.")
    p.add_argument("--query", type=str, default="software engineer", help="Search terms.")
    p.add_argument("--location", type=str, default=None, help="Optional location filter.")
    p.add_argument("--page", type=int, default=1, help="Result page (1-based).")
    p.add_argument("--remote", action="store_true", help="Prefer remote-only listings.")
    p.add_argument(
        "--skills",
        type=str,
        default="",
        help="Comma-separated candidate skills; when given, jobs are ranked by fit score.",
    )
    p.add_argument("--out", type=str, default="jobs.json", help="Output JSON file path.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log provider decisions.")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    bus = NotificationBus()
    bus.subscribe(lambda note: print(f"{note.icon} {note.message}"))

    params = SearchParams(query=args.query, location=args.location, page=args.page, remote=args.remote)
    result = search_jobs(params, bus=bus)

    skills = [s.strip() for s in args.skills.split(",") if s.strip()]
    if skills:
        jobs = []
        for job, score in rank_jobs(result.jobs, skills):
            data = job.model_dump(mode="json", by_alias=True)
            data["fitScore"] = round(score, 2)
            jobs.append(data)
    else:
        jobs = [job.model_dump(mode="json", by_alias=True) for job in result.jobs]

    out_path = Path(args.out).expanduser().resolve()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    doc = {"jobs": jobs, "totalCount": result.total_count, "source": result.source, "query": args.query}
    out_path.write_text(json.dumps(doc, indent=2, ensure_ascii=False), encoding="utf-8")

    print(f"Wrote {len(jobs)} jobs from {result.source} to: {out_path}")


if __name__ == "__main__":
    main()
