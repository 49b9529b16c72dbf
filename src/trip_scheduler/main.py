"""Command-line entry point for the itinerary scheduler."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

import structlog
from pydantic import TypeAdapter, ValidationError

from .config import Settings
from .models import CandidateItem, ImportReport, ScheduledItem
from .scheduler import build_schedule
from .summariser import format_import_report, format_schedule
from .trip_store import TripItemStore, import_schedule
from .utils import configure_logging

LOGGER = structlog.get_logger(__name__)

_CANDIDATES = TypeAdapter(List[CandidateItem])


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """CLI argument parsing."""
    parser = argparse.ArgumentParser(description="Turn approved trip experiences into a draft schedule.")
    parser.add_argument("--start", required=True, help="Trip start date (YYYY-MM-DD).")
    parser.add_argument("--end", required=True, help="Trip end date (YYYY-MM-DD).")
    parser.add_argument("--pace", type=int, help="0 = chill, 100 = packed. Defaults to DEFAULT_PACE.")
    parser.add_argument(
        "--candidates",
        required=True,
        type=Path,
        help="JSON file holding the approved candidate items.",
    )
    parser.add_argument("--json", action="store_true", help="Print the schedule as JSON.")
    parser.add_argument("--import-trip", dest="trip_id", help="Store the schedule against this trip id.")
    return parser.parse_args(argv)


def load_candidates(path: Path) -> List[CandidateItem]:
    """Read candidates from a JSON list, or an object with a ``candidateItems``/``items`` key."""
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("candidateItems", payload.get("items", []))
    return _CANDIDATES.validate_python(payload)


async def run_import(settings: Settings, trip_id: str, schedule: List[ScheduledItem]) -> ImportReport:
    async with TripItemStore(settings) as store:
        return await import_schedule(
            store,
            trip_id,
            schedule,
            status=settings.import_status,
            max_concurrency=settings.max_concurrent_imports,
        )


def cli(argv: Optional[list[str]] = None) -> int:
    """Console script entrypoint."""
    args = parse_args(argv)

    try:
        settings = Settings()
    except ValidationError as exc:  # pragma: no cover - startup validation
        configure_logging()
        LOGGER.exception("settings.error", error=str(exc))
        return 2

    configure_logging(settings.log_level)

    try:
        candidates = load_candidates(args.candidates)
    except (OSError, ValueError) as exc:
        LOGGER.error("candidates.load_failed", path=str(args.candidates), error=str(exc))
        print(f"Error: could not read candidates from {args.candidates}: {exc}", file=sys.stderr)
        return 2

    pace = args.pace if args.pace is not None else settings.default_pace
    schedule = build_schedule(args.start, args.end, pace, candidates)

    if args.json:
        print(json.dumps([item.model_dump(mode="json", by_alias=True) for item in schedule], indent=2))
    else:
        print(format_schedule(schedule))

    if not args.trip_id:
        return 0

    try:
        report = asyncio.run(run_import(settings, args.trip_id, schedule))
    except Exception as exc:  # pragma: no cover - top level
        LOGGER.exception("import.failed", error=str(exc))
        return 1

    print(format_import_report(report), file=sys.stderr)
    return 0 if report.all_succeeded else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(cli())
