"""Plain-text rendering of schedules and import reports."""

from __future__ import annotations

from itertools import groupby
from typing import List, Sequence

from .models import ImportReport, ScheduledItem
from .utils import normalise_whitespace


def format_schedule(items: Sequence[ScheduledItem]) -> str:
    """Return a day-by-day summary of a schedule."""
    if not items:
        return "No experiences scheduled."

    lines: List[str] = []
    for day, day_items in groupby(items, key=lambda item: item.assigned_datetime.date()):
        if lines:
            lines.append("")
        lines.append(day.strftime("%A %d %B %Y"))
        for item in day_items:
            lines.append(f" • {format_item(item)}")
    return "\n".join(lines)


def format_item(item: ScheduledItem) -> str:
    """Format a single scheduled item."""
    pieces = [
        item.assigned_datetime.strftime("%H:%M"),
        item.time_hint,
        _fallback(item.title, "Untitled experience"),
    ]
    if item.duration:
        pieces.append(f"({normalise_whitespace(item.duration)})")
    if item.neighborhood:
        pieces.append(f"@ {normalise_whitespace(item.neighborhood)}")
    return " ".join(pieces[:2]) + ": " + " ".join(pieces[2:])


def format_import_report(report: ImportReport) -> str:
    """Summarise which items made it into the trip."""
    lines = [
        f"Import summary for trip {report.trip_id}: "
        f"succeeded {report.succeeded_count}, failed {report.failed_count}."
    ]
    if report.failed:
        lines.append("Failures:")
        for outcome in report.failed:
            when = outcome.starts_at.strftime("%d %b %H:%M")
            lines.append(f"- {outcome.title} ({when}): {outcome.error}")
    return "\n".join(lines)


def _fallback(value: str | None, default: str) -> str:
    candidate = normalise_whitespace(value or "")
    return candidate if candidate else default
