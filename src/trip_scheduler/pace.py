"""Pace normalisation and pace-derived sizing helpers."""

from __future__ import annotations

import math
from typing import Any

import structlog

from .utils import DateLike, parse_calendar_date

LOGGER = structlog.get_logger(__name__)

DEFAULT_PACE = 50
MIN_PACE = 0
MAX_PACE = 100

# Candidate-count sizing used when asking the generator for experiences.
MIN_SUGGESTED_ITEMS = 3
MAX_SUGGESTED_ITEMS = 25
RELAXED_DENSITY = 1.0
BALANCED_DENSITY = 1.6
PACKED_DENSITY = 3.0


def normalise_pace(value: Any, default: int = DEFAULT_PACE) -> int:
    """Coerce a pace value to an integer in [0, 100]."""
    if isinstance(value, bool):
        value = None
    try:
        pace = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        LOGGER.warning("pace.invalid", value=repr(value), fallback=default)
        return default

    if pace < MIN_PACE or pace > MAX_PACE:
        clamped = max(MIN_PACE, min(pace, MAX_PACE))
        LOGGER.warning("pace.clamped", value=pace, clamped=clamped)
        return clamped
    return pace


def pace_label(pace: Any) -> str:
    """Human label for a pace value."""
    value = normalise_pace(pace)
    if value > 70:
        return "Packed"
    if value < 30:
        return "Relaxed"
    return "Balanced"


def suggest_item_count(start: DateLike, end: DateLike, pace: Any) -> int:
    """
    How many candidate experiences to request for a trip.

    Travel days (first and last) get one item each; core days get a density
    derived from the pace. The result is clamped to a sensible request size.
    """
    value = normalise_pace(pace)
    start_value = parse_calendar_date(start)
    end_value = parse_calendar_date(end)
    days = 1
    if start_value is not None and end_value is not None:
        days = max(1, (end_value - start_value).days + 1)

    density = BALANCED_DENSITY
    if value < 35:
        density = RELAXED_DENSITY
    elif value > 65:
        density = PACKED_DENSITY

    core_days = max(0, days - 2)
    target = math.ceil(core_days * density + 2)
    return max(MIN_SUGGESTED_ITEMS, min(target, MAX_SUGGESTED_ITEMS))
