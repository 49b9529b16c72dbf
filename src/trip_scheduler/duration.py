"""Free-text duration parsing."""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Optional

DEFAULT_MINUTES = 60
HALF_DAY_MINUTES = 240
FULL_DAY_MINUTES = 480

_NUMBER_RE = re.compile(r"\d*\.?\d+")


def parse_duration_minutes(text: Optional[str]) -> int:
    """
    Turn a duration such as ``"2h"``, ``"Half-day"`` or ``"1.5 hours"`` into minutes.

    Keywords win over numbers, so ``"Full day tour"`` is a full day rather
    than one hour. Bare numbers are read as hours.
    """
    if not text:
        return DEFAULT_MINUTES

    lowered = str(text).lower()
    if "half" in lowered:
        return HALF_DAY_MINUTES
    if "day" in lowered:
        return FULL_DAY_MINUTES

    match = _NUMBER_RE.search(lowered)
    if not match:
        return DEFAULT_MINUTES
    return int(round(float(match.group()) * 60))


def end_time_for(starts_at: datetime, duration: Optional[str]) -> datetime:
    """End of an item's time span."""
    return starts_at + timedelta(minutes=parse_duration_minutes(duration))
