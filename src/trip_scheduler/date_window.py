"""Utilities for expanding a trip's date range into tagged days."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import List, Optional

import structlog

from .utils import DateLike, parse_calendar_date

LOGGER = structlog.get_logger(__name__)

MAX_TRIP_DAYS = 366


class DayPosition(str, Enum):
    """Where a day sits within the trip."""

    FIRST = "first"
    LAST = "last"
    CORE = "core"


@dataclass(frozen=True)
class TripDay:
    """Represents a calendar date of the trip and its position tag."""

    value: date
    position: DayPosition

    @property
    def iso(self) -> str:
        return self.value.isoformat()

    @property
    def is_core(self) -> bool:
        return self.position is DayPosition.CORE


def _position_for(index: int, total: int) -> DayPosition:
    if index == 0:
        return DayPosition.FIRST
    if index == total - 1:
        return DayPosition.LAST
    return DayPosition.CORE


def expand_date_range(
    start: DateLike,
    end: DateLike,
    *,
    today: Optional[date] = None,
) -> List[TripDay]:
    """
    Expand an inclusive start/end range into one ``TripDay`` per calendar date.

    Missing, unparseable or inverted ranges, and ranges longer than
    ``MAX_TRIP_DAYS``, collapse to a single day holding ``today``.
    """
    start_value = parse_calendar_date(start)
    end_value = parse_calendar_date(end)

    too_long = (
        start_value is not None
        and end_value is not None
        and (end_value - start_value).days >= MAX_TRIP_DAYS
    )
    if start_value is None or end_value is None or end_value < start_value or too_long:
        fallback = today or date.today()
        LOGGER.warning(
            "date_range.fallback",
            start=str(start),
            end=str(end),
            fallback=fallback.isoformat(),
        )
        return [TripDay(fallback, DayPosition.FIRST)]

    total = (end_value - start_value).days + 1
    return [
        TripDay(start_value + timedelta(days=offset), _position_for(offset, total))
        for offset in range(total)
    ]
