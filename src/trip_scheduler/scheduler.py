"""Draft schedule construction from approved candidates."""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

import structlog
from pydantic import ValidationError

from .allocator import CategoryQueues, allocate, distribute_overflow
from .classifier import partition
from .date_window import expand_date_range
from .models import CandidateItem, ScheduledItem
from .pace import normalise_pace
from .template import build_slot_plan
from .utils import DateLike

LOGGER = structlog.get_logger(__name__)

CandidateLike = Union[CandidateItem, Mapping[str, Any]]


def sort_schedule(items: Iterable[ScheduledItem]) -> List[ScheduledItem]:
    """Stable chronological ordering of scheduled items."""
    return sorted(items, key=lambda item: item.assigned_datetime)


def _coerce_candidates(candidates: Optional[Sequence[CandidateLike]]) -> List[CandidateItem]:
    items: List[CandidateItem] = []
    for index, raw in enumerate(candidates or ()):
        if isinstance(raw, CandidateItem):
            items.append(raw)
            continue
        try:
            items.append(CandidateItem.model_validate(raw))
        except ValidationError as exc:
            LOGGER.warning("schedule.candidate_skipped", index=index, error=str(exc))
    return items


def build_schedule(
    start_date: DateLike,
    end_date: DateLike,
    pace: Any,
    candidates: Optional[Sequence[CandidateLike]],
    *,
    today: Optional[date] = None,
) -> List[ScheduledItem]:
    """
    Assign every approved candidate a day and time.

    The caller's sequence is left untouched; the same inputs always produce
    the same schedule.
    """
    days = expand_date_range(start_date, end_date, today=today)
    items = _coerce_candidates(candidates)
    value = normalise_pace(pace)

    queues = CategoryQueues(partition(items))
    slots = build_slot_plan(days, value)

    scheduled = allocate(slots, queues)
    overflow = distribute_overflow(days, queues)
    schedule = sort_schedule(scheduled + overflow)

    LOGGER.info(
        "schedule.built",
        days=len(days),
        pace=value,
        candidates=len(items),
        slots=len(slots),
        allocated=len(scheduled),
        overflow=len(overflow),
    )
    return schedule
