"""Greedy slot filling and overflow placement."""

from __future__ import annotations

from datetime import datetime, time
from typing import Iterable, List, Optional, Sequence

import structlog

from .classifier import Partition
from .date_window import TripDay
from .models import CandidateItem, Category, ScheduledItem, Slot

LOGGER = structlog.get_logger(__name__)

EXTRA_ACTIVITY_TIME = time(16, 30)
EXTRA_ACTIVITY_LABEL = "Extra Activity"
LATE_NIGHT_TIME = time(21, 0)
LATE_NIGHT_LABEL = "Late Night Bite"


class ItemQueue:
    """FIFO cursor over an immutable copy of candidates."""

    def __init__(self, items: Iterable[CandidateItem]):
        self._items = tuple(items)
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._items) - self._cursor

    def pop(self) -> Optional[CandidateItem]:
        if self._cursor >= len(self._items):
            return None
        item = self._items[self._cursor]
        self._cursor += 1
        return item


class CategoryQueues:
    """The dining and activity queues consumed during a scheduling run."""

    def __init__(self, split: Partition):
        self.dining = ItemQueue(split.dining)
        self.activity = ItemQueue(split.activity)

    def __len__(self) -> int:
        return len(self.dining) + len(self.activity)

    def take(self, category: Category) -> Optional[CandidateItem]:
        """Pop from the matching queue, falling back to the other one."""
        if category is Category.DINING:
            primary, secondary = self.dining, self.activity
        else:
            primary, secondary = self.activity, self.dining
        item = primary.pop()
        if item is None:
            item = secondary.pop()
        return item


def allocate(slots: Sequence[Slot], queues: CategoryQueues) -> List[ScheduledItem]:
    """
    Fill slot demands in (priority, date) order.

    Every day's priority-1 demand is served before any priority-2 demand, so a
    short supply is spread across the trip instead of piling onto the first
    days. Slots left over once both queues are empty are dropped.
    """
    ordered = sorted(slots, key=lambda slot: (slot.priority, slot.day.value))
    scheduled: List[ScheduledItem] = []
    dropped = 0

    for slot in ordered:
        item = queues.take(slot.category)
        if item is None:
            dropped += 1
            continue
        scheduled.append(ScheduledItem.from_candidate(item, slot.starts_at, slot.label))

    LOGGER.debug("allocator.complete", assigned=len(scheduled), dropped=dropped)
    return scheduled


def distribute_overflow(days: Sequence[TripDay], queues: CategoryQueues) -> List[ScheduledItem]:
    """Place leftover candidates on fixed extra slots, cycling over target days."""
    if not len(queues) or not days:
        return []

    target_days = [day for day in days if day.is_core] or list(days)
    placed: List[ScheduledItem] = []
    # Shared by both passes; the dining pass continues where activities stopped.
    counter = 0

    for queue, slot_time, label in (
        (queues.activity, EXTRA_ACTIVITY_TIME, EXTRA_ACTIVITY_LABEL),
        (queues.dining, LATE_NIGHT_TIME, LATE_NIGHT_LABEL),
    ):
        while len(queue):
            item = queue.pop()
            day = target_days[counter % len(target_days)]
            placed.append(
                ScheduledItem.from_candidate(item, datetime.combine(day.value, slot_time), label)
            )
            counter += 1

    LOGGER.debug("overflow.complete", placed=len(placed), target_days=len(target_days))
    return placed
