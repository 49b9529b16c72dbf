"""Per-day slot demand template driven by the trip pace."""

from __future__ import annotations

from datetime import time
from typing import Any, List, Sequence

from .date_window import DayPosition, TripDay
from .models import Category, Slot
from .pace import normalise_pace

LUNCH_PACE = 35
AFTERNOON_PACE = 60
NIGHTLIFE_PACE = 80

WELCOME_DINNER = (time(19, 0), Category.DINING, 1, "Welcome Dinner")
FAREWELL_ACTIVITY = (time(10, 0), Category.ACTIVITY, 1, "Farewell Activity")

# (minimum pace, time, category, priority, label)
CORE_DAY_SLOTS = (
    (0, time(10, 0), Category.ACTIVITY, 1, "Morning Exploration"),
    (0, time(19, 30), Category.DINING, 2, "Dinner"),
    (LUNCH_PACE, time(13, 0), Category.DINING, 3, "Lunch"),
    (AFTERNOON_PACE, time(15, 0), Category.ACTIVITY, 4, "Afternoon Adventure"),
    (NIGHTLIFE_PACE, time(21, 30), Category.ACTIVITY, 5, "Nightlife"),
)


def build_slot_plan(days: Sequence[TripDay], pace: Any) -> List[Slot]:
    """Return the unsorted slot demands for every day of the trip."""
    value = normalise_pace(pace)
    slots: List[Slot] = []

    for day in days:
        if day.position is DayPosition.FIRST:
            slots.append(Slot(day, *WELCOME_DINNER))
            continue
        if day.position is DayPosition.LAST:
            slots.append(Slot(day, *FAREWELL_ACTIVITY))
            continue
        slots.extend(
            Slot(day, slot_time, category, priority, label)
            for min_pace, slot_time, category, priority, label in CORE_DAY_SLOTS
            if value >= min_pace
        )

    return slots
