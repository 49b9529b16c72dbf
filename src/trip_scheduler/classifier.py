"""Dining/activity classification of approved candidates."""

from __future__ import annotations

from typing import Iterable, NamedTuple, Tuple

from .models import CandidateItem, Category

DINING_TITLE_KEYWORDS = ("restaurant", "dinner")


class Partition(NamedTuple):
    """Order-preserving split of the approved candidates."""

    dining: Tuple[CandidateItem, ...]
    activity: Tuple[CandidateItem, ...]


def classify(item: CandidateItem) -> Category:
    """Return the scheduling category for a single candidate."""
    if item.category.lower() == "dining":
        return Category.DINING
    title = item.title.lower()
    if any(keyword in title for keyword in DINING_TITLE_KEYWORDS):
        return Category.DINING
    return Category.ACTIVITY


def partition(items: Iterable[CandidateItem]) -> Partition:
    """Split candidates into dining and activity sequences, keeping input order."""
    dining: list[CandidateItem] = []
    activity: list[CandidateItem] = []
    for item in items:
        if classify(item) is Category.DINING:
            dining.append(item)
        else:
            activity.append(item)
    return Partition(tuple(dining), tuple(activity))
