"""Shared data models used across the itinerary scheduler."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from .date_window import TripDay


class Category(str, Enum):
    """Two-valued scheduling category."""

    DINING = "Dining"
    ACTIVITY = "Activity"


class CandidateItem(BaseModel):
    """An approved experience supplied by the candidate generator."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    title: str = ""
    category: str = ""
    duration: str = ""
    description: str = ""
    neighborhood: Optional[str] = None

    @field_validator("title", "category", "duration", "description", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        """Generated payloads are loose; treat missing text as empty."""
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("neighborhood", mode="before")
    @classmethod
    def coerce_neighborhood(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value or None
        return str(value)


class ScheduledItem(CandidateItem):
    """A candidate bound to a concrete date and time."""

    assigned_datetime: datetime = Field(alias="assignedDateTime")
    time_hint: str = Field(alias="timeHint")

    @classmethod
    def from_candidate(cls, item: CandidateItem, starts_at: datetime, label: str) -> "ScheduledItem":
        return cls(
            title=item.title,
            category=item.category,
            duration=item.duration,
            description=item.description,
            neighborhood=item.neighborhood,
            assigned_datetime=starts_at,
            time_hint=label,
        )


@dataclass(frozen=True)
class Slot:
    """A demand for one item of a category at a given day and time."""

    day: TripDay
    time: time
    category: Category
    priority: int
    label: str

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.day.value, self.time)


class ImportOutcome(BaseModel):
    """Result of handing one scheduled item to the trip item store."""

    title: str
    starts_at: datetime = Field(alias="startsAt")
    ok: bool
    item_id: Optional[str] = Field(default=None, alias="itemId")
    error: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class ImportReport(BaseModel):
    """Aggregated outcomes of an import batch."""

    trip_id: str = Field(alias="tripId")
    outcomes: List[ImportOutcome] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @property
    def succeeded(self) -> List[ImportOutcome]:
        return [outcome for outcome in self.outcomes if outcome.ok]

    @property
    def failed(self) -> List[ImportOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    @computed_field(alias="succeededCount")
    @property
    def succeeded_count(self) -> int:
        return len(self.succeeded)

    @computed_field(alias="failedCount")
    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def all_succeeded(self) -> bool:
        return not self.failed
