"""Client for the trip item store and the schedule import batch."""

from __future__ import annotations

import asyncio
from typing import Any, Optional, Sequence

import httpx
import structlog
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential

from .config import Settings
from .duration import end_time_for
from .models import ImportOutcome, ImportReport, ScheduledItem

LOGGER = structlog.get_logger(__name__)

STAY_KEYWORDS = (
    "hotel",
    "hostel",
    "stay",
    "lodging",
    "accommodation",
    "airbnb",
    "resort",
    "guesthouse",
)
METADATA_SOURCE = "itinerary-scheduler"


def infer_item_type(item: ScheduledItem) -> str:
    """Map a scheduled item onto one of the store's item types."""
    text = f"{item.category} {item.title}".lower()
    if any(keyword in text for keyword in STAY_KEYWORDS):
        return "stay"
    return "activity"


def to_trip_item(item: ScheduledItem, *, status: str = "idea") -> dict[str, Any]:
    """Build the creation payload for a scheduled item."""
    starts_at = item.assigned_datetime
    metadata: dict[str, Any] = {
        "category": item.category,
        "duration": item.duration,
        "timeHint": item.time_hint,
        "source": METADATA_SOURCE,
    }
    if item.neighborhood:
        metadata["neighborhood"] = item.neighborhood

    return {
        "type": infer_item_type(item),
        "title": item.title.strip() or item.time_hint,
        "notes": item.description,
        "startAt": starts_at.isoformat(),
        "endAt": end_time_for(starts_at, item.duration).isoformat(),
        "status": status,
        "metadata": metadata,
    }


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return False


class TripItemStore:
    """Async helper that creates items through the trip store API."""

    def __init__(
        self,
        settings: Settings,
        *,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._settings = settings
        secret = settings.trip_store_token.get_secret_value() if settings.trip_store_token else None
        self._token = token or secret
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "TripItemStore":
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        self._client = httpx.AsyncClient(
            base_url=str(self._settings.trip_store_base_url),
            headers=headers,
            timeout=self._settings.timeout_seconds,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def create(self, trip_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Create one trip item, retrying transient failures."""
        if not self._client:
            raise RuntimeError("TripItemStore must be used as an async context manager")

        url = self._settings.trip_items_url(trip_id)
        async for attempt in AsyncRetrying(
            wait=wait_exponential(multiplier=1, min=1, max=8),
            stop=stop_after_attempt(self._settings.retry_attempts),
            retry=retry_if_exception(_is_transient),
            reraise=True,
        ):
            with attempt:
                response = await self._client.post(url, json=payload)
                response.raise_for_status()
                return response.json()
        raise RuntimeError("Trip item creation failed")  # safety net


async def import_schedule(
    store: TripItemStore,
    trip_id: str,
    items: Sequence[ScheduledItem],
    *,
    status: str = "idea",
    max_concurrency: int = 5,
) -> ImportReport:
    """
    Submit every scheduled item concurrently.

    One failing item is logged and recorded; it never stops the others.
    """
    semaphore = asyncio.Semaphore(max(1, max_concurrency))

    async def _import_one(item: ScheduledItem) -> ImportOutcome:
        async with semaphore:
            try:
                created = await store.create(trip_id, to_trip_item(item, status=status))
            except Exception as exc:  # noqa: BLE001
                LOGGER.exception(
                    "trip_store.create.failed",
                    trip_id=trip_id,
                    title=item.title,
                    error=str(exc),
                )
                return ImportOutcome(
                    title=item.title,
                    starts_at=item.assigned_datetime,
                    ok=False,
                    error=str(exc) or exc.__class__.__name__,
                )
        item_id = created.get("id") if isinstance(created, dict) else None
        LOGGER.info("trip_store.create.success", trip_id=trip_id, title=item.title, item_id=item_id)
        return ImportOutcome(
            title=item.title,
            starts_at=item.assigned_datetime,
            ok=True,
            item_id=str(item_id) if item_id is not None else None,
        )

    LOGGER.info("trip_store.import.start", trip_id=trip_id, items=len(items))
    outcomes = await asyncio.gather(*(_import_one(item) for item in items))
    report = ImportReport(trip_id=trip_id, outcomes=list(outcomes))
    LOGGER.info(
        "trip_store.import.complete",
        trip_id=trip_id,
        succeeded=report.succeeded_count,
        failed=report.failed_count,
    )
    return report
