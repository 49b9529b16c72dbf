"""FastAPI application exposing schedule preview and import endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

import httpx
import structlog
from fastapi import Depends, FastAPI, Header, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from . import __version__
from .config import ServiceInfo, Settings
from .date_window import expand_date_range
from .models import CandidateItem, ImportReport, ScheduledItem
from .pace import normalise_pace, pace_label, suggest_item_count
from .scheduler import build_schedule
from .summariser import format_import_report, format_schedule
from .trip_store import TripItemStore, import_schedule
from .utils import configure_logging

LOGGER = structlog.get_logger(__name__)
configure_logging()

app = FastAPI(title="Trip Scheduler", version=__version__)


class ScheduleRequest(BaseModel):
    """Request payload for building a draft schedule."""

    model_config = ConfigDict(populate_by_name=True)

    start_date: Optional[str] = Field(default=None, alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")
    pace: Optional[int] = None
    candidate_items: List[CandidateItem] = Field(default_factory=list, alias="candidateItems")


class ScheduleResponse(BaseModel):
    """Response schema for the /schedule endpoint."""

    schedule: List[ScheduledItem]
    summary: str
    info: ServiceInfo


class ImportRequest(BaseModel):
    """A confirmed draft schedule to store against a trip."""

    schedule: List[ScheduledItem]


def get_settings() -> Settings:
    return Settings()


def get_store_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport override hook for the trip store client."""
    return None


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}


@app.post("/schedule", response_model=ScheduleResponse)
async def create_schedule(
    request: ScheduleRequest,
    settings: Settings = Depends(get_settings),
) -> ScheduleResponse:
    """Build a draft schedule from the approved candidates."""

    LOGGER.info(
        "api.schedule.request",
        start=request.start_date,
        end=request.end_date,
        candidates=len(request.candidate_items),
    )
    pace = normalise_pace(request.pace if request.pace is not None else settings.default_pace)
    try:
        schedule = build_schedule(request.start_date, request.end_date, pace, request.candidate_items)
    except Exception as exc:
        LOGGER.exception("api.schedule.failed", error=str(exc))
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    info = ServiceInfo(
        generated_at=datetime.now(timezone.utc).isoformat(),
        days=len(expand_date_range(request.start_date, request.end_date)),
        pace=pace,
        pace_label=pace_label(pace),
        suggested_item_count=suggest_item_count(request.start_date, request.end_date, pace),
    )
    return ScheduleResponse(schedule=schedule, summary=format_schedule(schedule), info=info)


@app.post("/trips/{trip_id}/import", response_model=ImportReport)
async def import_trip_items(
    trip_id: str,
    request: ImportRequest,
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_store_transport),
) -> ImportReport:
    """Store a confirmed schedule as trip items, one request per item."""

    token = _bearer_token(authorization)
    if token is None and settings.trip_store_token is None:
        raise HTTPException(status_code=401, detail="Authorization token required")

    LOGGER.info("api.import.request", trip_id=trip_id, items=len(request.schedule))
    async with TripItemStore(settings, token=token, transport=transport) as store:
        report = await import_schedule(
            store,
            trip_id,
            request.schedule,
            status=settings.import_status,
            max_concurrency=settings.max_concurrent_imports,
        )

    if not report.all_succeeded:
        LOGGER.warning("api.import.partial", trip_id=trip_id, summary=format_import_report(report))
    return report
