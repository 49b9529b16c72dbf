import asyncio
import json
from datetime import datetime

import httpx
import pytest

from trip_scheduler.config import Settings
from trip_scheduler.models import ScheduledItem
from trip_scheduler.trip_store import TripItemStore, import_schedule, infer_item_type, to_trip_item


def _scheduled(title, category="Activity", duration="2h", hour=10, **extra):
    return ScheduledItem(
        title=title,
        category=category,
        duration=duration,
        description=f"About {title}",
        assigned_datetime=datetime(2025, 5, 2, hour, 0),
        time_hint="Morning Exploration",
        **extra,
    )


def _settings(**overrides):
    values = {
        "trip_store_base_url": "https://trips.example.com",
        "trip_store_token": "secret-token",
        "retry_attempts": 1,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.mark.parametrize(
    "title, category, expected",
    [
        ("Grand Hotel Check-in", "Activity", "stay"),
        ("Riverside cabins", "Accommodation", "stay"),
        ("Schneider Bräuhaus", "Dining", "activity"),
        ("Olympic Park", "Activity", "activity"),
    ],
)
def test_infer_item_type(title, category, expected):
    assert infer_item_type(_scheduled(title, category)) == expected


def test_to_trip_item_payload():
    item = _scheduled("Old Town Walk", duration="Half-day", neighborhood="Altstadt")

    payload = to_trip_item(item, status="idea")

    assert payload == {
        "type": "activity",
        "title": "Old Town Walk",
        "notes": "About Old Town Walk",
        "startAt": "2025-05-02T10:00:00",
        "endAt": "2025-05-02T14:00:00",
        "status": "idea",
        "metadata": {
            "category": "Activity",
            "duration": "Half-day",
            "timeHint": "Morning Exploration",
            "source": "itinerary-scheduler",
            "neighborhood": "Altstadt",
        },
    }


def test_import_reports_each_outcome_independently():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        seen.append((request.url.path, request.headers.get("authorization"), body["title"]))
        if body["title"] == "Broken":
            return httpx.Response(400, json={"error": "Title is required"})
        return httpx.Response(201, json={"id": f"a-{body['title'].lower()}", **body})

    items = [_scheduled("Museum"), _scheduled("Broken", hour=13), _scheduled("Palace", hour=15)]

    async def scenario():
        async with TripItemStore(_settings(), transport=httpx.MockTransport(handler)) as store:
            return await import_schedule(store, "trip-1", items, max_concurrency=2)

    report = asyncio.run(scenario())

    assert report.trip_id == "trip-1"
    assert [(o.title, o.ok, o.item_id) for o in report.outcomes] == [
        ("Museum", True, "a-museum"),
        ("Broken", False, None),
        ("Palace", True, "a-palace"),
    ]
    assert "400" in report.failed[0].error
    assert report.succeeded_count == 2
    assert report.failed_count == 1
    assert not report.all_succeeded
    assert sorted(seen) == [
        ("/api/trips/trip-1/items", "Bearer secret-token", "Broken"),
        ("/api/trips/trip-1/items", "Bearer secret-token", "Museum"),
        ("/api/trips/trip-1/items", "Bearer secret-token", "Palace"),
    ]


def test_transient_errors_are_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            return httpx.Response(503)
        return httpx.Response(201, json={"id": "a1"})

    async def scenario():
        settings = _settings(retry_attempts=2)
        async with TripItemStore(settings, transport=httpx.MockTransport(handler)) as store:
            return await store.create("trip-1", {"title": "Museum"})

    assert asyncio.run(scenario()) == {"id": "a1"}
    assert len(calls) == 2


def test_client_errors_are_not_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(403, json={"error": "Token does not match trip"})

    async def scenario():
        settings = _settings(retry_attempts=3)
        async with TripItemStore(settings, transport=httpx.MockTransport(handler)) as store:
            await store.create("trip-1", {"title": "Museum"})

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(scenario())
    assert len(calls) == 1


def test_explicit_token_overrides_settings():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(201, json={"auth": request.headers.get("authorization")})

    async def scenario():
        store = TripItemStore(_settings(), token="per-trip", transport=httpx.MockTransport(handler))
        async with store:
            return await store.create("trip-1", {})

    assert asyncio.run(scenario()) == {"auth": "Bearer per-trip"}


def test_create_requires_context_manager():
    store = TripItemStore(_settings())

    with pytest.raises(RuntimeError):
        asyncio.run(store.create("trip-1", {}))


def test_default_status_is_accepted_by_the_store():
    accepted = ("idea", "pending", "booked", "dropped")
    statuses = []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        statuses.append(body["status"])
        if body["status"] not in accepted:
            return httpx.Response(400, json={"error": "Invalid status"})
        return httpx.Response(201, json={"id": "a1", **body})

    settings = Settings(trip_store_base_url="https://trips.example.com", retry_attempts=1)

    async def scenario():
        async with TripItemStore(settings, transport=httpx.MockTransport(handler)) as store:
            return await import_schedule(
                store, "trip-1", [_scheduled("Museum")], status=settings.import_status
            )

    report = asyncio.run(scenario())

    assert settings.import_status == "idea"
    assert statuses == ["idea"]
    assert report.failed_count == 0
    assert to_trip_item(_scheduled("Museum"))["status"] == "idea"


@pytest.mark.parametrize("status", ["planned", "done"])
def test_statuses_unknown_to_the_store_are_rejected(status):
    with pytest.raises(ValueError):
        Settings(import_status=status)
