from datetime import datetime

from trip_scheduler.models import ImportOutcome, ImportReport, ScheduledItem
from trip_scheduler.summariser import format_import_report, format_schedule


def test_format_schedule_groups_by_day():
    items = [
        ScheduledItem(
            title="Bistro",
            duration="2h",
            neighborhood="Glockenbach",
            assigned_datetime=datetime(2025, 5, 1, 19, 0),
            time_hint="Welcome Dinner",
        ),
        ScheduledItem(title="", assigned_datetime=datetime(2025, 5, 2, 10, 0), time_hint="Morning Exploration"),
    ]

    assert format_schedule(items) == (
        "Thursday 01 May 2025\n"
        " • 19:00 Welcome Dinner: Bistro (2h) @ Glockenbach\n"
        "\n"
        "Friday 02 May 2025\n"
        " • 10:00 Morning Exploration: Untitled experience"
    )


def test_format_empty_schedule():
    assert format_schedule([]) == "No experiences scheduled."


def test_format_import_report_lists_failures():
    report = ImportReport(
        trip_id="trip-1",
        outcomes=[
            ImportOutcome(title="Museum", starts_at=datetime(2025, 5, 2, 10, 0), ok=True, item_id="a1"),
            ImportOutcome(title="Tantris", starts_at=datetime(2025, 5, 2, 19, 30), ok=False, error="boom"),
        ],
    )

    assert format_import_report(report) == (
        "Import summary for trip trip-1: succeeded 1, failed 1.\n"
        "Failures:\n"
        "- Tantris (02 May 19:30): boom"
    )
