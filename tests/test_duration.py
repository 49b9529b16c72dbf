from datetime import datetime

import pytest

from trip_scheduler.duration import end_time_for, parse_duration_minutes


@pytest.mark.parametrize(
    "text, minutes",
    [
        ("Half Day", 240),
        ("half-day", 240),
        ("2h", 120),
        ("", 60),
        (None, 60),
        ("Full day tour", 480),
        ("All DAY", 480),
        ("1.5 hours", 90),
        ("about .5h", 30),
        ("3-4 hours", 180),
        ("flexible", 60),
    ],
)
def test_parse_duration_minutes(text, minutes):
    assert parse_duration_minutes(text) == minutes


def test_end_time_adds_parsed_duration():
    assert end_time_for(datetime(2025, 5, 2, 21, 30), "3h") == datetime(2025, 5, 3, 0, 30)
