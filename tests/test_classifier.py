import pytest

from trip_scheduler.classifier import classify, partition
from trip_scheduler.models import Category


@pytest.mark.parametrize(
    "title, category, expected",
    [
        ("Augustiner Keller", "Dining", Category.DINING),
        ("Augustiner Keller", "DINING", Category.DINING),
        ("Rooftop Restaurant Crawl", "Activity", Category.DINING),
        ("Sunset DINNER Cruise", "Chill", Category.DINING),
        ("English Garden Walk", "Activity", Category.ACTIVITY),
        ("Jazz Bar Hop", "Nightlife", Category.ACTIVITY),
        ("Dine at the Market", "", Category.ACTIVITY),
        ("Food Hall", " Dining ", Category.ACTIVITY),
    ],
)
def test_classify(candidate, title, category, expected):
    assert classify(candidate(title, category)) is expected


def test_partition_preserves_relative_order(candidate):
    items = [
        candidate("Museum", "Activity"),
        candidate("Bistro", "Dining"),
        candidate("Harbour Restaurant", "Activity"),
        candidate("Hike", "Activity"),
        candidate("Tapas", "Dining"),
    ]
    original = list(items)

    split = partition(items)

    assert [item.title for item in split.dining] == ["Bistro", "Harbour Restaurant", "Tapas"]
    assert [item.title for item in split.activity] == ["Museum", "Hike"]
    assert items == original


def test_partition_of_nothing():
    split = partition([])

    assert split.dining == ()
    assert split.activity == ()
