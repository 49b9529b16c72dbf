from __future__ import annotations

from typing import Callable, List

import pytest
import structlog

from trip_scheduler.models import CandidateItem


@pytest.fixture(autouse=True, scope="session")
def route_logs_through_stdlib():
    """Keep structlog output out of captured stdout."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


def make_candidate(title: str, category: str = "Activity", duration: str = "2h", **extra) -> CandidateItem:
    return CandidateItem(
        title=title,
        category=category,
        duration=duration,
        description=extra.pop("description", f"About {title}"),
        **extra,
    )


@pytest.fixture
def candidate() -> Callable[..., CandidateItem]:
    return make_candidate


@pytest.fixture
def mixed_candidates() -> List[CandidateItem]:
    """Ten dining and fifteen activity candidates, interleaved."""
    items: List[CandidateItem] = []
    dining = iter(range(1, 11))
    activity = iter(range(1, 16))
    for index in range(25):
        if index % 5 in (0, 2):
            items.append(make_candidate(f"Dining {next(dining)}", "Dining"))
        else:
            items.append(make_candidate(f"Activity {next(activity)}"))
    return items
