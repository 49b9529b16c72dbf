"""Logging setup and small parsing helpers."""

from __future__ import annotations

import logging
import re
import sys
from datetime import date, datetime
from typing import Optional, Union

import structlog
from dateutil import parser as date_parser

DateLike = Union[date, datetime, str, None]
PARSE_DEFAULT = datetime(1970, 1, 1)


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure structlog + stdlib logging."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=sys.stdout,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


LOGGER = structlog.get_logger(__name__)


def parse_calendar_date(value: DateLike) -> Optional[date]:
    """Best-effort conversion of a date-like value to a calendar date.

    Time-of-day components are dropped and fields missing from partial input
    (e.g. ``"May 3"``) come from ``PARSE_DEFAULT``, never from the run date.
    Returns ``None`` for anything that cannot be understood.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    cleaned = value.strip()
    if not cleaned:
        return None

    try:
        return date_parser.parse(cleaned, default=PARSE_DEFAULT).date()
    except (ValueError, OverflowError) as exc:
        LOGGER.debug("date.parse_failed", value=cleaned, error=str(exc))
        return None


def normalise_whitespace(text: Optional[str]) -> str:
    """Collapse repeated whitespace into single spaces."""
    return re.sub(r"\s+", " ", text or "").strip()
