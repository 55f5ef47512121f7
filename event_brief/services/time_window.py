"""Resolve a symbolic event window ("This weekend", ...) to a UTC date range."""

from __future__ import annotations

import calendar
from datetime import datetime, timedelta, timezone

from ..models import TimeWindow
from ..utils.datetime_utils import ensure_utc

DEFAULT_EVENT_WINDOW: str = "This month"


def _end_of_day(value: datetime) -> datetime:
    return value.replace(hour=23, minute=59, second=59, microsecond=999000)


def resolve_time_window(event_window: str | None, now: datetime) -> TimeWindow:
    """Return the window starting at *now* described by *event_window*.

    Unknown values fall back to the rest of the current month.
    """
    start = ensure_utc(now)
    normalized = event_window or DEFAULT_EVENT_WINDOW

    if normalized == "This weekend":
        # weekday(): Monday=0 .. Sunday=6
        days_until_sunday = (6 - start.weekday()) % 7
        end = _end_of_day(start + timedelta(days=days_until_sunday))
    elif normalized == "Next 7 days":
        end = start + timedelta(days=7)
    elif normalized == "Next 2 weeks":
        end = start + timedelta(days=14)
    else:
        last_day = calendar.monthrange(start.year, start.month)[1]
        end = datetime(start.year, start.month, last_day, 23, 59, 59, 999000, tzinfo=timezone.utc)

    label = f"{start.date().isoformat()} to {end.date().isoformat()}"
    return TimeWindow(start=start, end=end, label=label)

__all__ = ["resolve_time_window", "DEFAULT_EVENT_WINDOW"]
