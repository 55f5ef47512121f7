"""Decide whether a brief is due, in the configured local timezone."""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from ..catalog import DAYS_OF_WEEK
from ..config import SCHEDULE_TIMEZONE, SCHEDULE_TOLERANCE_MINUTES
from ..models import Schedule
from ..utils.datetime_utils import ensure_utc


def _minutes(time_of_day: str) -> int | None:
    try:
        hour, minute = (int(part) for part in time_of_day.split(":")[:2])
    except ValueError:
        return None
    return hour * 60 + minute


def is_brief_due(
    schedule: Schedule,
    now: datetime,
    *,
    tz_name: str = SCHEDULE_TIMEZONE,
    tolerance_minutes: int = SCHEDULE_TOLERANCE_MINUTES,
) -> bool:
    """``True`` on the scheduled weekday within *tolerance_minutes* after the scheduled time.

    The cron driving this runs once per tolerance window, so a brief is due
    at most once per week.
    """
    local = ensure_utc(now).astimezone(ZoneInfo(tz_name))
    # isoweekday(): Monday=1 .. Sunday=7; DAYS_OF_WEEK starts on Sunday
    if schedule.day_of_week != DAYS_OF_WEEK[local.isoweekday() % 7]:
        return False

    scheduled = _minutes(schedule.time)
    if scheduled is None:
        return False
    current = local.hour * 60 + local.minute
    return scheduled <= current < scheduled + tolerance_minutes

__all__ = ["is_brief_due"]
