"""Utility functions for working with dates and times."""

from datetime import datetime, timezone

__all__ = [
    "get_current_timestamp",
    "ensure_utc",
    "parse_event_date",
    "format_trace_timestamp",
]

def get_current_timestamp() -> datetime:
    """Return the current UTC datetime with micro-second precision."""
    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_event_date(value: str) -> datetime | None:
    """Parse an ISO-8601 date or datetime string; ``None`` when unparsable.

    Date-only strings resolve to midnight UTC, naive datetimes are read as UTC.
    """
    if not value:
        return None
    try:
        return ensure_utc(datetime.fromisoformat(value))
    except (ValueError, OverflowError):
        # OverflowError: offsets that shift past datetime.min / datetime.max
        return None


def format_trace_timestamp(value: datetime) -> str:
    """Milliseconds since the epoch, as used in trace ids."""
    return str(int(value.timestamp() * 1000))
