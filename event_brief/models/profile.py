"""Subscriber profile ("brief") as read from the subscriber store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Tuple

from ..errors import InvalidProfileError


def _string_list(doc: Mapping[str, Any], key: str) -> Tuple[str, ...]:
    value = doc.get(key)
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise InvalidProfileError(f"'{key}' must be a list of strings")
    return tuple(value)


@dataclass(frozen=True, slots=True)
class Schedule:
    """When a brief is sent and which time window its events cover."""

    day_of_week: str = ""
    time: str = ""
    event_window: str = "This month"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Schedule":
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise InvalidProfileError("'schedule' must be an object")
        return cls(
            day_of_week=str(data.get("dayOfWeek") or data.get("day_of_week") or ""),
            time=str(data.get("time") or ""),
            event_window=str(data.get("eventWindow") or data.get("event_window") or "This month"),
        )


@dataclass(frozen=True, slots=True)
class SubscriberProfile:
    """Preferences of one subscriber. Read-only to the pipeline."""

    id: str = ""
    name: str = ""
    artists: Tuple[str, ...] = ()
    genres: Tuple[str, ...] = ()
    venues: Tuple[str, ...] = ()
    schedule: Schedule = field(default_factory=Schedule)
    delivery_method: str = "whatsapp"
    delivery_contact: str = ""
    is_active: bool = True

    @classmethod
    def from_dict(cls, doc: Mapping[str, Any]) -> "SubscriberProfile":
        """Build a profile from a stored document or a camelCase payload."""
        if not isinstance(doc, Mapping):
            raise InvalidProfileError("profile must be an object")
        brief_id = doc.get("id", doc.get("_id", ""))
        return cls(
            id=str(brief_id) if brief_id is not None else "",
            name=str(doc.get("name") or ""),
            artists=_string_list(doc, "artists"),
            genres=_string_list(doc, "genres"),
            venues=_string_list(doc, "venues"),
            schedule=Schedule.from_dict(doc.get("schedule")),
            delivery_method=str(doc.get("delivery_method") or doc.get("deliveryMethod") or "whatsapp"),
            delivery_contact=str(doc.get("delivery_contact") or doc.get("deliveryContact") or ""),
            is_active=bool(doc.get("is_active", doc.get("isActive", True))),
        )

    def brief_params(self) -> dict[str, Any]:
        """Preference echo included in discovery results."""
        return {
            "artists": list(self.artists),
            "genres": list(self.genres),
            "venues": list(self.venues),
            "eventWindow": self.schedule.event_window or "default",
        }


__all__ = ["Schedule", "SubscriberProfile"]
