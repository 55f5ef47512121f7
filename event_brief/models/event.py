"""Value objects produced and consumed within a single discovery run."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, FrozenSet, Tuple


@dataclass(frozen=True, slots=True)
class SourceDocument:
    """A fetched web page: its URL, optional title and plain text."""

    url: str
    text: str
    title: str | None = None


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """Inclusive UTC date range events must fall into."""

    start: datetime
    end: datetime
    label: str


@dataclass(frozen=True, slots=True)
class AllowList:
    """URLs and hosts that provably appear in the gathered sources."""

    urls: FrozenSet[str] = frozenset()
    hosts: FrozenSet[str] = frozenset()

    def permits(self, url: str, host: str | None) -> bool:
        return url in self.urls or (bool(host) and host in self.hosts)


@dataclass(frozen=True, slots=True)
class ValidatedEvent:
    """An extracted event that passed every validation step."""

    event_name: str
    date: str
    venue: str
    event_url: str
    artists: Tuple[str, ...] = ()
    genres: Tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_name": self.event_name,
            "artists": list(self.artists),
            "genres": list(self.genres),
            "date": self.date,
            "venue": self.venue,
            "event_url": self.event_url,
        }


@dataclass(frozen=True, slots=True)
class ModelOutput:
    """Raw text returned by the extraction model plus its finish reason."""

    text: str
    finish_reason: str | None = None


@dataclass(frozen=True, slots=True)
class DiscoveryResult:
    """Outcome of one discovery run for one subscriber."""

    events: Tuple[ValidatedEvent, ...]
    trace_id: str | None
    source_count: int
    discovered_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    finish_reason: str | None = None
    # None, or the ``kind`` of the extraction error that emptied this run
    failure: str | None = None
    retryable: bool = False
    brief_params: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        diagnostics: dict[str, Any] = {"sourceCount": self.source_count}
        if self.finish_reason is not None:
            diagnostics["aiFinishReason"] = self.finish_reason
        if self.failure is not None:
            diagnostics["failure"] = self.failure
            diagnostics["retryable"] = self.retryable
        return {
            "events": [e.to_dict() for e in self.events],
            "traceId": self.trace_id,
            "discoveredAt": self.discovered_at.isoformat(),
            "briefParams": self.brief_params,
            "diagnostics": diagnostics,
        }


__all__ = [
    "SourceDocument",
    "TimeWindow",
    "AllowList",
    "ValidatedEvent",
    "ModelOutput",
    "DiscoveryResult",
]
