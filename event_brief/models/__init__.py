"""Domain models used across the project."""

from .event import (  # noqa: F401
    AllowList,
    DiscoveryResult,
    ModelOutput,
    SourceDocument,
    TimeWindow,
    ValidatedEvent,
)
from .profile import Schedule, SubscriberProfile  # noqa: F401

__all__ = [
    "AllowList",
    "DiscoveryResult",
    "ModelOutput",
    "SourceDocument",
    "TimeWindow",
    "ValidatedEvent",
    "Schedule",
    "SubscriberProfile",
]
