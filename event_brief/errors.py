"""Exception types raised across the brief pipeline."""

from __future__ import annotations


class EventBriefError(Exception):
    """Base error; carries the trace id of the run it belongs to, when known."""

    def __init__(self, message: str, *, trace_id: str | None = None) -> None:
        super().__init__(message)
        self.trace_id = trace_id


class InvalidProfileError(EventBriefError, ValueError):
    """A subscriber document does not have the expected shape."""


class BriefNotFoundError(EventBriefError, LookupError):
    pass


class ExtractionError(EventBriefError):
    """Base class for failures of the generative extraction call."""

    kind: str = "service_error"
    retryable: bool = False


class ExtractionConfigError(ExtractionError):
    """The model service is not configured; extraction must not be attempted."""

    kind = "not_configured"


class RateLimitedError(ExtractionError):
    kind = "rate_limited"
    retryable = True


class QuotaExhaustedError(ExtractionError):
    kind = "quota_exhausted"


class ExtractionServiceError(ExtractionError):
    kind = "service_error"


class DeliveryError(EventBriefError):
    """A digest could not be handed to its delivery channel."""


__all__ = [
    "EventBriefError",
    "InvalidProfileError",
    "BriefNotFoundError",
    "ExtractionError",
    "ExtractionConfigError",
    "RateLimitedError",
    "QuotaExhaustedError",
    "ExtractionServiceError",
    "DeliveryError",
]
