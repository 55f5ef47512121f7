"""Brief runs: discovery, digest and delivery for one brief or a scheduled batch."""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List

from ..errors import BriefNotFoundError, DeliveryError, EventBriefError
from ..logging_config import get_trace_logger
from ..models import SubscriberProfile
from ..services.delivery import deliver_digest
from ..services.digest import compose_digest
from ..services.schedule import is_brief_due
from ..services.subscribers import get_profile, load_active_profiles
from ..utils.datetime_utils import ensure_utc, format_trace_timestamp, get_current_timestamp
from .discovery_pipeline import discover_events

logger = logging.getLogger(__name__)

SENT = "sent"
SKIPPED = "skipped"
ERROR = "error"


@dataclass(frozen=True, slots=True)
class BriefRunResult:
    """Outcome of processing one brief."""

    brief_id: str
    brief_name: str
    status: str
    trace_id: str
    reason: str | None = None
    events_count: int | None = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        return {key: value for key, value in data.items() if value is not None}


def generate_trace_id(prefix: str = "trace", now: datetime | None = None) -> str:
    """Return ``<prefix>_<epoch ms>_<8 hex chars>``."""
    moment = now or get_current_timestamp()
    return f"{prefix}_{format_trace_timestamp(moment)}_{uuid.uuid4().hex[:8]}"


def run_brief(profile: SubscriberProfile, *, trace_id: str, now: datetime | None = None) -> BriefRunResult:
    """Discover events for *profile* and deliver the digest.

    Raises :class:`EventBriefError` subclasses on unrecoverable failures;
    a rate-limited or quota-exhausted extraction still delivers the
    (empty) digest and is reported in ``reason``.
    """
    log = get_trace_logger(__name__, trace_id)
    log.info("Processing brief: %s", profile.name)

    log.info("Step 1: AI event discovery…")
    discovery = discover_events(profile, trace_id=trace_id, now=now)
    events = list(discovery.events)
    log.info("AI discovered %d matching events", len(events))

    log.info("Step 2: Sending digest via %s…", profile.delivery_method)
    digest = compose_digest(profile.delivery_method, profile.name, events)
    delivery = deliver_digest(profile.delivery_contact, digest, trace_id=trace_id)
    if not delivery.success:
        raise DeliveryError(f"Failed to send digest: {delivery.error}", trace_id=trace_id)

    log.info("Successfully sent digest")
    return BriefRunResult(
        brief_id=profile.id,
        brief_name=profile.name,
        status=SENT,
        trace_id=trace_id,
        reason=discovery.failure,
        events_count=len(events),
    )


def trigger_brief(brief_id: str, *, now: datetime | None = None) -> BriefRunResult:
    """Run one stored brief immediately, regardless of its schedule."""
    trace_id = generate_trace_id("manual", now)
    log = get_trace_logger(__name__, trace_id)
    log.info("Triggering brief: %s", brief_id)

    profile = get_profile(brief_id)
    if profile is None:
        raise BriefNotFoundError(f"Brief not found: {brief_id}", trace_id=trace_id)
    return run_brief(profile, trace_id=trace_id, now=now)


def process_scheduled_briefs(
    profiles: Iterable[SubscriberProfile] | None = None,
    *,
    now: datetime | None = None,
) -> Dict[str, Any]:
    """Run every due brief; one brief's failure never stops the others."""
    now = ensure_utc(now) if now is not None else get_current_timestamp()
    trace_id = generate_trace_id("trace", now)
    log = get_trace_logger(__name__, trace_id)
    processed_at = get_current_timestamp()

    log.info("Starting scheduled brief processing…")
    briefs = list(profiles) if profiles is not None else load_active_profiles()

    results: List[BriefRunResult] = []
    for profile in briefs:
        brief_trace_id = f"{trace_id}_{profile.id[:8]}"
        brief_log = get_trace_logger(__name__, brief_trace_id)

        if not is_brief_due(profile.schedule, now):
            brief_log.info("Skipping: not scheduled for now")
            results.append(
                BriefRunResult(
                    brief_id=profile.id,
                    brief_name=profile.name,
                    status=SKIPPED,
                    trace_id=brief_trace_id,
                    reason="Not scheduled for current time",
                )
            )
            continue

        try:
            results.append(run_brief(profile, trace_id=brief_trace_id, now=now))
        except EventBriefError as exc:
            brief_log.error("Error processing brief: %s", exc)
            results.append(_error_result(profile, brief_trace_id, str(exc)))
        except Exception as exc:
            brief_log.exception("Unexpected error processing brief")
            results.append(_error_result(profile, brief_trace_id, str(exc) or type(exc).__name__))

    summary = {
        "traceId": trace_id,
        "processedAt": processed_at.isoformat(),
        "completedAt": get_current_timestamp().isoformat(),
        "totalBriefs": len(briefs),
        "sent": sum(1 for r in results if r.status == SENT),
        "skipped": sum(1 for r in results if r.status == SKIPPED),
        "errors": sum(1 for r in results if r.status == ERROR),
        "results": [r.to_dict() for r in results],
    }
    log.info(
        "Processing complete: %d sent, %d skipped, %d errors",
        summary["sent"],
        summary["skipped"],
        summary["errors"],
    )
    return summary


def _error_result(profile: SubscriberProfile, trace_id: str, reason: str) -> BriefRunResult:
    return BriefRunResult(
        brief_id=profile.id,
        brief_name=profile.name,
        status=ERROR,
        trace_id=trace_id,
        reason=reason,
    )

__all__ = [
    "BriefRunResult",
    "generate_trace_id",
    "run_brief",
    "trigger_brief",
    "process_scheduled_briefs",
]
