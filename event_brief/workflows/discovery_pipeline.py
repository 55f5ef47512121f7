"""End-to-end event discovery for one subscriber: sources → model → validated events."""

from __future__ import annotations

from datetime import datetime

from ..catalog import DEFAULT_CATALOG, Catalog
from ..errors import ExtractionConfigError, ExtractionError, InvalidProfileError
from ..logging_config import get_trace_logger
from ..models import DiscoveryResult, SubscriberProfile
from ..services.extraction import ensure_configured, extract_events_text
from ..services.grounding import build_allow_list
from ..services.prompts import build_prompt
from ..services.sources import gather_sources
from ..services.time_window import resolve_time_window
from ..services.validation import validate_events
from ..utils.datetime_utils import ensure_utc, get_current_timestamp


def discover_events(
    profile: SubscriberProfile,
    *,
    trace_id: str | None = None,
    now: datetime | None = None,
    catalog: Catalog = DEFAULT_CATALOG,
) -> DiscoveryResult:
    """Run the discovery pipeline once for *profile*.

    Degrades to an empty result on zero sources, unusable model output and
    rate-limit/quota/service errors (reported through ``failure``). Raises
    :class:`InvalidProfileError` for a malformed profile and
    :class:`ExtractionConfigError` when no model service is configured.
    """
    log = get_trace_logger(__name__, trace_id)

    if not isinstance(profile, SubscriberProfile):
        raise InvalidProfileError("Brief is required", trace_id=trace_id)

    ensure_configured(trace_id)

    now = ensure_utc(now) if now is not None else get_current_timestamp()
    brief_params = profile.brief_params()
    log.info(
        "Brief params - Artists: %s, Genres: %s, Venues: %s, Window: %s",
        ", ".join(profile.artists) or "none",
        ", ".join(profile.genres) or "none",
        ", ".join(profile.venues) or "all",
        brief_params["eventWindow"],
    )

    # 1. Resolve the time window
    window = resolve_time_window(profile.schedule.event_window, now)

    # 2. Gather grounded sources
    log.info("Gathering grounded sources for event extraction…")
    documents = gather_sources(profile, catalog=catalog, trace_id=trace_id, now=now)
    if not documents:
        log.warning("No grounded sources found; returning empty events list")
        return DiscoveryResult(
            events=(),
            trace_id=trace_id,
            source_count=0,
            discovered_at=now,
            brief_params=brief_params,
        )

    # 3. Allow-list + prompt
    allow_list = build_allow_list(documents)
    prompt = build_prompt(profile, window, documents, catalog=catalog)
    log.info(
        "Built grounded extraction prompt (%d sources, %d allowed hosts)",
        len(documents),
        len(allow_list.hosts),
    )

    # 4. Extraction
    try:
        output = extract_events_text(prompt, trace_id=trace_id)
    except ExtractionConfigError:
        raise
    except ExtractionError as exc:
        log.error("Extraction failed (%s); returning empty events list", exc.kind)
        return DiscoveryResult(
            events=(),
            trace_id=trace_id,
            source_count=len(documents),
            discovered_at=now,
            failure=exc.kind,
            retryable=exc.retryable,
            brief_params=brief_params,
        )

    # 5. Validation
    events = validate_events(output.text, profile, allow_list, window, catalog=catalog)
    log.info("Discovered %d validated events", len(events))

    return DiscoveryResult(
        events=tuple(events),
        trace_id=trace_id,
        source_count=len(documents),
        discovered_at=now,
        finish_reason=output.finish_reason,
        brief_params=brief_params,
    )

__all__ = ["discover_events"]
