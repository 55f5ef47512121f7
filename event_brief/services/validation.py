"""Validation of model-extracted events.

This is the trust boundary of the pipeline: the prompt only asks the model to
respect the window, the sources and the genres; every one of those rules is
enforced here. Nothing in this module raises on malformed model output, a bad
candidate is simply dropped.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

from ..catalog import DEFAULT_CATALOG, Catalog
from ..models import AllowList, SubscriberProfile, TimeWindow, ValidatedEvent
from ..utils.datetime_utils import parse_event_date
from ..utils.llm_parsing import parse_json_array
from ..utils.urls import url_host

MAX_EVENTS: int = 10

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _text_list(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(item.strip() for item in value if isinstance(item, str) and item.strip())


def _preferred_genres(profile: SubscriberProfile, catalog: Catalog) -> frozenset[str]:
    """Lower-cased genres to filter on; empty when no genre filter applies."""
    if catalog.is_all_genres_selection(profile.genres):
        return frozenset()
    return frozenset(g.strip().lower() for g in profile.genres if g.strip())


def _validate_candidate(
    item: Dict[str, Any],
    *,
    allow_list: AllowList,
    window: TimeWindow,
    genres: frozenset[str],
) -> ValidatedEvent | None:
    event_name = _text(item.get("event_name"))
    venue = _text(item.get("venue"))
    date = _text(item.get("date"))
    event_url = _text(item.get("event_url"))
    artists = _text_list(item.get("artists"))
    event_genres = _text_list(item.get("genres"))

    if not (event_name and date and venue and event_url):
        return None

    starts_at = parse_event_date(date)
    if starts_at is None or not window.start <= starts_at <= window.end:
        return None

    host = url_host(event_url)
    if host is None:
        return None
    if not allow_list.permits(event_url, host):
        logger.debug("Rejected ungrounded event URL: %s", event_url)
        return None

    if genres and not any(g.lower() in genres for g in event_genres):
        return None

    return ValidatedEvent(
        event_name=event_name,
        date=date,
        venue=venue,
        event_url=event_url,
        artists=artists,
        genres=event_genres,
    )


def validate_events(
    raw_text: str | None,
    profile: SubscriberProfile,
    allow_list: AllowList,
    window: TimeWindow,
    *,
    catalog: Catalog = DEFAULT_CATALOG,
) -> List[ValidatedEvent]:
    """Turn raw model output into at most ``MAX_EVENTS`` grounded, in-window events."""
    candidates = parse_json_array(raw_text)
    genres = _preferred_genres(profile, catalog)

    events: List[ValidatedEvent] = []
    seen_urls: set[str] = set()
    for item in candidates:
        if not isinstance(item, dict):
            continue
        event = _validate_candidate(item, allow_list=allow_list, window=window, genres=genres)
        if event is None or event.event_url in seen_urls:
            continue
        seen_urls.add(event.event_url)
        events.append(event)

    logger.info("Validated %d of %d candidate events", min(len(events), MAX_EVENTS), len(candidates))
    return events[:MAX_EVENTS]

__all__ = ["validate_events", "MAX_EVENTS"]
