"""Extraction prompt built from the subscriber's preferences and the gathered sources."""

from __future__ import annotations

from typing import Sequence

from ..catalog import DEFAULT_CATALOG, Catalog
from ..models import SourceDocument, SubscriberProfile, TimeWindow
from ..utils.text_cleaning import truncate

# ---------------------------------------------------------------------------
# Local prompt settings
# ---------------------------------------------------------------------------
SOURCE_CHAR_BUDGET: int = 4000
MAX_EVENTS: int = 10

SYSTEM_INSTRUCTION: str = (
    "You extract structured events strictly from provided sources."
    " Output JSON array only. Never invent facts."
)

OUTPUT_SCHEMA: str = """{
  "event_name": "string",
  "artists": ["string"],
  "genres": ["string"],
  "date": "ISO-8601 string",
  "venue": "string",
  "event_url": "string"
}"""


def _source_block(documents: Sequence[SourceDocument]) -> str:
    if not documents:
        return "NO_SOURCES_AVAILABLE"
    return "\n\n".join(
        f"SOURCE_{idx}\nurl: {doc.url}\ncontent:\n{truncate(doc.text, SOURCE_CHAR_BUDGET)}"
        for idx, doc in enumerate(documents, start=1)
    )


def _host_venue_hints(catalog: Catalog) -> str:
    return "\n".join(
        f"{domain} => {catalog.venue_display_name(venue_id)}"
        for venue_id, domains in catalog.venue_domains.items()
        for domain in domains
    )


def build_prompt(
    profile: SubscriberProfile,
    window: TimeWindow,
    documents: Sequence[SourceDocument],
    *,
    catalog: Catalog = DEFAULT_CATALOG,
) -> str:
    """Return the user instruction for the extraction model."""
    no_genre_filter = not profile.genres or catalog.is_all_genres_selection(profile.genres)

    preferred_artists = ", ".join(profile.artists) if profile.artists else "none specified"
    preferred_genres = "any genre" if no_genre_filter else ", ".join(profile.genres)
    allowed_venues = (
        ", ".join(catalog.venue_display_name(v) for v in profile.venues)
        if profile.venues
        else f"any venue in {catalog.location}"
    )
    genre_rule = (
        "- genre: no filtering required."
        if no_genre_filter
        else "- genre MUST include at least one of preferred_genres."
    )

    return f"""You are a fact-grounded event extraction engine.

You are given a set of web sources (URL + scraped content). You MUST only extract events that are explicitly present in the sources.
Do NOT use outside knowledge. Do NOT invent events, dates, venues, artists, genres, or URLs.

User preferences
preferred_artists: {preferred_artists}
preferred_genres: {preferred_genres}
time_window: {window.label}
allowed_venues: {allowed_venues}
location: {catalog.location}

Known source hosts
{_host_venue_hints(catalog)}

Output Rules
- Output ONLY a valid JSON array (no markdown, no commentary)
- Return at most {MAX_EVENTS} events
- If no matching events are explicitly present in sources, return []

Output Schema (per event)
{OUTPUT_SCHEMA}

Hard Requirements
- event_url MUST be a valid public URL that appears in the sources content OR, if none is present for that event, use the SOURCE url where the event is mentioned.
- date MUST be within the given time_window.
{genre_rule}

Sources
{_source_block(documents)}"""

__all__ = ["build_prompt", "SYSTEM_INSTRUCTION", "MAX_EVENTS", "SOURCE_CHAR_BUDGET"]
