"""Fixed vocabularies: genres, venues, venue domains and event windows.

The catalog is an immutable value so the pipeline can take it as a parameter
and tests can pass their own fixtures. The "all genres selected" check lives
here and nowhere else.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

GENRES: Tuple[str, ...] = (
    "Indie Rock",
    "Jazz",
    "Electronic",
    "Hip Hop",
    "Classical",
    "World Music",
    "Pop",
    "R&B",
    "Alternative",
    "Folk",
    "Punk",
    "Metal",
)

EVENT_WINDOWS: Tuple[str, ...] = (
    "This weekend",
    "Next 7 days",
    "Next 2 weeks",
    "This month",
)

DAYS_OF_WEEK: Tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

# venue id -> name used when talking to the model
VENUE_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "barby": "barby",
        "teder": "teder.fm",
        "levontin7": "levontin 7",
        "kuli-alma": "kuli alma",
        "ozen-bar": "ozentelaviv",
        "suzanne-dellal": "suzanne dellal",
        "secret-telaviv": "secret tel aviv",
        "go-out": "go out",
        "eventim": "eventim",
        "ticketmaster": "ticketmaster",
        "artport": "artport",
        "tlv-municipality": "tel aviv municipality",
    }
)

# venue id -> domains whose pages may be used as sources; the first one is searched
VENUE_DOMAINS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "barby": ("barby.co.il",),
        "teder": ("teder.fm",),
        "levontin7": ("levontin7.com",),
        "kuli-alma": ("facebook.com", "instagram.com"),
        "ozen-bar": ("ozen.co.il",),
        "suzanne-dellal": ("suzannedellal.org.il",),
        "artport": ("artport.art",),
        "secret-telaviv": ("secrettelaviv.com",),
        "go-out": ("go-out.co",),
        "eventim": ("eventim.co.il",),
        "ticketmaster": ("ticketmaster.co.il",),
        "tlv-municipality": ("tel-aviv.gov.il",),
    }
)


@dataclass(frozen=True, slots=True)
class Catalog:
    """Lookup tables injected into the discovery pipeline."""

    genres: Tuple[str, ...] = GENRES
    venue_names: Mapping[str, str] = field(default_factory=lambda: VENUE_NAMES)
    venue_domains: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: VENUE_DOMAINS)
    location: str = "Tel Aviv"

    def venue_display_name(self, venue_id: str) -> str:
        """Unknown ids are passed through unchanged."""
        return self.venue_names.get(venue_id, venue_id)

    def primary_domain(self, venue_id: str) -> str | None:
        domains = self.venue_domains.get(venue_id) or ()
        return domains[0] if domains else None

    def is_all_genres_selection(self, genres: Iterable[str] | None) -> bool:
        """Return ``True`` when *genres* covers the whole vocabulary.

        Selecting every genre means "any genre". Treating it as a strict filter
        would drop nearly every real event, because venue pages rarely label
        genres explicitly.
        """
        if not genres:
            return False
        selected = {g.strip() for g in genres if isinstance(g, str) and g.strip()}
        return all(g in selected for g in self.genres)


DEFAULT_CATALOG = Catalog()

__all__ = [
    "GENRES",
    "EVENT_WINDOWS",
    "DAYS_OF_WEEK",
    "VENUE_NAMES",
    "VENUE_DOMAINS",
    "Catalog",
    "DEFAULT_CATALOG",
]
