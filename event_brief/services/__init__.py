"""Service layer modules grouping business logic by concern.

This module provides convenience re-exports so that callers can simply do for
example `from event_brief.services import validate_events` without having to
know which underlying module provides the symbol.
"""

from .time_window import resolve_time_window  # noqa: F401
from .sources import build_search_queries, gather_sources  # noqa: F401
from .grounding import build_allow_list  # noqa: F401
from .prompts import build_prompt  # noqa: F401
from .extraction import extract_events_text  # noqa: F401
from .validation import validate_events  # noqa: F401
from .digest import Digest, compose_digest  # noqa: F401
from .delivery import DeliveryResult, deliver_digest, send_email, send_whatsapp  # noqa: F401
from .schedule import is_brief_due  # noqa: F401

__all__ = [
    "resolve_time_window",
    "build_search_queries",
    "gather_sources",
    "build_allow_list",
    "build_prompt",
    "extract_events_text",
    "validate_events",
    "Digest",
    "compose_digest",
    "DeliveryResult",
    "deliver_digest",
    "send_email",
    "send_whatsapp",
    "is_brief_due",
]
