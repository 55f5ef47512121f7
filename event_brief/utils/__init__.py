"""Utility functions for the event brief project.

Re-exports the text-cleaning, parsing, URL and datetime helpers so that
imports like `from ..utils import strip_code_fences` work as expected.
"""

from .text_cleaning import strip_code_fences, truncate  # noqa: F401
from .datetime_utils import get_current_timestamp, ensure_utc, parse_event_date  # noqa: F401
from .llm_parsing import parse_json_array  # noqa: F401
from .urls import extract_urls, url_host  # noqa: F401

__all__ = [
    "strip_code_fences",
    "truncate",
    "get_current_timestamp",
    "ensure_utc",
    "parse_event_date",
    "parse_json_array",
    "extract_urls",
    "url_host",
]
