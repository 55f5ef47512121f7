"""Shared text helpers for model output and prompt construction."""

from __future__ import annotations

import re
from typing import Final

_OPENING_FENCE = re.compile(r"^```[\w+-]*[ \t]*\n?")
_CLOSING_FENCE = re.compile(r"\n?[ \t]*```$")

TRUNCATION_MARKER: Final[str] = "\n…(truncated)"

# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------

def strip_code_fences(text: str | None) -> str:
    """Remove a Markdown code fence wrapping *text*, if present.

    Handles a leading ```` ``` ```` optionally followed by a language tag
    (``json``) and a trailing ```` ``` ````. The result is whitespace-trimmed.
    """
    if not text:
        return ""

    cleaned: str = text.strip()
    cleaned = _OPENING_FENCE.sub("", cleaned, count=1)
    cleaned = _CLOSING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def truncate(text: str, max_chars: int) -> str:
    """Cut *text* to *max_chars* and mark the cut."""
    if len(text) <= max_chars:
        return text
    return f"{text[:max_chars]}{TRUNCATION_MARKER}"

__all__ = ["strip_code_fences", "truncate", "TRUNCATION_MARKER"]
