"""Utilities for parsing structured outputs returned by LLM calls.

The extraction model is asked for a bare JSON array. Anything else is
treated as "no candidates" so a bad completion never aborts a run.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List

from .text_cleaning import strip_code_fences

__all__ = ["parse_json_array"]

logger = logging.getLogger(__name__)


def parse_json_array(response_text: str | None) -> List[Any]:
    """Parse *response_text* as a JSON array.

    Parameters
    ----------
    response_text
        The raw message content returned by the model, possibly wrapped in
        a Markdown code fence.

    Returns
    -------
    list[Any]
        The parsed array, or an empty list when the text is not valid JSON
        or its top-level value is not an array.
    """
    cleaned = strip_code_fences(response_text)

    try:
        parsed = json.loads(cleaned)
    except (json.JSONDecodeError, TypeError) as exc:
        logger.warning("Model output is not valid JSON (%s); first 500 chars: %s", exc, cleaned[:500])
        return []

    if not isinstance(parsed, list):
        logger.warning("Model output is JSON but not an array (%s)", type(parsed).__name__)
        return []
    return parsed
