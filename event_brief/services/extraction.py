"""Event extraction through the OpenAI chat-completions API."""

from __future__ import annotations

import openai

from ..clients.openai_client import get_openai
from ..config import OPENAI_EXTRACTION_MODEL
from ..errors import (
    ExtractionConfigError,
    ExtractionError,
    ExtractionServiceError,
    QuotaExhaustedError,
    RateLimitedError,
)
from ..logging_config import get_trace_logger
from ..models import ModelOutput
from .prompts import SYSTEM_INSTRUCTION

# ---------------------------------------------------------------------------
# Local OpenAI settings (specific to this service)
# ---------------------------------------------------------------------------
MAX_COMPLETION_TOKENS: int = 2200


def _classify(exc: openai.OpenAIError, trace_id: str | None) -> ExtractionError:
    """Map an SDK error to the error kind callers act on."""
    if isinstance(exc, openai.APIStatusError):
        status = exc.status_code
        code = getattr(exc, "code", None)
        if status == 402 or code == "insufficient_quota":
            return QuotaExhaustedError("AI credits exhausted", trace_id=trace_id)
        if status == 429:
            return RateLimitedError("Rate limit exceeded, please try again later", trace_id=trace_id)
        return ExtractionServiceError(f"AI service error ({status})", trace_id=trace_id)
    return ExtractionServiceError(f"AI service error: {exc}", trace_id=trace_id)


def ensure_configured(trace_id: str | None = None) -> None:
    """Raise :class:`ExtractionConfigError` when the model service cannot be reached."""
    try:
        get_openai()
    except EnvironmentError as exc:
        raise ExtractionConfigError("AI service not configured", trace_id=trace_id) from exc


def extract_events_text(prompt: str, *, trace_id: str | None = None) -> ModelOutput:
    """Send *prompt* to the extraction model and return its raw text output."""
    log = get_trace_logger(__name__, trace_id)

    try:
        client = get_openai()
    except EnvironmentError as exc:
        raise ExtractionConfigError("AI service not configured", trace_id=trace_id) from exc

    log.info("Requesting event extraction from %s", OPENAI_EXTRACTION_MODEL)
    try:
        response = client.chat.completions.create(
            model=OPENAI_EXTRACTION_MODEL,
            messages=[
                {"role": "system", "content": SYSTEM_INSTRUCTION},
                {"role": "user", "content": prompt},
            ],
            max_completion_tokens=MAX_COMPLETION_TOKENS,
            extra_headers={"X-Trace-Id": trace_id} if trace_id else None,
        )
    except openai.OpenAIError as exc:
        error = _classify(exc, trace_id)
        log.error("AI request failed (%s): %s", error.kind, exc)
        raise error from exc

    choice = response.choices[0] if response.choices else None
    content = choice.message.content if choice and choice.message else None
    finish_reason = choice.finish_reason if choice else None
    text = content if isinstance(content, str) and content else "[]"

    log.info(
        "AI response received (finish_reason=%s, content_chars=%d)", finish_reason, len(text)
    )
    return ModelOutput(text=text, finish_reason=finish_reason)

__all__ = ["extract_events_text", "ensure_configured"]
