"""Centralised logging configuration.

Importing this module sets the default logging format/level. Other modules
should simply import `logging` and call `logging.getLogger(__name__)`, or
wrap that logger with :func:`get_trace_logger` when a run's trace id is known.
"""

from __future__ import annotations

import logging
from typing import Any, MutableMapping

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


class TraceLoggerAdapter(logging.LoggerAdapter):
    """Prefix every message with ``[trace_id]`` so one run can be followed end to end."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        trace_id = (self.extra or {}).get("trace_id")
        if trace_id:
            return f"[{trace_id}] {msg}", kwargs
        return msg, kwargs


def get_trace_logger(name: str, trace_id: str | None) -> TraceLoggerAdapter:
    return TraceLoggerAdapter(logging.getLogger(name), {"trace_id": trace_id})


__all__ = ["logging", "TraceLoggerAdapter", "get_trace_logger"]
