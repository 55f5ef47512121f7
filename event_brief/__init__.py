"""Top-level package for the event-brief project.

This package exposes the discovery pipeline and the scheduled runner so
callers can do `python -m event_brief` or
`from event_brief import discover_events`.
"""

from importlib import metadata as _metadata

try:
    __version__: str = _metadata.version("event-brief")
except _metadata.PackageNotFoundError:  # pragma: no cover – running from source
    __version__ = "0.0.0"

from .workflows.discovery_pipeline import discover_events  # convenience re-export
from .workflows.brief_runner import process_scheduled_briefs, trigger_brief  # noqa: E402

__all__ = ["discover_events", "process_scheduled_briefs", "trigger_brief", "__version__"]
