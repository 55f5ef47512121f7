"""Pipelines wiring the services together."""

from .discovery_pipeline import discover_events  # noqa: F401
from .brief_runner import process_scheduled_briefs, run_brief, trigger_brief  # noqa: F401

__all__ = ["discover_events", "process_scheduled_briefs", "run_brief", "trigger_brief"]
