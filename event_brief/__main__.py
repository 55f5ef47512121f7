"""Command-line entry point: run the scheduled batch, or one brief on demand."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .logging_config import logging as _  # noqa: F401  # ensure config applied early
from .errors import EventBriefError
from .workflows.brief_runner import process_scheduled_briefs, trigger_brief

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="event_brief", description=__doc__)
    parser.add_argument("--brief-id", help="run this brief now, ignoring its schedule")
    args = parser.parse_args(argv)

    if args.brief_id:
        try:
            result = trigger_brief(args.brief_id)
        except EventBriefError as exc:
            logger.error("[%s] %s", exc.trace_id, exc)
            print(json.dumps({"error": str(exc), "traceId": exc.trace_id}))
            return 1
        print(json.dumps(result.to_dict(), ensure_ascii=False))
        return 0

    summary = process_scheduled_briefs()
    print(json.dumps(summary, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
