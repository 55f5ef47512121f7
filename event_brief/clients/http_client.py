"""Shared HTTP session for the delivery channel REST APIs."""

from __future__ import annotations

import requests

_session: requests.Session | None = None


def get_session() -> requests.Session:
    """Return a singleton :class:`requests.Session`."""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session

__all__ = ["get_session"]
