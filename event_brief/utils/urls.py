"""URL helpers shared by the grounding index and the validator."""

from __future__ import annotations

import re
from typing import List
from urllib.parse import urlsplit

__all__ = ["extract_urls", "url_host"]

_URL_PATTERN = re.compile(r"https?://[^\s)\]}>\"']+")
_DEFAULT_PORTS = {"http": 80, "https": 443}


def extract_urls(text: str) -> List[str]:
    """Return the distinct absolute http(s) URLs found in *text*, in order."""
    if not text:
        return []
    return list(dict.fromkeys(_URL_PATTERN.findall(text)))


def url_host(url: str) -> str | None:
    """Return ``hostname[:port]`` of an absolute URL, or ``None`` if it has none."""
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        port = parts.port
    except ValueError:
        return None
    if not parts.scheme or not hostname:
        return None
    if port is None or _DEFAULT_PORTS.get(parts.scheme.lower()) == port:
        return hostname
    return f"{hostname}:{port}"
