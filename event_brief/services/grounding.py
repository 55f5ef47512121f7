"""Allow-list of URLs and hosts that provably occur in the gathered sources."""

from __future__ import annotations

from typing import Iterable, Set

from ..models import AllowList, SourceDocument
from ..utils.urls import extract_urls, url_host


def build_allow_list(documents: Iterable[SourceDocument]) -> AllowList:
    """Collect each source URL and every URL mentioned in its text, plus their hosts."""
    urls: Set[str] = set()
    hosts: Set[str] = set()

    for doc in documents:
        for url in (doc.url, *extract_urls(doc.text)):
            urls.add(url)
            host = url_host(url)
            if host:
                hosts.add(host)

    return AllowList(urls=frozenset(urls), hosts=frozenset(hosts))

__all__ = ["build_allow_list"]
