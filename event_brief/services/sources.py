"""Source gathering via Tavily search, scoped to the subscriber's venues."""

from __future__ import annotations

import concurrent.futures
import logging
from datetime import datetime
from typing import Any, Dict, List

from ..catalog import DEFAULT_CATALOG, Catalog
from ..clients.tavily_client import get_tavily_client
from ..logging_config import get_trace_logger
from ..models import SourceDocument, SubscriberProfile
from ..utils.datetime_utils import get_current_timestamp

# ---------------------------------------------------------------------------
# Local Tavily settings (only used by this service)
# ---------------------------------------------------------------------------
MAX_QUERIES: int = 6
RESULTS_PER_QUERY: int = 3
MAX_DOCUMENTS: int = 8
QUERY_TOPIC: str = "events"

logger = logging.getLogger(__name__)


def build_search_queries(
    profile: SubscriberProfile,
    *,
    catalog: Catalog = DEFAULT_CATALOG,
    now: datetime | None = None,
) -> List[str]:
    """One ``site:`` query per venue with a known domain, deduplicated and capped."""
    venue_ids = list(profile.venues) if profile.venues else list(catalog.venue_domains)
    year = (now or get_current_timestamp()).year

    queries: List[str] = []
    for venue_id in venue_ids:
        domain = catalog.primary_domain(venue_id)
        if not domain:
            continue
        query = f"site:{domain} {catalog.location} {QUERY_TOPIC} {year}"
        if query not in queries:
            queries.append(query)

    return queries[:MAX_QUERIES]


def _to_document(result: Dict[str, Any]) -> SourceDocument | None:
    url = result.get("url")
    if not isinstance(url, str) or not url:
        return None
    text = result.get("raw_content") or result.get("content") or ""
    if not isinstance(text, str) or not text.strip():
        return None
    title = result.get("title")
    return SourceDocument(url=url, text=text.strip(), title=title if isinstance(title, str) else None)


def search_documents(client: Any, query: str, *, trace_id: str | None = None) -> List[SourceDocument]:
    """Run one Tavily search; any failure yields an empty list."""
    log = get_trace_logger(__name__, trace_id)
    # session_id is sent by the SDK as the X-Session-Id request header
    trace_kwargs = {"session_id": trace_id} if trace_id else {}
    try:
        response = client.search(
            query=query,
            max_results=RESULTS_PER_QUERY,
            include_raw_content="text",
            include_answer=False,
            **trace_kwargs,
        )
    except Exception as exc:  # network, auth, quota – isolated per query
        log.warning("Tavily search failed for %r: %s", query, exc)
        return []

    results = response.get("results", []) if isinstance(response, dict) else []
    documents = [doc for doc in (_to_document(r) for r in results if isinstance(r, dict)) if doc]
    log.info("Tavily returned %d usable results for query: %s", len(documents), query)
    return documents


def gather_sources(
    profile: SubscriberProfile,
    *,
    catalog: Catalog = DEFAULT_CATALOG,
    trace_id: str | None = None,
    now: datetime | None = None,
) -> List[SourceDocument]:
    """Collect distinct source documents for *profile*; never raises."""
    log = get_trace_logger(__name__, trace_id)

    queries = build_search_queries(profile, catalog=catalog, now=now)
    if not queries:
        log.info("No venue domains to search; returning no sources")
        return []

    try:
        client = get_tavily_client()
    except EnvironmentError as exc:
        log.error("Source gathering disabled: %s", exc)
        return []

    log.info("Tavily: running %d search queries", len(queries))

    # All queries start together; results are reassembled in query order.
    per_query: Dict[int, List[SourceDocument]] = {}
    with concurrent.futures.ThreadPoolExecutor(max_workers=len(queries)) as executor:
        future_to_idx = {
            executor.submit(search_documents, client, query, trace_id=trace_id): idx
            for idx, query in enumerate(queries)
        }
        for future in concurrent.futures.as_completed(future_to_idx):
            idx = future_to_idx[future]
            try:
                per_query[idx] = future.result()
            except Exception as exc:
                log.error("Search worker for %r crashed: %s", queries[idx], exc)
                per_query[idx] = []

    by_url: Dict[str, SourceDocument] = {}
    for idx in range(len(queries)):
        for doc in per_query.get(idx, []):
            by_url.setdefault(doc.url, doc)

    documents = list(by_url.values())[:MAX_DOCUMENTS]
    log.info("Sources gathered: %d", len(documents))
    log.debug("Source URLs: %s", [d.url for d in documents])
    return documents

__all__ = ["build_search_queries", "search_documents", "gather_sources"]
