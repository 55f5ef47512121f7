"""Read access to stored briefs in MongoDB."""

from __future__ import annotations

import logging
from typing import Any, List

from bson import ObjectId
from bson.errors import InvalidId

from ..clients.mongodb_client import get_briefs_collection
from ..errors import InvalidProfileError
from ..models import SubscriberProfile

logger = logging.getLogger(__name__)


def load_active_profiles() -> List[SubscriberProfile]:
    """Return every active brief; malformed documents are logged and skipped."""
    profiles: List[SubscriberProfile] = []
    for doc in get_briefs_collection().find({"is_active": True}):
        try:
            profiles.append(SubscriberProfile.from_dict(doc))
        except InvalidProfileError as exc:
            logger.error("Skipping malformed brief %s: %s", doc.get("_id"), exc)
    logger.info("Found %d active briefs", len(profiles))
    return profiles


def _id_filter(brief_id: str) -> dict[str, Any]:
    try:
        return {"_id": {"$in": [ObjectId(brief_id), brief_id]}}
    except (InvalidId, TypeError):
        return {"_id": brief_id}


def get_profile(brief_id: str) -> SubscriberProfile | None:
    """Return the brief stored under *brief_id*, or ``None``."""
    doc = get_briefs_collection().find_one(_id_filter(brief_id))
    if doc is None:
        return None
    return SubscriberProfile.from_dict(doc)

__all__ = ["load_active_profiles", "get_profile"]
