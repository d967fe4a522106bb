"""Read-through JSON cache in front of the region and city list endpoints.

Entries expire by TTL only; writes never invalidate them, so a list may be
stale for up to CACHE_TTL_SECONDS after a mutation. When redis is not
configured or fails, callers fall through to the database.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from volunteer_api.core.config import settings
from volunteer_api.core.redis_client import get_sync_redis_client

logger = logging.getLogger(__name__)

REGIONS_ALL_KEY = "regions:all"
CITIES_ALL_KEY = "cities:all"


def cities_by_region_key(region_id: int) -> str:
    return f"cities:region:{region_id}"


def get_json(key: str) -> Any | None:
    """Return the decoded cached value, or None on miss/unavailable cache."""
    client = get_sync_redis_client()
    if client is None:
        return None
    try:
        raw = client.get(key)
    except Exception:
        logger.warning("Cache read failed for %s", key, exc_info=True)
        return None
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Discarding undecodable cache entry %s", key)
        return None


def set_json(key: str, value: Any, ttl_seconds: int | None = None) -> None:
    """Store a JSON value with a TTL; failures are logged and ignored."""
    client = get_sync_redis_client()
    if client is None:
        return
    ttl = ttl_seconds if ttl_seconds is not None else settings.CACHE_TTL_SECONDS
    try:
        client.set(key, json.dumps(value), ex=max(int(ttl), 1))
    except Exception:
        logger.warning("Cache write failed for %s", key, exc_info=True)


def read_through(key: str, loader: Callable[[], Any]) -> Any:
    """Return the cached value for ``key`` or load, store and return it."""
    cached = get_json(key)
    if cached is not None:
        logger.debug("Cache hit %s", key)
        return cached
    value = loader()
    set_json(key, value)
    return value
