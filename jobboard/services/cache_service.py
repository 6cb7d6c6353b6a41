"""
Response Cache - MongoDB-backed TTL cache for job payloads.

Keys:
- jobs:<normalized query params>  - a page of the job listing
- job:<job_id>                    - a job detail payload

The cache is best effort. Any MongoDB failure is logged and treated as a
miss, so a cache outage never fails a request.
"""

import json
import logging
import re
from datetime import timedelta
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from jobboard.core.config import get_settings
from jobboard.db.mongodb import COLLECTIONS, get_collection
from jobboard.utils import utcnow

logger = logging.getLogger(__name__)

JOB_LIST_PREFIX = "jobs:"
JOB_DETAIL_PREFIX = "job:"


def job_list_key(params: dict) -> str:
    """Stable key for a listing query, independent of parameter order."""
    return JOB_LIST_PREFIX + json.dumps(jsonable_encoder(params), sort_keys=True)


def job_detail_key(job_id: str) -> str:
    return f"{JOB_DETAIL_PREFIX}{job_id}"


class ResponseCache:
    """
    Stores JSON-compatible payloads under string keys with an expiry.

    MongoDB's TTL monitor only sweeps about once a minute, so reads also
    check `expires_at` themselves.
    """

    def __init__(self, collection: Optional[Collection] = None, ttl_seconds: int = 300, enabled: bool = True):
        self.enabled = enabled
        self.ttl_seconds = ttl_seconds
        self._collection = collection

    @property
    def collection(self) -> Collection:
        if self._collection is None:
            self._collection = get_collection(COLLECTIONS["response_cache"])
        return self._collection

    def get(self, key: str) -> Optional[Any]:
        """Return the cached payload, or None on miss, expiry or error."""
        if not self.enabled:
            return None
        try:
            doc = self.collection.find_one({"key": key})
        except PyMongoError as e:
            logger.warning(f"Cache get failed for {key}: {e}")
            return None

        if not doc:
            return None
        if doc.get("expires_at") and doc["expires_at"] <= utcnow():
            return None
        return doc.get("value")

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        """Store a payload, replacing any previous value for the key."""
        if not self.enabled:
            return
        ttl = ttl_seconds if ttl_seconds is not None else self.ttl_seconds
        doc = {
            "key": key,
            "value": jsonable_encoder(value),
            "expires_at": utcnow() + timedelta(seconds=ttl),
        }
        try:
            self.collection.replace_one({"key": key}, doc, upsert=True)
        except PyMongoError as e:
            logger.warning(f"Cache set failed for {key}: {e}")

    def delete(self, key: str) -> None:
        if not self.enabled:
            return
        try:
            self.collection.delete_one({"key": key})
        except PyMongoError as e:
            logger.warning(f"Cache delete failed for {key}: {e}")

    def invalidate_prefix(self, prefix: str) -> int:
        """Delete every key starting with prefix. Returns the number removed."""
        if not self.enabled:
            return 0
        try:
            result = self.collection.delete_many({"key": {"$regex": f"^{re.escape(prefix)}"}})
        except PyMongoError as e:
            logger.warning(f"Cache invalidation failed for {prefix}*: {e}")
            return 0
        return result.deleted_count

    def invalidate_job(self, job_id: str) -> None:
        """Drop a job's detail payload and every cached listing page."""
        self.delete(job_detail_key(job_id))
        self.invalidate_prefix(JOB_LIST_PREFIX)


# Singleton instance
_response_cache: ResponseCache = None


def get_response_cache() -> ResponseCache:
    """Get or create the response cache (singleton pattern)"""
    global _response_cache
    if _response_cache is None:
        settings = get_settings()
        _response_cache = ResponseCache(
            ttl_seconds=settings.cache_ttl_seconds,
            enabled=settings.cache_enabled,
        )
    return _response_cache
