"""Redis-backed storage for cached values, encoded as JSON."""

from __future__ import annotations

import json
from datetime import timedelta
from typing import Optional

from .dtos import CacheParams
from .ports import ManagerCacheRepositoryPort


class CacheMissError(LookupError):
    """No value is stored under the requested key."""


class RedisManagerCacheRepository(ManagerCacheRepositoryPort):
    """Stores JSON documents in Redis."""

    def __init__(self, redis_client) -> None:
        self.redis_client = redis_client

    def get_data(self, params: CacheParams) -> None:
        """Replace ``params.value`` with the decoded document under ``params.key``.

        Raises CacheMissError on a miss; Redis and JSON errors propagate.
        """
        raw = self.redis_client.get(params.key)
        if raw is None:
            raise CacheMissError(f"no cached value for {params.key}")
        params.value = json.loads(raw)

    def set_data(self, params: CacheParams, expiration: Optional[timedelta]) -> None:
        """Store ``params.value`` as JSON; a falsy expiration means no expiry."""
        data = json.dumps(params.value, separators=(",", ":"))
        self.redis_client.set(params.key, data, ex=expiration or None)