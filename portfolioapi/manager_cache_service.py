"""Generic cache service over a cache repository."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from .dtos import CacheParams
from .ports import ManagerCacheRepositoryPort, ManagerCacheServicePort

_log = logging.getLogger(__name__)


class ManagerCacheService(ManagerCacheServicePort):
    """Reads and writes cached values through a repository."""

    def __init__(self, repository: ManagerCacheRepositoryPort) -> None:
        self.repository = repository

    def get_data(self, key: str, structure: Any) -> Any:
        """Return the value under ``key``, decoded against ``structure``.

        Errors from the repository propagate.
        """
        params = CacheParams(key=key, value=structure)
        self.repository.get_data(params)
        return params.value

    def set_data(self, key: str, value: Any, expiration: timedelta) -> None:
        """Store ``value`` under ``key``; a storage failure is logged, not raised."""
        params = CacheParams(key=key, value=value)
        try:
            self.repository.set_data(params, expiration)
        except Exception as error:  # noqa: BLE001 - caching is best effort
            _log.error("%s", error)