"""Shared MongoDB and Redis clients, and the scheduled Redis flush."""

from __future__ import annotations

import logging
import os
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional

import pymongo
import pymongo.errors
import redis
import redis.exceptions

_log = logging.getLogger(__name__)

_CONNECTION_STRING = "mongodb://{host}:{port}/test?retryWrites=false"
_CONNECT_TIMEOUT_MS = 10_000
_REDIS_PORT = 6379
_REDIS_DB = 1
_FLUSH_HOUR = 1
_FLUSH_MINUTE = 30

_mongo_lock = threading.Lock()
_redis_lock = threading.Lock()
_mongo_client: Optional[pymongo.MongoClient] = None
_redis_client: Optional[redis.Redis] = None


def _connect_mongo(uri: str) -> pymongo.MongoClient:
    client = pymongo.MongoClient(
        uri,
        connectTimeoutMS=_CONNECT_TIMEOUT_MS,
        serverSelectionTimeoutMS=_CONNECT_TIMEOUT_MS,
    )
    try:
        client.admin.command("ping")
    except pymongo.errors.PyMongoError as error:
        client.close()
        raise ConnectionError(f"error connecting to MongoDB: {error}") from error
    return client


def _shared_mongo_client() -> pymongo.MongoClient:
    global _mongo_client
    with _mongo_lock:
        if _mongo_client is None:
            uri = _CONNECTION_STRING.format(
                host=os.environ.get("MONGO_DB_HOST", ""),
                port=os.environ.get("MONGO_DB_PORT", ""),
            )
            _mongo_client = _connect_mongo(uri)
        return _mongo_client


class MongoConnection:
    """Access to the configured database through one shared client."""

    def connection(self):
        """Return the database named by MONGO_DB_DATABASE, connecting on first use."""
        return _shared_mongo_client()[os.environ.get("MONGO_DB_DATABASE", "")]

    def close(self) -> None:
        """Close the shared client, if one is open."""
        global _mongo_client
        with _mongo_lock:
            if _mongo_client is not None:
                _mongo_client.close()
                _mongo_client = None


def get_redis_client() -> redis.Redis:
    """Return the shared Redis client, connecting and pinging on first use."""
    global _redis_client
    with _redis_lock:
        if _redis_client is None:
            client = redis.Redis(
                host=os.environ.get("REDIS_HOST") or "localhost",
                port=_REDIS_PORT,
                db=_REDIS_DB,
            )
            try:
                client.ping()
            except redis.exceptions.RedisError as error:
                raise ConnectionError(f"error connecting to Redis: {error}") from error
            _redis_client = client
        return _redis_client


def _next_run(now: datetime, hour: int, minute: int) -> datetime:
    candidate = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if candidate <= now:
        candidate += timedelta(days=1)
    return candidate


class _DailyJob:
    """Runs an action every day at a fixed local time on a daemon thread."""

    def __init__(self, hour: int, minute: int, action: Callable[[], None]) -> None:
        self._hour = hour
        self._minute = minute
        self._action = action
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._run, name="daily-job", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._stopped.set()
        self._thread.join()

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def _run(self) -> None:
        while True:
            now = datetime.now()
            delay = (_next_run(now, self._hour, self._minute) - now).total_seconds()
            if self._stopped.wait(delay):
                return
            self._action()


def _flush(client: redis.Redis, announce: bool) -> None:
    if announce:
        _log.info("Flushing all registers")
    try:
        client.flushall()
    except redis.exceptions.RedisError as error:
        _log.error("Error flushing all registers: %s", error)


def flush_all_registers() -> _DailyJob:
    """Flush Redis now and every day at 01:30; return the running daily job."""
    client = get_redis_client()
    _flush(client, announce=False)
    job = _DailyJob(_FLUSH_HOUR, _FLUSH_MINUTE, lambda: _flush(client, announce=True))
    job.start()
    return job