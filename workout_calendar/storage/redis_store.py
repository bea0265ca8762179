"""Redis storage backend.

Each logical key is stored as a plain Redis string under a configurable prefix,
e.g. ``workout_calendar:overrides``.
"""

from __future__ import annotations

import redis
from loguru import logger

from workout_calendar.storage.base import StorageReadError, StorageWriteError


def _get_redis_client(redis_url: str) -> redis.Redis:
    """Get Redis client instance.

    Returns:
        Redis client with string decoding enabled
    """
    return redis.from_url(redis_url, decode_responses=True)


class RedisStorage:
    """KeyValueStorage backed by Redis strings."""

    def __init__(self, redis_url: str, prefix: str = "workout_calendar:", client: redis.Redis | None = None):
        self.prefix = prefix
        self._client = client if client is not None else _get_redis_client(redis_url)

    def _redis_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> str | None:
        try:
            value = self._client.get(self._redis_key(key))
        except redis.RedisError as e:
            raise StorageReadError(key, str(e)) from e
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str) -> None:
        try:
            self._client.set(self._redis_key(key), value)
        except redis.RedisError as e:
            raise StorageWriteError(key, str(e)) from e

    def delete(self, key: str) -> None:
        try:
            self._client.delete(self._redis_key(key))
        except redis.RedisError as e:
            raise StorageWriteError(key, str(e)) from e

    def keys(self) -> list[str]:
        try:
            found = self._client.keys(f"{self.prefix}*")
        except redis.RedisError as e:
            raise StorageReadError(f"{self.prefix}*", str(e)) from e
        result = []
        for raw in found:
            name = raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)
            result.append(name[len(self.prefix):])
        logger.debug(f"[STORAGE] Found {len(result)} redis keys under prefix {self.prefix}")
        return result
