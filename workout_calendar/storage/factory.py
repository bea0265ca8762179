from __future__ import annotations

from loguru import logger

from workout_calendar.config.settings import Settings, settings
from workout_calendar.storage.base import KeyValueStorage
from workout_calendar.storage.json_file import JsonFileStorage
from workout_calendar.storage.memory import MemoryStorage
from workout_calendar.storage.redis_store import RedisStorage
from workout_calendar.storage.sql import SqlStorage


def create_storage(config: Settings | None = None) -> KeyValueStorage:
    """Build the storage backend selected by STORAGE_BACKEND.

    Args:
        config: Settings to use; defaults to the module-level settings

    Returns:
        KeyValueStorage implementation
    """
    config = config or settings
    backend = config.storage_backend

    if backend == "memory":
        logger.warning("Using in-memory storage: schedule changes will not survive a restart")
        return MemoryStorage()
    if backend == "file":
        logger.info(f"Using JSON file storage: {config.data_path}")
        return JsonFileStorage(config.data_path)
    if backend == "sql":
        logger.info(f"Using SQL storage: {config.database_url}")
        return SqlStorage(config.database_url)
    if backend == "redis":
        logger.info(f"Using Redis storage: {config.redis_url} (prefix={config.redis_key_prefix})")
        return RedisStorage(config.redis_url, prefix=config.redis_key_prefix)

    raise ValueError(f"Unknown storage backend: {backend}")
