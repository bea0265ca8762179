"""Key-value storage backends for the schedule snapshot."""

from workout_calendar.storage.base import (
    KeyValueStorage,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from workout_calendar.storage.factory import create_storage
from workout_calendar.storage.json_file import JsonFileStorage
from workout_calendar.storage.memory import MemoryStorage
from workout_calendar.storage.redis_store import RedisStorage
from workout_calendar.storage.sql import SqlStorage

__all__ = [
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "RedisStorage",
    "SqlStorage",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "create_storage",
]
