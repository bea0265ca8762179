"""Root conftest for all tests.

Provides stores backed by in-memory storage and a fixed reference date, so no
test touches the filesystem or the wall clock unless it asks to.
"""

from datetime import date

import pytest

from workout_calendar.schedule.resolver import ScheduleResolver
from workout_calendar.schedule.store import ScheduleStore
from workout_calendar.storage.memory import MemoryStorage


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Empty in-memory key-value storage."""
    return MemoryStorage()


@pytest.fixture
def store(memory_storage: MemoryStorage) -> ScheduleStore:
    """Store loaded from empty storage, i.e. holding the default snapshot."""
    return ScheduleStore.open(memory_storage)


@pytest.fixture
def resolver(store: ScheduleStore) -> ScheduleResolver:
    return ScheduleResolver(store, rest_exercise_id="rest")


@pytest.fixture
def today() -> date:
    """Fixed reference date: Wednesday 2024-01-17."""
    return date(2024, 1, 17)
