"""Schedule model, persistence and per-date resolution."""

from workout_calendar.schedule.errors import (
    DuplicateExerciseError,
    LastExerciseError,
    PersistenceError,
    ScheduleError,
    UnknownExerciseError,
)
from workout_calendar.schedule.resolver import ScheduleResolver
from workout_calendar.schedule.store import ScheduleStore
from workout_calendar.schedule.types import Exercise, LoadResult, ScheduleSnapshot, TintColors

__all__ = [
    "DuplicateExerciseError",
    "Exercise",
    "LastExerciseError",
    "LoadResult",
    "PersistenceError",
    "ScheduleError",
    "ScheduleResolver",
    "ScheduleSnapshot",
    "ScheduleStore",
    "TintColors",
    "UnknownExerciseError",
]
