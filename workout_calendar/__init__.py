"""Workout calendar: weekly exercise plans with per-date overrides.

Core pieces:
- ScheduleStore: persisted snapshot (exercises, weekly plan, overrides, tints)
- ScheduleResolver: effective exercises per date, per-date edits
- build_month_grid / build_month_view: month grid and its view model
"""

from workout_calendar.calendar.grid import DayCell, build_month_grid, day_key
from workout_calendar.calendar.view import build_month_view, day_selection
from workout_calendar.core.logger import setup_logger
from workout_calendar.schedule.resolver import ScheduleResolver
from workout_calendar.schedule.store import ScheduleStore
from workout_calendar.storage.factory import create_storage

__all__ = [
    "DayCell",
    "ScheduleResolver",
    "ScheduleStore",
    "build_month_grid",
    "build_month_view",
    "create_storage",
    "day_key",
    "day_selection",
    "setup_logger",
]
