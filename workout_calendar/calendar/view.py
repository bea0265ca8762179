"""Month view model: grid cells combined with schedule and styling.

This is what a rendering layer consumes. For every grid cell it carries the
effective exercises, the activity flag, the tint and the CSS classes, so the
renderer only has to draw.

"Today" is sampled once per build. A view kept on screen across midnight keeps
its initial today/past classification until it is rebuilt.
"""

from __future__ import annotations

from datetime import date

from loguru import logger
from pydantic import BaseModel, ConfigDict

from workout_calendar.calendar.grid import DayCell, build_month_grid, month_title
from workout_calendar.calendar.styling import background_tint, cell_classes, is_active
from workout_calendar.config.settings import Settings, settings as default_settings
from workout_calendar.schedule.resolver import ScheduleResolver
from workout_calendar.schedule.store import ScheduleStore
from workout_calendar.schedule.types import Exercise, ExerciseId


class CalendarDay(BaseModel):
    """Everything needed to draw one grid cell."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    cell: DayCell
    key: str
    exercise_ids: list[ExerciseId]
    exercises: list[Exercise]
    active: bool
    background: str | None
    classes: list[str]

    @property
    def editable(self) -> bool:
        """Overflow days belong to another month and are not edited from this view."""
        return not self.cell.overflow


class MonthView(BaseModel):
    year: int
    month: int
    title: str
    days: list[CalendarDay]


class ExerciseChoice(BaseModel):
    """An exercise with its checked state in the day-edit dialog."""

    exercise: Exercise
    selected: bool


def build_month_view(
    store: ScheduleStore,
    year: int,
    month: int,
    today: date | None = None,
    settings: Settings | None = None,
) -> MonthView:
    """Build the view model for a month (0-based).

    Args:
        store: Store holding the schedule snapshot
        year: Calendar year
        month: 0-based month
        today: Reference date; defaults to date.today() sampled once
        settings: Settings providing rest exercise id and tint alpha

    Returns:
        MonthView with 42 days in display order
    """
    config = settings or default_settings
    today = today or date.today()
    resolver = ScheduleResolver(store, rest_exercise_id=config.rest_exercise_id)
    tints = store.snapshot.tint_by_exercise_id

    days: list[CalendarDay] = []
    for cell in build_month_grid(year, month, today=today):
        exercise_ids = resolver.effective_exercises(cell.date)
        days.append(
            CalendarDay(
                cell=cell,
                key=cell.key,
                exercise_ids=exercise_ids,
                exercises=resolver.exercises_for_date(cell.date),
                active=is_active(exercise_ids, cell.is_past, config.rest_exercise_id),
                background=background_tint(exercise_ids, cell.is_past, tints, alpha=config.tint_alpha),
                classes=cell_classes(cell, exercise_ids, config.rest_exercise_id),
            )
        )

    logger.debug(f"[CALENDAR] Built month view {year}-{month + 1:02d} (today={today.isoformat()})")
    return MonthView(year=year, month=month, title=month_title(year, month), days=days)


def day_selection(store: ScheduleStore, day: date, rest_exercise_id: str | None = None) -> list[ExerciseChoice]:
    """Every exercise with whether it is scheduled on day (day-edit dialog content)."""
    selected = set(ScheduleResolver(store, rest_exercise_id=rest_exercise_id).effective_exercises(day))
    return [ExerciseChoice(exercise=exercise, selected=exercise.id in selected) for exercise in store.exercises]
