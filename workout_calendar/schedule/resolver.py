"""Effective schedule resolution.

Precedence is strict: a non-empty override for a date replaces the weekly
recurrence for that date entirely. There is no merging of the two.
"""

from __future__ import annotations

from datetime import date

from loguru import logger

from workout_calendar.calendar.grid import date_key, sunday_weekday
from workout_calendar.config.settings import settings
from workout_calendar.schedule.store import ScheduleStore
from workout_calendar.schedule.types import Exercise, ExerciseId


class ScheduleResolver:
    """Reads and edits per-date schedules through a ScheduleStore.

    Args:
        store: Store owning the snapshot
        rest_exercise_id: Exercise substituted when a day's selection becomes empty
    """

    def __init__(self, store: ScheduleStore, rest_exercise_id: str | None = None):
        self.store = store
        self.rest_exercise_id = rest_exercise_id or settings.rest_exercise_id

    def effective_exercises(self, day: date) -> list[ExerciseId]:
        """Exercise ids scheduled on day.

        Returns the override for the day if present and non-empty, otherwise
        the weekly list for its weekday, otherwise an empty list.
        """
        override = self.store.override_for(date_key(day))
        if override:
            return override
        return self.store.weekly_for(sunday_weekday(day))

    def exercises_for_date(self, day: date) -> list[Exercise]:
        """Exercise records for day; ids without an exercise are skipped."""
        result = []
        for exercise_id in self.effective_exercises(day):
            exercise = self.store.get_exercise(exercise_id)
            if exercise is not None:
                result.append(exercise)
        return result

    def toggle_exercise_on_date(self, day: date, exercise_id: ExerciseId, enabled: bool) -> list[ExerciseId]:
        """Add or remove one exercise on a single date, pinning the result as an override.

        Starts from a copy of the date's current effective list. If the result
        is empty, the rest exercise is pinned instead; when no rest exercise
        exists the override is deleted and the date follows the weekly plan.

        Returns:
            The new override, or an empty list if the override was deleted
        """
        key = date_key(day)
        selection = list(self.effective_exercises(day))
        if enabled:
            if exercise_id not in selection:
                selection.append(exercise_id)
        else:
            selection = [eid for eid in selection if eid != exercise_id]

        if not selection and self.store.has_exercise(self.rest_exercise_id):
            selection = [self.rest_exercise_id]

        if selection:
            self.store.set_override(key, selection)
        else:
            logger.debug(f"[SCHEDULE] Empty selection on {key} and no rest exercise; following weekly plan")
            self.store.delete_override(key)
        return selection

    def reset_date_to_weekly(self, day: date) -> None:
        """Drop the override for day so it follows the weekly plan again."""
        self.store.delete_override(date_key(day))

    def remove_exercise_everywhere(self, exercise_id: ExerciseId) -> None:
        """Remove exercise_id from every weekday of the weekly plan.

        Existing overrides keep the id.
        """
        self.store.purge_from_weekly(exercise_id)
        self.store.save()
