"""ScheduleStore: owner of the persisted schedule snapshot.

The store is the only component that talks to key-value storage. It keeps the
current snapshot in memory, and every mutation is immediately followed by a
full save of all five keys.
"""

from __future__ import annotations

import random
import string

from loguru import logger

from workout_calendar.schedule.defaults import default_snapshot
from workout_calendar.schedule.errors import (
    DuplicateExerciseError,
    LastExerciseError,
    PersistenceError,
    UnknownExerciseError,
)
from workout_calendar.schedule.serializers import (
    DAY_KEY_PATTERN,
    DECODERS,
    KEY_EXERCISES,
    KEY_OVERRIDES,
    KEY_TINT_BY_EXERCISE_ID,
    KEY_TINT_COLORS,
    KEY_WEEKLY_SCHEDULE,
    STORAGE_KEYS,
    decode_field,
    encode_snapshot,
)
from workout_calendar.schedule.types import (
    WEEKDAY_INDICES,
    Exercise,
    ExerciseId,
    LoadResult,
    ScheduleSnapshot,
    TintColorKey,
)
from workout_calendar.storage.base import KeyValueStorage, StorageError

NEW_EXERCISE_NAME = "New"
NEW_EXERCISE_ICON = "❓"

_ID_ALPHABET = string.digits + string.ascii_lowercase
_TINT_COLOR_FIELDS: dict[str, str] = {"swim": "swim", "gym": "gym", "swimGym": "swim_gym"}


def generate_exercise_id() -> ExerciseId:
    """Random id for a user-created exercise: "ex" + 6 base-36 characters."""
    return "ex" + "".join(random.choices(_ID_ALPHABET, k=6))


def _validate_weekday(weekday: int) -> int:
    if weekday not in WEEKDAY_INDICES:
        raise ValueError(f"Weekday must be 0 (Sunday) to 6 (Saturday), got {weekday}")
    return weekday


def _validate_day_key(key: str) -> str:
    if not DAY_KEY_PATTERN.match(key):
        raise ValueError(f"Invalid day key '{key}', expected YYYY-MM-DD")
    return key


class ScheduleStore:
    """Loads, mutates and saves the schedule snapshot.

    Args:
        storage: Key-value backend holding the five snapshot keys
        snapshot: Optional initial snapshot; when omitted, call load() first
            or the defaults are used
    """

    def __init__(self, storage: KeyValueStorage, snapshot: ScheduleSnapshot | None = None):
        self.storage = storage
        self.snapshot = snapshot if snapshot is not None else default_snapshot()

    @classmethod
    def open(cls, storage: KeyValueStorage) -> ScheduleStore:
        """Create a store and load its snapshot from storage."""
        store = cls(storage)
        store.load()
        return store

    # ------------------------------------------------------------------
    # Load / save
    # ------------------------------------------------------------------

    def _read(self, key: str) -> str | None:
        try:
            return self.storage.get(key)
        except StorageError as e:
            logger.warning(f"[SCHEDULE] Could not read '{key}', treating as absent: {e}")
            return None

    def load(self) -> LoadResult:
        """Read every key, defaulting each unusable one independently.

        Never raises for bad stored data; the result reports which keys were
        defaulted.
        """
        values = {}
        defaulted_fields: list[str] = []
        for key in STORAGE_KEYS:
            decoder, default = DECODERS[key]
            value, defaulted = decode_field(key, self._read(key), decoder, default)
            values[key] = value
            if defaulted:
                defaulted_fields.append(key)

        self.snapshot = ScheduleSnapshot(
            exercises=values[KEY_EXERCISES],
            weekly_schedule=values[KEY_WEEKLY_SCHEDULE],
            overrides=values[KEY_OVERRIDES],
            tint_colors=values[KEY_TINT_COLORS],
            tint_by_exercise_id=values[KEY_TINT_BY_EXERCISE_ID],
        )
        status = "defaulted" if defaulted_fields else "loaded"
        logger.debug(f"[SCHEDULE] Loaded snapshot status={status} defaulted={defaulted_fields}")
        return LoadResult(snapshot=self.snapshot, status=status, defaulted_fields=defaulted_fields)

    def save(self, snapshot: ScheduleSnapshot | None = None) -> None:
        """Write all five keys.

        A rejected write does not stop the remaining ones. Once every key has
        been attempted, failures are raised together as PersistenceError.
        """
        if snapshot is not None:
            self.snapshot = snapshot
        encoded = encode_snapshot(self.snapshot)

        causes: dict[str, Exception] = {}
        for key in STORAGE_KEYS:
            try:
                self.storage.set(key, encoded[key])
            except StorageError as e:
                logger.error(f"[SCHEDULE] Failed to persist '{key}': {e}")
                causes[key] = e

        if causes:
            raise PersistenceError(list(causes), causes)

    def reset(self) -> LoadResult:
        """Delete the stored snapshot and go back to the defaults.

        Only the snapshot keys are removed; other keys sharing the backend are
        left alone. Like save(), every delete is attempted before failures are
        raised as PersistenceError.
        """
        try:
            stored = set(self.storage.keys())
        except StorageError as e:
            logger.warning(f"[SCHEDULE] Could not list stored keys, deleting all snapshot keys: {e}")
            stored = set(STORAGE_KEYS)

        causes: dict[str, Exception] = {}
        for key in STORAGE_KEYS:
            if key not in stored:
                continue
            try:
                self.storage.delete(key)
            except StorageError as e:
                logger.error(f"[SCHEDULE] Failed to delete '{key}': {e}")
                causes[key] = e

        if causes:
            raise PersistenceError(list(causes), causes)

        logger.info(f"[SCHEDULE] Reset schedule, removed {len(stored & set(STORAGE_KEYS))} stored key(s)")
        return self.load()

    # ------------------------------------------------------------------
    # Exercises
    # ------------------------------------------------------------------

    @property
    def exercises(self) -> list[Exercise]:
        return self.snapshot.exercises

    def get_exercise(self, exercise_id: ExerciseId) -> Exercise | None:
        return next((e for e in self.snapshot.exercises if e.id == exercise_id), None)

    def has_exercise(self, exercise_id: ExerciseId) -> bool:
        return self.get_exercise(exercise_id) is not None

    def _require_exercise(self, exercise_id: ExerciseId) -> Exercise:
        exercise = self.get_exercise(exercise_id)
        if exercise is None:
            raise UnknownExerciseError(exercise_id)
        return exercise

    def add_exercise(
        self,
        name: str = NEW_EXERCISE_NAME,
        icon: str = NEW_EXERCISE_ICON,
        exercise_id: ExerciseId | None = None,
    ) -> Exercise:
        """Append a new exercise and save.

        Raises:
            DuplicateExerciseError: If exercise_id is already used
        """
        if exercise_id is None:
            exercise_id = generate_exercise_id()
            while self.has_exercise(exercise_id):
                exercise_id = generate_exercise_id()
        elif self.has_exercise(exercise_id):
            raise DuplicateExerciseError(exercise_id)

        exercise = Exercise(id=exercise_id, name=name, icon=icon)
        self.snapshot.exercises.append(exercise)
        logger.debug(f"[SCHEDULE] Added exercise {exercise_id} ({name})")
        self.save()
        return exercise

    def update_exercise(self, exercise_id: ExerciseId, name: str | None = None, icon: str | None = None) -> Exercise:
        """Edit an exercise's name and/or icon in place and save."""
        exercise = self._require_exercise(exercise_id)
        if name is not None:
            exercise.name = name
        if icon is not None:
            exercise.icon = icon
        logger.debug(f"[SCHEDULE] Updated exercise {exercise_id}")
        self.save()
        return exercise

    def remove_exercise(self, exercise_id: ExerciseId) -> Exercise:
        """Delete an exercise and remove it from every weekday's list.

        Overrides that mention the exercise are left as they are; the id
        stays there as inert data.

        Raises:
            UnknownExerciseError: If the exercise does not exist
            LastExerciseError: If it is the only exercise left
        """
        exercise = self._require_exercise(exercise_id)
        if len(self.snapshot.exercises) <= 1:
            raise LastExerciseError(exercise_id)

        self.snapshot.exercises = [e for e in self.snapshot.exercises if e.id != exercise_id]
        self.purge_from_weekly(exercise_id)
        logger.debug(f"[SCHEDULE] Removed exercise {exercise_id}")
        self.save()
        return exercise

    def purge_from_weekly(self, exercise_id: ExerciseId) -> None:
        """Remove exercise_id from all seven weekday lists (no save)."""
        weekly = self.snapshot.weekly_schedule
        for day in WEEKDAY_INDICES:
            weekly[day] = [eid for eid in weekly.get(day, []) if eid != exercise_id]

    # ------------------------------------------------------------------
    # Weekly recurrence
    # ------------------------------------------------------------------

    def weekly_for(self, weekday: int) -> list[ExerciseId]:
        """Exercise ids scheduled on weekday (empty when the day is missing)."""
        return list(self.snapshot.weekly_schedule.get(_validate_weekday(weekday), []))

    def set_weekly_schedule(self, weekday: int, exercise_ids: list[ExerciseId]) -> list[ExerciseId]:
        _validate_weekday(weekday)
        self.snapshot.weekly_schedule[weekday] = list(exercise_ids)
        logger.debug(f"[SCHEDULE] Weekly schedule for day {weekday} set to {exercise_ids}")
        self.save()
        return self.weekly_for(weekday)

    def set_weekly_exercise(self, weekday: int, exercise_id: ExerciseId, enabled: bool) -> list[ExerciseId]:
        """Add or remove one exercise on a weekday and save."""
        current = self.weekly_for(weekday)
        if enabled:
            if exercise_id not in current:
                current.append(exercise_id)
        else:
            current = [eid for eid in current if eid != exercise_id]
        return self.set_weekly_schedule(weekday, current)

    # ------------------------------------------------------------------
    # Overrides
    # ------------------------------------------------------------------

    def override_for(self, key: str) -> list[ExerciseId] | None:
        """Override for a day key, or None when the day follows the weekly plan."""
        override = self.snapshot.overrides.get(key)
        return list(override) if override is not None else None

    def set_override(self, key: str, exercise_ids: list[ExerciseId]) -> None:
        _validate_day_key(key)
        if not exercise_ids:
            raise ValueError(f"Override for {key} must not be empty; delete it instead")
        self.snapshot.overrides[key] = list(exercise_ids)
        logger.debug(f"[SCHEDULE] Override {key} set to {exercise_ids}")
        self.save()

    def delete_override(self, key: str) -> bool:
        """Remove an override. Returns True if one existed."""
        existed = self.snapshot.overrides.pop(key, None) is not None
        if existed:
            logger.debug(f"[SCHEDULE] Override {key} removed")
        self.save()
        return existed

    # ------------------------------------------------------------------
    # Tints
    # ------------------------------------------------------------------

    def set_exercise_tint(self, exercise_id: ExerciseId, color: str) -> None:
        self.snapshot.tint_by_exercise_id[exercise_id] = color
        self.save()

    def clear_exercise_tint(self, exercise_id: ExerciseId) -> None:
        self.snapshot.tint_by_exercise_id.pop(exercise_id, None)
        self.save()

    def set_tint_color(self, key: TintColorKey, value: str) -> None:
        """Set one of the semantic tint colors ("swim", "gym", "swimGym")."""
        field = _TINT_COLOR_FIELDS.get(key)
        if field is None:
            raise ValueError(f"Unknown tint color key '{key}', expected one of {sorted(_TINT_COLOR_FIELDS)}")
        setattr(self.snapshot.tint_colors, field, value)
        self.save()
