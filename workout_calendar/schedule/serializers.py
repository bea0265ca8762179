"""(De)serialization boundary between ScheduleSnapshot and key-value storage.

Each storage key is decoded and validated on its own. A key that is absent,
unparseable or of the wrong container type falls back to its default without
affecting the other keys. Inside a key, entries are validated one by one: a
bad entry is dropped (or read as empty) and its neighbours are kept.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable
from typing import Any, TypeVar

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from workout_calendar.schedule.defaults import (
    default_exercises,
    default_tint_colors,
    default_weekly_schedule,
)
from workout_calendar.schedule.types import (
    WEEKDAY_INDICES,
    Exercise,
    ExerciseId,
    ScheduleSnapshot,
    TintColors,
)

KEY_EXERCISES = "exercises"
KEY_WEEKLY_SCHEDULE = "weeklySchedule"
KEY_OVERRIDES = "overrides"
KEY_TINT_COLORS = "tintColors"
KEY_TINT_BY_EXERCISE_ID = "tintByExerciseId"

STORAGE_KEYS: tuple[str, ...] = (
    KEY_EXERCISES,
    KEY_WEEKLY_SCHEDULE,
    KEY_OVERRIDES,
    KEY_TINT_COLORS,
    KEY_TINT_BY_EXERCISE_ID,
)

DAY_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

T = TypeVar("T")


class MalformedValueError(ValueError):
    """A stored value could not be turned into its record type."""


_exercise_adapter = TypeAdapter(Exercise)
_id_list_adapter = TypeAdapter(list[ExerciseId])


def _parse_json(raw: str) -> Any:
    try:
        value = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise MalformedValueError(f"not valid JSON: {e}") from e
    if value is None:
        raise MalformedValueError("stored value is null")
    return value


def _parse_container(raw: str, container: type) -> Any:
    value = _parse_json(raw)
    if not isinstance(value, container):
        raise MalformedValueError(f"expected a JSON {container.__name__}, got {type(value).__name__}")
    return value


def _id_list(value: Any) -> list[ExerciseId] | None:
    """Validate one list of exercise ids; None when it is unusable."""
    try:
        return _id_list_adapter.validate_python(value)
    except ValidationError:
        return None


def decode_exercises(raw: str) -> list[Exercise]:
    """Decode the exercise list record by record.

    Invalid records and duplicate ids are dropped individually. A list with no
    usable record is malformed, since the schedule needs at least one exercise.
    """
    entries = _parse_container(raw, list)

    seen: set[str] = set()
    exercises: list[Exercise] = []
    for index, entry in enumerate(entries):
        try:
            exercise = _exercise_adapter.validate_python(entry)
        except ValidationError as e:
            logger.warning(f"[SCHEDULE] Dropping invalid exercise at position {index}: {e.error_count()} error(s)")
            continue
        if exercise.id in seen:
            logger.warning(f"[SCHEDULE] Dropping duplicate exercise id '{exercise.id}'")
            continue
        seen.add(exercise.id)
        exercises.append(exercise)

    if not exercises:
        raise MalformedValueError("no usable exercise records")
    return exercises


def decode_weekly_schedule(raw: str) -> dict[int, list[ExerciseId]]:
    """Decode the weekly plan.

    Weekday keys may be strings or ints; an array of seven lists is accepted
    too. Keys outside 0..6 are dropped. A weekday whose value is null or not a
    list of ids reads as empty. Missing weekdays stay missing and read as empty.
    """
    value = _parse_json(raw)
    if isinstance(value, list):
        items = enumerate(value)
    elif isinstance(value, dict):
        items = value.items()
    else:
        raise MalformedValueError(f"expected a JSON object or array, got {type(value).__name__}")

    weekly: dict[int, list[ExerciseId]] = {}
    for raw_day, raw_ids in items:
        try:
            day = int(raw_day)
        except ValueError:
            logger.warning(f"[SCHEDULE] Ignoring weekly schedule entry with non-numeric weekday '{raw_day}'")
            continue
        if day not in WEEKDAY_INDICES:
            logger.warning(f"[SCHEDULE] Ignoring weekly schedule entry for weekday {day}")
            continue
        ids = [] if raw_ids is None else _id_list(raw_ids)
        if ids is None:
            logger.warning(f"[SCHEDULE] Weekly schedule for weekday {day} is not a list of ids, reading as empty")
            ids = []
        weekly[day] = ids
    return weekly


def decode_overrides(raw: str) -> dict[str, list[ExerciseId]]:
    """Decode per-date overrides; bad date keys and bad id lists are dropped."""
    value = _parse_container(raw, dict)

    overrides: dict[str, list[ExerciseId]] = {}
    for key, raw_ids in value.items():
        if not DAY_KEY_PATTERN.match(key):
            logger.warning(f"[SCHEDULE] Ignoring override with malformed date key '{key}'")
            continue
        ids = _id_list(raw_ids)
        if ids is None:
            logger.warning(f"[SCHEDULE] Ignoring override for {key}: value is not a list of ids")
            continue
        overrides[key] = ids
    return overrides


def decode_tint_colors(raw: str) -> TintColors:
    """Decode semantic tint colors; missing entries are filled from defaults."""
    value = _parse_container(raw, dict)
    merged = default_tint_colors().model_dump(by_alias=True)
    merged.update({k: v for k, v in value.items() if k in merged})
    try:
        return TintColors.model_validate(merged)
    except ValidationError as e:
        raise MalformedValueError(str(e)) from e


def decode_tint_by_exercise_id(raw: str) -> dict[ExerciseId, str]:
    value = _parse_container(raw, dict)

    tints: dict[ExerciseId, str] = {}
    for exercise_id, color in value.items():
        if not isinstance(color, str):
            logger.warning(f"[SCHEDULE] Ignoring tint for '{exercise_id}': color is not a string")
            continue
        tints[exercise_id] = color
    return tints


def encode_snapshot(snapshot: ScheduleSnapshot) -> dict[str, str]:
    """Serialize a snapshot into one JSON string per storage key."""
    return {
        KEY_EXERCISES: json.dumps([e.model_dump() for e in snapshot.exercises], ensure_ascii=False),
        KEY_WEEKLY_SCHEDULE: json.dumps(
            {str(day): list(ids) for day, ids in sorted(snapshot.weekly_schedule.items())},
            ensure_ascii=False,
        ),
        KEY_OVERRIDES: json.dumps(snapshot.overrides, ensure_ascii=False, sort_keys=True),
        KEY_TINT_COLORS: json.dumps(snapshot.tint_colors.model_dump(by_alias=True), ensure_ascii=False),
        KEY_TINT_BY_EXERCISE_ID: json.dumps(snapshot.tint_by_exercise_id, ensure_ascii=False),
    }


def decode_field(key: str, raw: str | None, decoder: Callable[[str], T], default: Callable[[], T]) -> tuple[T, bool]:
    """Decode one stored key, falling back to its default.

    Returns:
        Tuple of (value, defaulted)
    """
    if raw is None:
        logger.info(f"[SCHEDULE] No stored value for '{key}', using default")
        return default(), True
    try:
        return decoder(raw), False
    except MalformedValueError as e:
        logger.warning(f"[SCHEDULE] Stored value for '{key}' is malformed, using default: {e}")
        return default(), True


DECODERS: dict[str, tuple[Callable[[str], Any], Callable[[], Any]]] = {
    KEY_EXERCISES: (decode_exercises, default_exercises),
    KEY_WEEKLY_SCHEDULE: (decode_weekly_schedule, default_weekly_schedule),
    KEY_OVERRIDES: (decode_overrides, dict),
    KEY_TINT_COLORS: (decode_tint_colors, default_tint_colors),
    KEY_TINT_BY_EXERCISE_ID: (decode_tint_by_exercise_id, dict),
}
