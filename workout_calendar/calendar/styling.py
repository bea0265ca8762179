"""Visual styling for calendar cells.

Only past days are highlighted. Today and future days never get activity
tinting, whatever is scheduled on them.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from workout_calendar.calendar.grid import DayCell
from workout_calendar.config.settings import settings
from workout_calendar.utils.color import hex_to_rgba

TINT_ALPHA = 0.18
GRADIENT_ANGLE = "135deg"

CLASS_CELL = "calendar-cell"
CLASS_OVERFLOW = "calendar-cell--overflow"
CLASS_TODAY = "today"
CLASS_PAST = "calendar-cell--past"
CLASS_ACTIVE = "calendar-cell--active"


def is_active(exercises: Sequence[str], is_past: bool, rest_id: str | None = None) -> bool:
    """True for a past day with something scheduled other than just rest."""
    rest_id = rest_id or settings.rest_exercise_id
    if not is_past or not exercises:
        return False
    return not (len(exercises) == 1 and exercises[0] == rest_id)


def background_tint(
    exercises: Sequence[str],
    is_past: bool,
    tint_by_exercise_id: Mapping[str, str],
    alpha: float = TINT_ALPHA,
) -> str | None:
    """Background for a past day, derived from per-exercise tints.

    A single tinted exercise gives its translucent color. Several exercises
    give a diagonal gradient in list order, but only when every one of them
    has a tint; a partly tinted day gets no background at all.

    Returns:
        CSS color or gradient string, or None for no background override
    """
    if not is_past or not exercises:
        return None

    if len(exercises) == 1:
        tint = tint_by_exercise_id.get(exercises[0])
        return hex_to_rgba(tint, alpha) if tint else None

    tints = [tint_by_exercise_id.get(eid) for eid in exercises]
    if not all(tints):
        return None
    stops = ", ".join(hex_to_rgba(tint, alpha) for tint in tints)
    return f"linear-gradient({GRADIENT_ANGLE}, {stops})"


def cell_classes(cell: DayCell, exercises: Sequence[str], rest_id: str | None = None) -> list[str]:
    """CSS classes for a grid cell."""
    classes = [CLASS_CELL]
    if cell.overflow:
        classes.append(CLASS_OVERFLOW)
    if cell.is_today:
        classes.append(CLASS_TODAY)
    if cell.is_past:
        classes.append(CLASS_PAST)
    if is_active(exercises, cell.is_past, rest_id):
        classes.append(CLASS_ACTIVE)
    return classes
