"""Defaults used on first start and whenever a stored value is unusable.

Every function returns a fresh object so callers may mutate the result.
"""

from workout_calendar.schedule.types import Exercise, ExerciseId, ScheduleSnapshot, TintColors

DEFAULT_SWIM_TINT = "#4fc3f7"
DEFAULT_GYM_TINT = "#a259e6"


def default_exercises() -> list[Exercise]:
    return [
        Exercise(id="run", name="Run", icon="🏃"),
        Exercise(id="bike", name="Bike", icon="🚴"),
        Exercise(id="swim", name="Swim", icon="🌊"),
        Exercise(id="rest", name="Rest", icon="🛌"),
    ]


def default_weekly_schedule() -> dict[int, list[ExerciseId]]:
    # 0=Sunday; bike on Wednesday, rest on Thursday, run otherwise
    return {
        0: ["run"],
        1: ["run"],
        2: ["run"],
        3: ["bike"],
        4: ["rest"],
        5: ["run"],
        6: ["run"],
    }


def gradient_between(start_color: str, end_color: str) -> str:
    """Diagonal two-stop gradient used for the swim+gym combination."""
    return f"linear-gradient(135deg, {start_color} 0%, {end_color} 100%)"


def default_tint_colors() -> TintColors:
    return TintColors(
        swim=DEFAULT_SWIM_TINT,
        gym=DEFAULT_GYM_TINT,
        swim_gym=gradient_between(DEFAULT_SWIM_TINT, DEFAULT_GYM_TINT),
    )


def default_snapshot() -> ScheduleSnapshot:
    return ScheduleSnapshot(
        exercises=default_exercises(),
        weekly_schedule=default_weekly_schedule(),
        overrides={},
        tint_colors=default_tint_colors(),
        tint_by_exercise_id={},
    )
