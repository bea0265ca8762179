"""Schedule data model.

- Exercise: user-defined activity with an icon
- WeeklySchedule: weekday (0=Sunday..6=Saturday) -> ordered exercise ids
- Overrides: "YYYY-MM-DD" -> ordered exercise ids, superseding the weekly plan
- Tint configuration: semantic tint colors and per-exercise tints

All four live in a single ScheduleSnapshot that is loaded and saved as a unit.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ExerciseId = str
DayKey = str

# 0=Sunday .. 6=Saturday
WEEKDAY_INDICES: tuple[int, ...] = (0, 1, 2, 3, 4, 5, 6)
WEEKDAY_NAMES: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

TintColorKey = Literal["swim", "gym", "swimGym"]


class Exercise(BaseModel):
    """An exercise that can be scheduled on a day."""

    model_config = ConfigDict(validate_assignment=True)

    id: ExerciseId = Field(min_length=1, description="Unique, stable identifier")
    name: str = Field(description="Display name")
    icon: str = Field(description="Icon (usually an emoji)")


class TintColors(BaseModel):
    """Semantic tint colors: swim only, gym only and the swim+gym combination.

    Values are opaque color or gradient strings.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    swim: str
    gym: str
    swim_gym: str = Field(alias="swimGym")


class ScheduleSnapshot(BaseModel):
    """Everything the calendar persists."""

    model_config = ConfigDict(validate_assignment=True)

    exercises: list[Exercise]
    weekly_schedule: dict[int, list[ExerciseId]]
    overrides: dict[DayKey, list[ExerciseId]]
    tint_colors: TintColors
    tint_by_exercise_id: dict[ExerciseId, str]


LoadStatus = Literal["loaded", "defaulted"]


class LoadResult(BaseModel):
    """Outcome of reading the snapshot from storage.

    Attributes:
        snapshot: The loaded (possibly partly defaulted) snapshot
        status: "loaded" if every key was read as stored, "defaulted" otherwise
        defaulted_fields: Storage keys that were replaced by their defaults
    """

    snapshot: ScheduleSnapshot
    status: LoadStatus
    defaulted_fields: list[str] = Field(default_factory=list)
