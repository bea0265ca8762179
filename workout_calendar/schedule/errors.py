"""Schedule error types.

Malformed persisted data is never an error (it falls back to defaults); these
cover caller mistakes and persistence faults only.
"""


class ScheduleError(Exception):
    """Base class for schedule errors."""


class UnknownExerciseError(ScheduleError, KeyError):
    """Raised when an operation names an exercise id that does not exist."""

    def __init__(self, exercise_id: str):
        self.exercise_id = exercise_id
        super().__init__(f"Unknown exercise id: {exercise_id}")

    def __str__(self) -> str:
        return f"Unknown exercise id: {self.exercise_id}"


class DuplicateExerciseError(ScheduleError, ValueError):
    """Raised when adding an exercise whose id is already taken."""

    def __init__(self, exercise_id: str):
        self.exercise_id = exercise_id
        super().__init__(f"Exercise id already exists: {exercise_id}")


class LastExerciseError(ScheduleError):
    """Raised when removing the only remaining exercise."""

    def __init__(self, exercise_id: str):
        self.exercise_id = exercise_id
        super().__init__(f"Cannot remove '{exercise_id}': at least one exercise must remain")


class PersistenceError(ScheduleError):
    """Raised after a save or reset in which one or more keys could not be written.

    Attributes:
        failed_keys: Storage keys whose write or delete was rejected
        causes: Backend error per failed key
    """

    def __init__(self, failed_keys: list[str], causes: dict[str, Exception]):
        self.failed_keys = failed_keys
        self.causes = causes
        super().__init__(f"Failed to persist keys: {', '.join(failed_keys)}")
