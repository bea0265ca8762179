"""Tests for ScheduleStore load/save and mutations."""

import json

import pytest

from workout_calendar.schedule.errors import (
    DuplicateExerciseError,
    LastExerciseError,
    PersistenceError,
    UnknownExerciseError,
)
from workout_calendar.schedule.serializers import STORAGE_KEYS
from workout_calendar.schedule.store import ScheduleStore, generate_exercise_id
from workout_calendar.storage.base import StorageWriteError
from workout_calendar.storage.memory import MemoryStorage


class FlakyStorage(MemoryStorage):
    """MemoryStorage that rejects writes to selected keys."""

    def __init__(self, failing_keys: set[str]):
        super().__init__()
        self.failing_keys = failing_keys
        self.attempted: list[str] = []

    def set(self, key: str, value: str) -> None:
        self.attempted.append(key)
        if key in self.failing_keys:
            raise StorageWriteError(key, "quota exceeded")
        super().set(key, value)


class TestLoad:
    """Tests for reading the snapshot with per-key defaults."""

    def test_empty_storage_uses_defaults(self, memory_storage: MemoryStorage):
        store = ScheduleStore(memory_storage)
        result = store.load()

        assert result.status == "defaulted"
        assert result.defaulted_fields == list(STORAGE_KEYS)
        assert [e.id for e in store.exercises] == ["run", "bike", "swim", "rest"]
        assert store.snapshot.weekly_schedule == {
            0: ["run"],
            1: ["run"],
            2: ["run"],
            3: ["bike"],
            4: ["rest"],
            5: ["run"],
            6: ["run"],
        }
        assert store.snapshot.overrides == {}
        assert store.snapshot.tint_by_exercise_id == {}

    def test_default_tint_colors(self, store: ScheduleStore):
        tints = store.snapshot.tint_colors
        assert tints.swim == "#4fc3f7"
        assert tints.gym == "#a259e6"
        assert tints.swim_gym == "linear-gradient(135deg, #4fc3f7 0%, #a259e6 100%)"

    def test_saved_snapshot_loads_cleanly(self, memory_storage: MemoryStorage, store: ScheduleStore):
        store.save()
        result = ScheduleStore(memory_storage).load()
        assert result.status == "loaded"
        assert result.defaulted_fields == []
        assert result.snapshot == store.snapshot

    def test_malformed_key_defaults_only_that_key(self, memory_storage: MemoryStorage, store: ScheduleStore):
        """One unparseable key does not discard the others."""
        store.set_override("2024-01-17", ["swim"])
        memory_storage.set("exercises", "{not json")

        reloaded = ScheduleStore(memory_storage)
        result = reloaded.load()

        assert result.status == "defaulted"
        assert result.defaulted_fields == ["exercises"]
        assert reloaded.override_for("2024-01-17") == ["swim"]
        assert [e.id for e in reloaded.exercises] == ["run", "bike", "swim", "rest"]

    def test_wrong_shape_is_defaulted(self, memory_storage: MemoryStorage):
        memory_storage.set("overrides", json.dumps(["2024-01-17"]))
        memory_storage.set("tintByExerciseId", json.dumps(["swim", "#000"]))
        memory_storage.set("weeklySchedule", json.dumps("run"))
        result = ScheduleStore(memory_storage).load()
        assert {"weeklySchedule", "overrides", "tintByExerciseId"} <= set(result.defaulted_fields)
        assert result.snapshot.overrides == {}
        assert result.snapshot.weekly_schedule[3] == ["bike"]

    def test_null_value_is_defaulted(self, memory_storage: MemoryStorage):
        memory_storage.set("exercises", "null")
        result = ScheduleStore(memory_storage).load()
        assert "exercises" in result.defaulted_fields
        assert len(result.snapshot.exercises) == 4

    def test_weekly_schedule_accepts_string_and_int_keys(self, memory_storage: MemoryStorage):
        memory_storage.set("weeklySchedule", json.dumps({"1": ["swim"], "3": ["run", "bike"], "9": ["run"]}))
        store = ScheduleStore(memory_storage)
        result = store.load()
        assert "weeklySchedule" not in result.defaulted_fields
        assert store.snapshot.weekly_schedule == {1: ["swim"], 3: ["run", "bike"]}
        assert store.weekly_for(0) == []

    def test_weekly_schedule_accepts_array(self, memory_storage: MemoryStorage):
        memory_storage.set("weeklySchedule", json.dumps([[], ["run"], [], ["bike"]]))
        store = ScheduleStore.open(memory_storage)
        assert store.weekly_for(1) == ["run"]
        assert store.weekly_for(3) == ["bike"]
        assert store.weekly_for(6) == []

    def test_partial_tint_colors_are_filled(self, memory_storage: MemoryStorage):
        memory_storage.set("tintColors", json.dumps({"swim": "#000"}))
        store = ScheduleStore.open(memory_storage)
        assert store.snapshot.tint_colors.swim == "#000"
        assert store.snapshot.tint_colors.gym == "#a259e6"

    def test_malformed_override_keys_are_dropped(self, memory_storage: MemoryStorage):
        memory_storage.set("overrides", json.dumps({"2024-1-5": ["run"], "2024-01-05": ["swim"]}))
        store = ScheduleStore.open(memory_storage)
        assert store.snapshot.overrides == {"2024-01-05": ["swim"]}


class TestLoadBadEntries:
    """A bad entry inside a stored key is dropped without losing its neighbours."""

    def test_invalid_exercise_record_is_dropped(self, memory_storage: MemoryStorage):
        memory_storage.set(
            "exercises",
            json.dumps([{"id": "yoga", "name": "Yoga", "icon": "🧘"}, {"id": "pilates", "name": "Pilates"}, "swim"]),
        )
        store = ScheduleStore(memory_storage)
        result = store.load()

        assert "exercises" not in result.defaulted_fields
        assert [e.id for e in store.exercises] == ["yoga"]

    def test_exercises_without_any_valid_record_are_defaulted(self, memory_storage: MemoryStorage):
        memory_storage.set("exercises", json.dumps([{"id": "", "name": "Blank", "icon": "?"}]))
        result = ScheduleStore(memory_storage).load()
        assert "exercises" in result.defaulted_fields
        assert [e.id for e in result.snapshot.exercises] == ["run", "bike", "swim", "rest"]

    def test_null_weekday_reads_as_empty(self, memory_storage: MemoryStorage):
        memory_storage.set("weeklySchedule", json.dumps({"0": ["swim"], "1": None, "2": "run", "3": [1, 2]}))
        store = ScheduleStore(memory_storage)
        result = store.load()

        assert "weeklySchedule" not in result.defaulted_fields
        assert store.snapshot.weekly_schedule == {0: ["swim"], 1: [], 2: [], 3: []}

    def test_null_weekday_in_array_form(self, memory_storage: MemoryStorage):
        memory_storage.set("weeklySchedule", json.dumps([["swim"], None, ["bike"]]))
        store = ScheduleStore.open(memory_storage)
        assert store.weekly_for(0) == ["swim"]
        assert store.weekly_for(1) == []
        assert store.weekly_for(2) == ["bike"]

    def test_bad_override_value_is_dropped(self, memory_storage: MemoryStorage):
        memory_storage.set(
            "overrides",
            json.dumps({"2024-01-10": ["swim"], "2024-01-11": None, "2024-01-12": {"ids": ["run"]}}),
        )
        store = ScheduleStore(memory_storage)
        result = store.load()

        assert "overrides" not in result.defaulted_fields
        assert store.snapshot.overrides == {"2024-01-10": ["swim"]}

    def test_non_string_tint_is_dropped(self, memory_storage: MemoryStorage):
        memory_storage.set("tintByExerciseId", json.dumps({"swim": "#4fc3f7", "run": 5, "bike": None}))
        store = ScheduleStore(memory_storage)
        result = store.load()

        assert "tintByExerciseId" not in result.defaulted_fields
        assert store.snapshot.tint_by_exercise_id == {"swim": "#4fc3f7"}

    def test_next_save_keeps_surviving_entries(self, memory_storage: MemoryStorage):
        memory_storage.set("overrides", json.dumps({"2024-01-10": ["swim"], "2024-01-11": None}))
        store = ScheduleStore.open(memory_storage)

        store.set_override("2024-01-12", ["run"])

        assert json.loads(memory_storage.get("overrides")) == {"2024-01-10": ["swim"], "2024-01-12": ["run"]}


class TestSave:
    def test_writes_all_five_keys(self, memory_storage: MemoryStorage, store: ScheduleStore):
        store.save()
        assert sorted(memory_storage.keys()) == sorted(STORAGE_KEYS)
        assert json.loads(memory_storage.get("weeklySchedule"))["3"] == ["bike"]
        assert json.loads(memory_storage.get("tintColors"))["swimGym"].startswith("linear-gradient")

    def test_failed_write_does_not_stop_others(self):
        """Every key is attempted; failures are reported together afterwards."""
        storage = FlakyStorage({"weeklySchedule", "tintColors"})
        store = ScheduleStore(storage)

        with pytest.raises(PersistenceError, match="weeklySchedule, tintColors") as exc_info:
            store.save()

        assert storage.attempted == list(STORAGE_KEYS)
        assert exc_info.value.failed_keys == ["weeklySchedule", "tintColors"]
        assert storage.get("overrides") == "{}"
        assert storage.get("weeklySchedule") is None

    def test_save_replaces_snapshot(self, memory_storage: MemoryStorage, store: ScheduleStore):
        other = store.snapshot.model_copy(deep=True)
        other.overrides["2024-02-01"] = ["swim"]
        store.save(other)
        assert store.snapshot is other
        assert ScheduleStore.open(memory_storage).override_for("2024-02-01") == ["swim"]


class TestReset:
    def test_reset_restores_defaults(self, memory_storage: MemoryStorage, store: ScheduleStore):
        store.add_exercise("Yoga", "🧘", exercise_id="yoga")
        store.set_override("2024-01-17", ["yoga"])
        memory_storage.set("unrelated", "keep me")

        result = store.reset()

        assert result.defaulted_fields == list(STORAGE_KEYS)
        assert [e.id for e in store.exercises] == ["run", "bike", "swim", "rest"]
        assert store.snapshot.overrides == {}
        assert memory_storage.keys() == ["unrelated"]

    def test_reset_on_empty_storage(self, memory_storage: MemoryStorage):
        result = ScheduleStore(memory_storage).reset()
        assert result.status == "defaulted"
        assert memory_storage.keys() == []

    def test_failed_delete_does_not_stop_others(self, store: ScheduleStore, memory_storage: MemoryStorage):
        original_delete = memory_storage.delete
        attempted: list[str] = []

        def delete(key: str) -> None:
            attempted.append(key)
            if key == "overrides":
                raise StorageWriteError(key, "read-only")
            original_delete(key)

        memory_storage.delete = delete
        store.save()

        with pytest.raises(PersistenceError, match="overrides") as exc_info:
            store.reset()

        assert attempted == list(STORAGE_KEYS)
        assert exc_info.value.failed_keys == ["overrides"]
        assert memory_storage.keys() == ["overrides"]


class TestExercises:
    def test_add_exercise_defaults(self, store: ScheduleStore):
        exercise = store.add_exercise()
        assert exercise.name == "New"
        assert exercise.icon == "❓"
        assert exercise.id.startswith("ex")
        assert len(exercise.id) == 8
        assert store.exercises[-1] is exercise

    def test_add_exercise_with_id(self, memory_storage: MemoryStorage, store: ScheduleStore):
        store.add_exercise(name="Gym", icon="🏋️", exercise_id="gym")
        assert ScheduleStore.open(memory_storage).get_exercise("gym").name == "Gym"

    def test_add_duplicate_id_raises(self, store: ScheduleStore):
        with pytest.raises(DuplicateExerciseError, match="run"):
            store.add_exercise(exercise_id="run")

    def test_generated_ids_are_base36(self):
        exercise_id = generate_exercise_id()
        assert exercise_id[:2] == "ex"
        assert all(c.isdigit() or c.islower() for c in exercise_id[2:])

    def test_update_exercise(self, memory_storage: MemoryStorage, store: ScheduleStore):
        store.update_exercise("run", name="Jog")
        store.update_exercise("run", icon="🐢")
        reloaded = ScheduleStore.open(memory_storage).get_exercise("run")
        assert (reloaded.name, reloaded.icon) == ("Jog", "🐢")

    def test_update_unknown_raises(self, store: ScheduleStore):
        with pytest.raises(UnknownExerciseError):
            store.update_exercise("yoga", name="Yoga")

    def test_remove_cascades_to_weekly(self, store: ScheduleStore):
        """No weekday keeps the id once deletion completes."""
        store.set_weekly_exercise(1, "bike", True)
        store.remove_exercise("bike")
        assert store.get_exercise("bike") is None
        assert all("bike" not in store.weekly_for(day) for day in range(7))
        assert store.weekly_for(1) == ["run"]

    def test_remove_keeps_overrides(self, store: ScheduleStore):
        store.set_override("2024-01-10", ["bike"])
        store.remove_exercise("bike")
        assert store.override_for("2024-01-10") == ["bike"]

    def test_cannot_remove_last_exercise(self, store: ScheduleStore):
        for exercise_id in ("run", "bike", "swim"):
            store.remove_exercise(exercise_id)
        with pytest.raises(LastExerciseError):
            store.remove_exercise("rest")

    def test_remove_unknown_raises(self, store: ScheduleStore):
        with pytest.raises(UnknownExerciseError, match="yoga"):
            store.remove_exercise("yoga")


class TestWeeklySchedule:
    def test_set_weekly_exercise(self, store: ScheduleStore):
        assert store.set_weekly_exercise(0, "swim", True) == ["run", "swim"]
        assert store.set_weekly_exercise(0, "swim", True) == ["run", "swim"]
        assert store.set_weekly_exercise(0, "run", False) == ["swim"]

    def test_set_weekly_schedule(self, memory_storage: MemoryStorage, store: ScheduleStore):
        store.set_weekly_schedule(6, ["swim", "bike"])
        assert ScheduleStore.open(memory_storage).weekly_for(6) == ["swim", "bike"]

    @pytest.mark.parametrize("weekday", [-1, 7])
    def test_invalid_weekday(self, store: ScheduleStore, weekday: int):
        with pytest.raises(ValueError, match="Weekday"):
            store.weekly_for(weekday)


class TestOverrides:
    def test_set_override_rejects_empty(self, store: ScheduleStore):
        with pytest.raises(ValueError, match="must not be empty"):
            store.set_override("2024-01-17", [])

    def test_set_override_rejects_bad_key(self, store: ScheduleStore):
        with pytest.raises(ValueError, match="Invalid day key"):
            store.set_override("2024-1-17", ["run"])

    def test_delete_override(self, store: ScheduleStore):
        store.set_override("2024-01-17", ["run"])
        assert store.delete_override("2024-01-17") is True
        assert store.delete_override("2024-01-17") is False


class TestTints:
    def test_exercise_tint(self, memory_storage: MemoryStorage, store: ScheduleStore):
        store.set_exercise_tint("swim", "#4fc3f7")
        assert ScheduleStore.open(memory_storage).snapshot.tint_by_exercise_id == {"swim": "#4fc3f7"}
        store.clear_exercise_tint("swim")
        assert ScheduleStore.open(memory_storage).snapshot.tint_by_exercise_id == {}

    def test_set_tint_color(self, memory_storage: MemoryStorage, store: ScheduleStore):
        store.set_tint_color("swimGym", "linear-gradient(90deg, red, blue)")
        store.set_tint_color("gym", "#123456")
        tints = ScheduleStore.open(memory_storage).snapshot.tint_colors
        assert tints.swim_gym == "linear-gradient(90deg, red, blue)"
        assert tints.gym == "#123456"

    def test_unknown_tint_color_key(self, store: ScheduleStore):
        with pytest.raises(ValueError, match="Unknown tint color key"):
            store.set_tint_color("run", "#fff")
