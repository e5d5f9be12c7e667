"""
Tests for the Tracker mutation layer and its persistence.

Each test works on a throwaway data directory and a deterministic id factory.
"""

import itertools
import json
from datetime import datetime

import pytest

from gym_tracker.core.config import DEFAULT_EXERCISE, STORAGE_KEY
from gym_tracker.core.metrics import kg_to_lb
from gym_tracker.io.serializers import ValidationError, state_to_dict
from gym_tracker.io.tracker import ExerciseNotFoundError, Tracker
from gym_tracker.io.tracker_store import TrackerStore


def _ids():
    counter = itertools.count(1)
    return lambda: f"set-{next(counter)}"


@pytest.fixture
def store(tmp_path):
    return TrackerStore(tmp_path)


@pytest.fixture
def tracker(store):
    return Tracker(store, id_factory=_ids())


def _blob(store: TrackerStore) -> dict:
    return json.loads(store.path.read_text())


_HUGE_WEIGHT = "1" + "0" * 400


def _huge_weight_blob(digits: str = _HUGE_WEIGHT) -> str:
    return (
        '{"version": 1, "unit": "kg", "exercises": {"Row": '
        '[{"id": "x", "date": "2024-01-01", "weightDisplay": ' + digits + ', "reps": 5}]}}'
    )


# ===========================================================================
# First access
# ===========================================================================

class TestFirstAccess:

    def test_seeds_default_exercise_and_writes_it(self, store):
        tracker = Tracker(store)
        assert tracker.exercise_names() == [DEFAULT_EXERCISE]
        assert tracker.active_exercise == DEFAULT_EXERCISE
        assert tracker.unit == "kg"
        assert store.path.name == f"{STORAGE_KEY}.json"
        assert _blob(store) == {"version": 1, "unit": "kg", "exercises": {DEFAULT_EXERCISE: []}}

    def test_reloads_saved_state(self, store):
        first = Tracker(store, id_factory=_ids())
        first.add_exercise("Squat")
        first.add_set(140, 3, "2024-01-01")

        second = Tracker(store)
        assert second.exercise_names() == [DEFAULT_EXERCISE, "Squat"]
        assert [e.weight_display for e in second.entries("Squat")] == [140.0]

    def test_corrupt_blob_falls_back_without_overwriting(self, store):
        store.write("{not json")
        tracker = Tracker(store)
        assert tracker.exercise_names() == [DEFAULT_EXERCISE]
        assert tracker.entries() == []
        assert store.read() == "{not json"

    def test_invalid_blob_structure_falls_back(self, store):
        store.write(json.dumps({"unit": "kg"}))
        tracker = Tracker(store)
        assert tracker.exercise_names() == [DEFAULT_EXERCISE]

    def test_non_utf8_blob_falls_back(self, store):
        store.path.write_bytes(b"\xff\xfe garbage")
        tracker = Tracker(store)
        assert tracker.exercise_names() == [DEFAULT_EXERCISE]
        assert tracker.entries() == []
        assert store.path.read_bytes() == b"\xff\xfe garbage"

    def test_oversized_weight_falls_back(self, store):
        store.write(_huge_weight_blob())
        tracker = Tracker(store)
        assert tracker.exercise_names() == [DEFAULT_EXERCISE]

    def test_first_exercise_is_active(self, store):
        store.write(json.dumps({"version": 1, "unit": "lb", "exercises": {"Row": [], "Squat": []}}))
        tracker = Tracker(store)
        assert tracker.active_exercise == "Row"
        assert tracker.unit == "lb"


# ===========================================================================
# Exercises
# ===========================================================================

class TestExercises:

    def test_add_exercise_creates_and_selects(self, tracker, store):
        tracker.add_exercise("  Deadlift  ")
        assert tracker.active_exercise == "Deadlift"
        assert _blob(store)["exercises"]["Deadlift"] == []

    def test_blank_name_is_ignored(self, tracker):
        tracker.add_exercise("   ")
        assert tracker.exercise_names() == [DEFAULT_EXERCISE]

    def test_existing_name_only_selects(self, tracker, store):
        tracker.add_exercise("Squat")
        tracker.add_set(100, 5, "2024-01-01")
        tracker.add_exercise("Row")
        before = store.read()

        tracker.add_exercise("Squat")

        assert tracker.active_exercise == "Squat"
        assert len(tracker.entries()) == 1
        assert store.read() == before

    def test_names_are_case_sensitive(self, tracker):
        tracker.add_exercise("squat")
        tracker.add_exercise("Squat")
        assert tracker.exercise_names() == [DEFAULT_EXERCISE, "squat", "Squat"]

    def test_select_unknown_exercise_raises(self, tracker):
        with pytest.raises(ExerciseNotFoundError):
            tracker.select_exercise("Curl")

    def test_delete_exercise_removes_sets_and_selects_first(self, tracker, store):
        tracker.add_exercise("Squat")
        tracker.add_set(100, 5, "2024-01-01")

        assert tracker.delete_exercise("Squat") is True

        assert tracker.exercise_names() == [DEFAULT_EXERCISE]
        assert tracker.active_exercise == DEFAULT_EXERCISE
        assert "Squat" not in _blob(store)["exercises"]

    def test_deleting_last_exercise_reseeds_default(self, store):
        store.write(json.dumps({"exercises": {"Row": [
            {"id": "r1", "date": "2024-01-01", "weightDisplay": 60, "reps": 8},
        ]}}))
        tracker = Tracker(store)

        tracker.delete_exercise()

        assert tracker.exercise_names() == [DEFAULT_EXERCISE]
        assert tracker.entries() == []
        assert _blob(store)["exercises"] == {DEFAULT_EXERCISE: []}

    def test_deleting_the_default_alone_reseeds_it_empty(self, tracker):
        tracker.add_set(100, 5, "2024-01-01")
        tracker.delete_exercise(DEFAULT_EXERCISE)
        assert tracker.exercise_names() == [DEFAULT_EXERCISE]
        assert tracker.entries() == []

    def test_declined_confirmation_changes_nothing(self, store):
        tracker = Tracker(store, confirm=lambda _msg: False)
        tracker.add_exercise("Squat")
        before = store.read()

        assert tracker.delete_exercise("Squat") is False

        assert "Squat" in tracker.exercise_names()
        assert store.read() == before

    def test_confirmation_prompt_names_the_exercise(self, store):
        prompts = []
        tracker = Tracker(store, confirm=lambda msg: prompts.append(msg) or True)
        tracker.delete_exercise()
        assert prompts == [f'Delete exercise "{DEFAULT_EXERCISE}" and all its data?']

    def test_delete_unknown_exercise_raises(self, tracker):
        with pytest.raises(ExerciseNotFoundError):
            tracker.delete_exercise("Curl")


# ===========================================================================
# Sets
# ===========================================================================

class TestAddSet:

    def test_appends_one_entry_in_current_unit(self, tracker, store):
        entry = tracker.add_set(100, 5, "2024-01-01")

        assert entry.id == "set-1"
        assert tracker.entries() == [entry]
        assert _blob(store)["exercises"][DEFAULT_EXERCISE] == [
            {"id": "set-1", "date": "2024-01-01", "weightDisplay": 100.0, "reps": 5},
        ]

    def test_weight_is_stored_as_entered_in_pounds(self, tracker):
        tracker.set_unit("lb")
        entry = tracker.add_set("225", "5", "2024-01-01")
        assert entry.weight_display == 225.0

    def test_accepts_raw_string_input(self, tracker):
        entry = tracker.add_set(" 82.5 ", "8", "2024-01-01")
        assert entry.weight_display == 82.5
        assert entry.reps == 8

    def test_date_defaults_to_today(self, tracker):
        entry = tracker.add_set(100, 5)
        assert entry.date == datetime.now().strftime("%Y-%m-%d")

    def test_ids_are_unique(self, store):
        tracker = Tracker(store)
        ids = {tracker.add_set(100, 5, "2024-01-01").id for _ in range(5)}
        assert len(ids) == 5

    @pytest.mark.parametrize(
        "weight, reps",
        [
            ("abc", 5),
            ("", 5),
            (float("nan"), 5),
            (float("inf"), 5),
            (100, 0),
            (100, -3),
            (100, "2.5"),
            (100, "five"),
            (None, 5),
        ],
    )
    def test_invalid_input_raises_and_stores_nothing(self, tracker, store, weight, reps):
        before = store.read()
        with pytest.raises(ValidationError, match="Enter valid weight and reps"):
            tracker.add_set(weight, reps, "2024-01-01")
        assert tracker.entries() == []
        assert store.read() == before

    def test_invalid_date_raises(self, tracker):
        with pytest.raises(ValidationError):
            tracker.add_set(100, 5, "2024-13-01")
        assert tracker.entries() == []

    def test_goes_to_active_exercise(self, tracker):
        tracker.add_exercise("Squat")
        tracker.add_set(140, 3, "2024-01-01")
        assert tracker.entries(DEFAULT_EXERCISE) == []
        assert len(tracker.entries("Squat")) == 1


class TestDeleteSet:

    def test_removes_matching_entry(self, tracker, store):
        first = tracker.add_set(100, 5, "2024-01-01")
        second = tracker.add_set(105, 5, "2024-01-08")

        assert tracker.delete_set(first.id) is True

        assert tracker.entries() == [second]
        assert [e["id"] for e in _blob(store)["exercises"][DEFAULT_EXERCISE]] == [second.id]

    def test_unknown_id_leaves_blob_unchanged(self, tracker, store):
        tracker.add_set(100, 5, "2024-01-01")
        before = store.path.read_bytes()

        assert tracker.delete_set("missing") is False

        assert store.path.read_bytes() == before

    def test_only_searches_active_exercise(self, tracker):
        entry = tracker.add_set(100, 5, "2024-01-01")
        tracker.add_exercise("Squat")
        assert tracker.delete_set(entry.id) is False
        assert len(tracker.entries(DEFAULT_EXERCISE)) == 1


# ===========================================================================
# Units
# ===========================================================================

class TestSetUnit:

    def test_rewrites_every_entry_of_every_exercise(self, tracker, store):
        tracker.add_set(100, 5, "2024-01-01")
        tracker.add_exercise("Squat")
        tracker.add_set(140, 3, "2024-01-02")

        tracker.set_unit("lb")

        assert tracker.unit == "lb"
        assert tracker.entries(DEFAULT_EXERCISE)[0].weight_display == pytest.approx(kg_to_lb(100))
        assert tracker.entries("Squat")[0].weight_display == pytest.approx(kg_to_lb(140))
        blob = _blob(store)
        assert blob["unit"] == "lb"
        assert blob["exercises"]["Squat"][0]["weightDisplay"] == pytest.approx(kg_to_lb(140))

    def test_same_unit_is_noop(self, tracker, store):
        tracker.add_set(100, 5, "2024-01-01")
        before = store.read()
        tracker.set_unit("kg")
        assert store.read() == before

    def test_round_trip_reproduces_weights(self, tracker):
        for w in (20.0, 62.5, 100.0, 142.5):
            tracker.add_set(w, 5, "2024-01-01")

        tracker.set_unit("kg")
        tracker.set_unit("lb")
        tracker.set_unit("kg")

        weights = [e.weight_display for e in tracker.entries()]
        assert weights == pytest.approx([20.0, 62.5, 100.0, 142.5], abs=1e-9)

    def test_ids_dates_and_reps_survive(self, tracker):
        entry = tracker.add_set(100, 5, "2024-01-01")
        tracker.set_unit("lb")
        [converted] = tracker.entries()
        assert (converted.id, converted.date, converted.reps) == (entry.id, entry.date, entry.reps)

    def test_unknown_unit_raises(self, tracker):
        tracker.add_set(100, 5, "2024-01-01")
        with pytest.raises(ValidationError):
            tracker.set_unit("stone")
        assert tracker.unit == "kg"
        assert tracker.entries()[0].weight_display == 100.0


# ===========================================================================
# Import / export
# ===========================================================================

class TestBackup:

    def test_export_is_indented_full_state(self, tracker):
        tracker.add_set(100, 5, "2024-01-01")
        text = tracker.export_data()
        assert text.startswith("{\n  ")
        assert json.loads(text) == state_to_dict(tracker.state)

    def test_export_then_import_reproduces_state(self, tmp_path, tracker):
        tracker.add_set(100, 5, "2024-01-01")
        tracker.add_exercise("Squat")
        tracker.add_set(140, 3, "2024-01-02")
        tracker.set_unit("lb")
        exported = tracker.export_data()

        other = Tracker(TrackerStore(tmp_path / "other"))
        other.import_data(exported)

        assert other.state == tracker.state
        assert other.export_data() == exported

    def test_import_adopts_version_and_unit(self, tracker):
        tracker.import_data({"version": 1, "unit": "lb", "exercises": {"Row": []}})
        assert tracker.unit == "lb"
        assert tracker.exercise_names() == ["Row"]
        assert tracker.active_exercise == "Row"

    def test_import_empty_exercises_reseeds_default(self, tracker, store):
        tracker.add_set(100, 5, "2024-01-01")
        tracker.import_data({"exercises": {}})
        assert tracker.exercise_names() == [DEFAULT_EXERCISE]
        assert tracker.entries() == []
        assert _blob(store)["exercises"] == {DEFAULT_EXERCISE: []}

    @pytest.mark.parametrize(
        "payload",
        [
            {"version": 1, "unit": "kg"},
            {"exercises": []},
            {"exercises": {"Row": [{"id": "x", "date": "2024-01-01", "reps": 5}]}},
            {"exercises": {"Row": [{"id": "x", "date": "yesterday", "weightDisplay": 5, "reps": 5}]}},
            {"exercises": {}, "unit": "stone"},
            [1, 2, 3],
            "not json at all",
            {"exercises": {"Row": [
                {"id": "x", "date": "2024-01-01", "weightDisplay": int(_HUGE_WEIGHT), "reps": 5},
            ]}},
            _huge_weight_blob(),
            _huge_weight_blob("9" * 5000),
        ],
    )
    def test_malformed_payload_is_rejected(self, tracker, store, payload):
        entry = tracker.add_set(100, 5, "2024-01-01")
        before = store.read()

        with pytest.raises(ValidationError, match="Import failed"):
            tracker.import_data(payload)

        assert tracker.entries() == [entry]
        assert store.read() == before

    def test_duplicate_ids_are_rejected(self, tracker):
        sets = [{"id": "dup", "date": "2024-01-01", "weightDisplay": 100, "reps": 5}]
        with pytest.raises(ValidationError):
            tracker.import_data({"exercises": {"A": sets, "B": sets}})
