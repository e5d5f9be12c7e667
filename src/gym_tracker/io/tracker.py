"""
Tracker: the mutation layer over the persisted state.

Owns the loaded TrackerState and the active exercise selection. Every
successful mutation is followed by an explicit save through the
TrackerStore; failed or no-op operations never write.
"""

import json
import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Mapping

from ..core.config import DEFAULT_EXERCISE
from ..core.metrics import convert_weight
from ..core.models import SetEntry, TrackerState, Unit
from .serializers import (
    ValidationError,
    dict_to_state,
    parse_reps,
    parse_weight,
    state_to_json,
    validate_date,
    validate_unit,
)
from .tracker_store import TrackerStore

logger = logging.getLogger(__name__)


class ExerciseNotFoundError(KeyError):
    """Raised when selecting an exercise that does not exist."""

    def __str__(self) -> str:
        return f"Exercise not found: {self.args[0]}"


def _new_id() -> str:
    return str(uuid.uuid4())


def _today() -> str:
    return datetime.now().strftime("%Y-%m-%d")


class Tracker:
    """
    Workout log operations on an explicitly owned state.

    Args:
        store: Persistence backend; loaded once on construction
        id_factory: Returns a fresh globally unique id for new sets
        confirm: Yes/no prompt gating delete_exercise; None means always yes
        default_exercise: Name reseeded when no exercise is left
    """

    def __init__(
        self,
        store: TrackerStore,
        id_factory: Callable[[], str] = _new_id,
        confirm: Callable[[str], bool] | None = None,
        default_exercise: str = DEFAULT_EXERCISE,
    ):
        self.store = store
        self.id_factory = id_factory
        self.confirm = confirm
        self.default_exercise = default_exercise
        self.state: TrackerState = store.load_state()
        self.active_exercise: str = self._reset_selection()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def unit(self) -> Unit:
        return self.state.unit

    def exercise_names(self) -> list[str]:
        return list(self.state.exercises)

    def entries(self, name: str | None = None) -> list[SetEntry]:
        """Entries of ``name`` (default: active exercise), in logged order."""
        name = self.active_exercise if name is None else name
        if name not in self.state.exercises:
            raise ExerciseNotFoundError(name)
        return list(self.state.exercises[name])

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _reset_selection(self) -> str:
        """Select the first exercise, reseeding the default if none is left."""
        if not self.state.exercises:
            self.state.exercises[self.default_exercise] = []
        return next(iter(self.state.exercises))

    def _save(self) -> None:
        self.store.save_state(self.state)

    # ------------------------------------------------------------------
    # Exercises
    # ------------------------------------------------------------------

    def select_exercise(self, name: str) -> None:
        """
        Make an existing exercise active.

        Raises:
            ExerciseNotFoundError: If no exercise has that name
        """
        if name not in self.state.exercises:
            raise ExerciseNotFoundError(name)
        self.active_exercise = name

    def add_exercise(self, name: str) -> None:
        """
        Create an exercise and make it active.

        Blank names are ignored. An existing name is just selected.
        """
        name = name.strip()
        if not name:
            return
        if name in self.state.exercises:
            self.active_exercise = name
            return

        self.state.exercises[name] = []
        self.active_exercise = name
        self._save()
        logger.debug("Added exercise %r", name)

    def delete_exercise(
        self,
        name: str | None = None,
        confirm: Callable[[str], bool] | None = None,
    ) -> bool:
        """
        Delete an exercise and all of its sets.

        Args:
            name: Exercise to delete (default: active exercise)
            confirm: Overrides the tracker's confirmation prompt for this call

        Returns:
            True if deleted, False if the confirmation was declined

        Raises:
            ExerciseNotFoundError: If no exercise has that name
        """
        name = self.active_exercise if name is None else name
        if name not in self.state.exercises:
            raise ExerciseNotFoundError(name)

        prompt = confirm if confirm is not None else self.confirm
        if prompt is not None and not prompt(f'Delete exercise "{name}" and all its data?'):
            return False

        del self.state.exercises[name]
        self.active_exercise = self._reset_selection()
        self._save()
        logger.debug("Deleted exercise %r", name)
        return True

    # ------------------------------------------------------------------
    # Sets
    # ------------------------------------------------------------------

    def add_set(self, weight: Any, reps: Any, date: str | None = None) -> SetEntry:
        """
        Log a set on the active exercise.

        Args:
            weight: Weight in the current unit (number or raw input string)
            reps: Rep count (number or raw input string)
            date: ISO date; defaults to today

        Returns:
            The stored entry

        Raises:
            ValidationError: If weight, reps or date are invalid; nothing is stored
        """
        try:
            weight_value = parse_weight(weight)
            reps_value = parse_reps(reps)
        except ValidationError as e:
            raise ValidationError(f"Enter valid weight and reps. {e}") from e
        entry_date = validate_date(date) if date else _today()

        entry = SetEntry(
            id=self.id_factory(),
            date=entry_date,
            weight_display=weight_value,
            reps=reps_value,
        )
        self.state.exercises[self.active_exercise].append(entry)
        self._save()
        logger.debug("Logged %s %s x %d on %s", weight_value, self.unit, reps_value, entry_date)
        return entry

    def delete_set(self, entry_id: str) -> bool:
        """
        Remove a set from the active exercise.

        Returns:
            True if removed; False (and nothing written) if the id is unknown
        """
        entries = self.state.exercises[self.active_exercise]
        for i, entry in enumerate(entries):
            if entry.id == entry_id:
                del entries[i]
                self._save()
                return True
        return False

    # ------------------------------------------------------------------
    # Units
    # ------------------------------------------------------------------

    def set_unit(self, new_unit: str) -> None:
        """
        Switch the display unit, rewriting every stored weight.

        Each weight goes old unit -> kg -> new unit. The converted exercises
        are built in full before replacing the current ones.

        Raises:
            ValidationError: If new_unit is not kg or lb
        """
        new_unit = validate_unit(new_unit)
        old_unit = self.state.unit
        if new_unit == old_unit:
            return

        converted = {
            name: [
                SetEntry(
                    id=e.id,
                    date=e.date,
                    weight_display=convert_weight(e.weight_display, old_unit, new_unit),
                    reps=e.reps,
                )
                for e in entries
            ]
            for name, entries in self.state.exercises.items()
        }

        self.state.exercises = converted
        self.state.unit = new_unit
        self._save()
        logger.debug("Switched unit %s -> %s", old_unit, new_unit)

    # ------------------------------------------------------------------
    # Backup
    # ------------------------------------------------------------------

    def export_data(self) -> str:
        """Full state as indented JSON, ready to be written to a backup file."""
        return state_to_json(self.state, indent=2)

    def import_data(self, payload: Mapping[str, Any] | str) -> None:
        """
        Replace the whole state with an imported backup.

        Args:
            payload: Parsed object or JSON text; must contain ``exercises``

        Raises:
            ValidationError: If the payload is malformed; state is left untouched
        """
        if isinstance(payload, str):
            try:
                payload = json.loads(payload)
            except ValueError as e:
                raise ValidationError(f"Import failed: invalid JSON: {e}") from e

        try:
            incoming = dict_to_state(payload)
        except ValidationError as e:
            raise ValidationError(f"Import failed: {e}") from e

        self.state = incoming
        self.active_exercise = self._reset_selection()
        self._save()
        logger.debug("Imported %d exercises", len(self.state.exercises))
