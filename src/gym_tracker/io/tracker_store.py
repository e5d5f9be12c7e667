"""
JSON blob storage for the tracker state.

A tiny key-value store: the blob for a key lives in ``<data_dir>/<key>.json``
and always holds the full serialized TrackerState.
"""

import logging
from pathlib import Path

from ..core.config import DATA_DIR_NAME, DEFAULT_EXERCISE, DEFAULT_UNIT, SCHEMA_VERSION, STORAGE_KEY
from ..core.models import TrackerState
from .serializers import ValidationError, json_to_state, state_to_json

logger = logging.getLogger(__name__)


class TrackerStore:
    """
    Persists the tracker state as a single JSON blob.

    Reading a missing blob seeds and writes a fresh state. Reading a corrupt
    blob falls back to an empty state and leaves the file alone until the
    next write.
    """

    def __init__(
        self,
        data_dir: str | Path,
        key: str = STORAGE_KEY,
        default_unit: str = DEFAULT_UNIT,
        default_exercise: str = DEFAULT_EXERCISE,
    ):
        """
        Initialize the store.

        Args:
            data_dir: Directory holding the blob file
            key: Blob key, used as the file stem
            default_unit: Unit for a freshly seeded state
            default_exercise: Exercise name for a freshly seeded state
        """
        self.data_dir = Path(data_dir)
        self.key = key
        self.path = self.data_dir / f"{key}.json"
        self.default_unit = default_unit
        self.default_exercise = default_exercise

    def exists(self) -> bool:
        """Check if the blob has been written."""
        return self.path.exists()

    def read(self) -> str | None:
        """Return the raw blob, or None if it was never written."""
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def write(self, blob: str) -> None:
        """
        Replace the blob.

        Creates the data directory if needed.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.path.write_text(blob, encoding="utf-8")

    def seed_state(self) -> TrackerState:
        """State used on first access: default unit, one empty exercise."""
        return TrackerState(
            version=SCHEMA_VERSION,
            unit=self.default_unit,  # type: ignore[arg-type]
            exercises={self.default_exercise: []},
        )

    def _empty_state(self) -> TrackerState:
        """Safe fallback for a corrupt blob: no exercises, default unit."""
        return TrackerState(
            version=SCHEMA_VERSION,
            unit=self.default_unit,  # type: ignore[arg-type]
            exercises={},
        )

    def load_state(self) -> TrackerState:
        """
        Load the persisted state.

        Returns:
            The stored state; a freshly written seed if nothing is stored;
            an empty state if the stored blob cannot be parsed
        """
        try:
            raw = self.read()
        except UnicodeDecodeError as e:
            logger.warning("Ignoring unreadable store %s: %s", self.path, e)
            return self._empty_state()

        if raw is None:
            state = self.seed_state()
            self.save_state(state)
            logger.debug("Seeded new store at %s", self.path)
            return state

        try:
            return json_to_state(raw)
        except ValidationError as e:
            logger.warning("Ignoring unreadable store %s: %s", self.path, e)
            return self._empty_state()

    def save_state(self, state: TrackerState) -> None:
        """Serialize and write the full state."""
        self.write(state_to_json(state))
        logger.debug("Saved store to %s", self.path)


def get_default_data_dir() -> Path:
    """
    Get the default data directory.

    Returns:
        ~/.gym-tracker
    """
    return Path.home() / DATA_DIR_NAME
