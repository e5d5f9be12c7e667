"""
Data models for gym-tracker.

The whole persisted store is a single TrackerState: a unit tag plus a mapping
of exercise name to the set entries logged for it. Weights are kept in the
state's current display unit, so every weight read must be interpreted
against TrackerState.unit.
"""

import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from .config import DEFAULT_UNIT, SCHEMA_VERSION, UNITS

Unit = Literal["kg", "lb"]
ComparisonMetric = Literal["one_rep_max", "weight"]


def validate_iso_date(date_str: str) -> None:
    """Validate date string is ISO format YYYY-MM-DD."""
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValueError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValueError(f"Invalid date: {date_str}") from e


@dataclass
class SetEntry:
    """
    A single logged set: weight x reps on a given date.

    weight_display is expressed in the unit of the owning TrackerState.
    """

    id: str
    date: str  # ISO format: YYYY-MM-DD
    weight_display: float
    reps: int

    def __post_init__(self) -> None:
        """Validate entry data."""
        if not self.id:
            raise ValueError("id must be a non-empty string")
        validate_iso_date(self.date)
        if not math.isfinite(self.weight_display):
            raise ValueError(f"weight_display must be finite, got {self.weight_display}")
        if self.reps <= 0:
            raise ValueError(f"reps must be positive, got {self.reps}")


@dataclass
class TrackerState:
    """
    Root of the persisted store.

    exercises maps a case-sensitive exercise name to its entries. Entry order
    carries no meaning; views always re-sort by date.
    """

    version: int = SCHEMA_VERSION
    unit: Unit = DEFAULT_UNIT  # type: ignore[assignment]
    exercises: dict[str, list[SetEntry]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate state data."""
        if self.unit not in UNITS:
            raise ValueError(f"Invalid unit: {self.unit}. Must be one of {UNITS}")

    def all_entries(self) -> list[SetEntry]:
        """Every entry across every exercise."""
        return [entry for entries in self.exercises.values() for entry in entries]


@dataclass
class ProgressSummary:
    """
    Baseline / best / percent change for one exercise.

    baseline_kg and best_kg are in kilograms; convert for display only.
    """

    baseline_kg: float
    best_kg: float
    percent_change: float
    count: int

    @property
    def is_empty(self) -> bool:
        return self.count == 0
