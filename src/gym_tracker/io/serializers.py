"""
JSON serialization for tracker data models.

Handles conversion between dataclasses and JSON-compatible dicts, parsing
of raw user input, and structural validation of persisted blobs and import
payloads. The wire format keeps the camelCase ``weightDisplay`` key so that
backups stay interchangeable with the browser version of the tracker.
"""

import json
import math
from typing import Any, Mapping

from ..core.config import DEFAULT_UNIT, SCHEMA_VERSION, UNITS
from ..core.models import SetEntry, TrackerState, Unit, validate_iso_date


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate and normalize date string to ISO format.

    Args:
        date_str: Date string to validate

    Returns:
        Normalized YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    try:
        validate_iso_date(date_str)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    return date_str


def validate_unit(unit: str) -> Unit:
    """
    Validate a unit name.

    Raises:
        ValidationError: If unit is not kg or lb
    """
    if unit not in UNITS:
        raise ValidationError(f"Invalid unit: {unit!r}. Must be one of {UNITS}")
    return unit  # type: ignore


def _to_number(raw: Any) -> float | None:
    """Parse raw input into a finite float, or None when it is not one."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return None
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    else:
        return None
    return value if math.isfinite(value) else None


def parse_weight(raw: Any) -> float:
    """
    Parse a weight from raw input (string or number).

    Raises:
        ValidationError: If the value is not a finite number
    """
    value = _to_number(raw)
    if value is None:
        raise ValidationError(f"Invalid weight: {raw!r}. Enter a number.")
    return value


def parse_reps(raw: Any) -> int:
    """
    Parse a rep count from raw input (string or number).

    Raises:
        ValidationError: If the value is not a positive whole number
    """
    value = _to_number(raw)
    if value is None or value <= 0 or not value.is_integer():
        raise ValidationError(f"Invalid reps: {raw!r}. Enter a positive whole number.")
    return int(value)


def set_entry_to_dict(entry: SetEntry) -> dict[str, Any]:
    """
    Convert SetEntry to JSON-compatible dict.

    Args:
        entry: SetEntry to convert

    Returns:
        Dict representation
    """
    return {
        "id": entry.id,
        "date": entry.date,
        "weightDisplay": entry.weight_display,
        "reps": entry.reps,
    }


def dict_to_set_entry(data: Mapping[str, Any]) -> SetEntry:
    """
    Convert dict to SetEntry.

    Args:
        data: Dict representation

    Returns:
        SetEntry instance

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, Mapping):
        raise ValidationError(f"Set entry must be an object, got {type(data).__name__}")

    for key in ("id", "date", "weightDisplay", "reps"):
        if key not in data:
            raise ValidationError(f"Set entry is missing '{key}'")

    entry_id = data["id"]
    if not isinstance(entry_id, str) or not entry_id:
        raise ValidationError(f"Invalid set id: {entry_id!r}")

    weight = data["weightDisplay"]
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        raise ValidationError(f"Invalid weightDisplay: {weight!r}")
    try:
        weight = float(weight)
    except OverflowError as e:
        raise ValidationError("Invalid weightDisplay: number too large") from e
    if not math.isfinite(weight):
        raise ValidationError(f"Invalid weightDisplay: {weight!r}")

    try:
        return SetEntry(
            id=entry_id,
            date=validate_date(data["date"]),
            weight_display=weight,
            reps=parse_reps(data["reps"]),
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


def state_to_dict(state: TrackerState) -> dict[str, Any]:
    """
    Convert TrackerState to JSON-compatible dict.

    Args:
        state: TrackerState to convert

    Returns:
        Dict representation
    """
    return {
        "version": state.version,
        "unit": state.unit,
        "exercises": {
            name: [set_entry_to_dict(e) for e in entries]
            for name, entries in state.exercises.items()
        },
    }


def dict_to_state(data: Any) -> TrackerState:
    """
    Convert dict to TrackerState.

    Only ``exercises`` is required; ``version`` and ``unit`` fall back to the
    current schema version and the default unit.

    Args:
        data: Dict representation

    Returns:
        TrackerState instance

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, Mapping):
        raise ValidationError("Expected a JSON object at the top level")
    if "exercises" not in data:
        raise ValidationError("Missing 'exercises' field")

    raw_exercises = data["exercises"]
    if not isinstance(raw_exercises, Mapping):
        raise ValidationError("'exercises' must map exercise names to lists of sets")

    version = data.get("version", SCHEMA_VERSION)
    if isinstance(version, bool) or not isinstance(version, int):
        raise ValidationError(f"Invalid version: {version!r}")

    unit = validate_unit(data.get("unit", DEFAULT_UNIT))

    exercises: dict[str, list[SetEntry]] = {}
    seen_ids: set[str] = set()
    for name, raw_entries in raw_exercises.items():
        if not isinstance(raw_entries, list):
            raise ValidationError(f"Sets for {name!r} must be a list")
        entries = []
        for raw in raw_entries:
            entry = dict_to_set_entry(raw)
            if entry.id in seen_ids:
                raise ValidationError(f"Duplicate set id: {entry.id}")
            seen_ids.add(entry.id)
            entries.append(entry)
        exercises[name] = entries

    return TrackerState(version=version, unit=unit, exercises=exercises)


def state_to_json(state: TrackerState, indent: int | None = None) -> str:
    """
    Serialize the full state.

    Args:
        state: State to serialize
        indent: Pretty-print indentation (exports use 2); None for compact

    Returns:
        JSON string
    """
    data = state_to_dict(state)
    if indent is None:
        return json.dumps(data, separators=(",", ":"))
    return json.dumps(data, indent=indent)


def json_to_state(text: str) -> TrackerState:
    """
    Deserialize a JSON document to a TrackerState.

    Raises:
        ValidationError: If JSON is invalid or data validation fails
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e

    return dict_to_state(data)
