"""
YAML -> typed settings loader.

Loads defaults from defaults.yaml (bundled with the package) and merges user
overrides from ~/.gym-tracker/config.yaml.

Usage:
    from gym_tracker.core.config_loader import load_settings
    settings = load_settings()
    settings.comparison_metric  # "one_rep_max"

If the user override file exists but cannot be parsed, a warning is logged
and the file is ignored.
"""

from __future__ import annotations

import importlib.resources
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .config import (
    COMPARISON_METRICS,
    DATA_DIR_NAME,
    DEFAULT_COMPARISON_METRIC,
    DEFAULT_EXERCISE,
    DEFAULT_UNIT,
    UNITS,
)

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """User-adjustable settings, already validated."""

    default_unit: str = DEFAULT_UNIT
    default_exercise: str = DEFAULT_EXERCISE
    comparison_metric: str = DEFAULT_COMPARISON_METRIC
    data_dir: Path | None = None


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; return {} if it is unreadable or not a mapping."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring config file %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _to_settings(data: dict[str, Any]) -> Settings:
    """Build Settings, replacing invalid values with the built-in defaults."""
    settings = Settings()

    unit = data.get("default_unit")
    if unit in UNITS:
        settings.default_unit = unit
    elif unit is not None:
        logger.warning("Unknown default_unit %r, using %s", unit, DEFAULT_UNIT)

    exercise = data.get("default_exercise")
    if isinstance(exercise, str) and exercise.strip():
        settings.default_exercise = exercise.strip()

    metric = data.get("comparison_metric")
    if metric in COMPARISON_METRICS:
        settings.comparison_metric = metric
    elif metric is not None:
        logger.warning("Unknown comparison_metric %r, using %s", metric, DEFAULT_COMPARISON_METRIC)

    data_dir = data.get("data_dir")
    if data_dir:
        settings.data_dir = Path(str(data_dir)).expanduser()

    return settings


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_yaml_path() -> Path:
    """Return the path to the bundled defaults.yaml."""
    ref = importlib.resources.files("gym_tracker").joinpath("defaults.yaml")
    with importlib.resources.as_file(ref) as p:
        return p


def get_user_yaml_path() -> Path | None:
    """Return ~/.gym-tracker/config.yaml if it exists, else None."""
    p = Path.home() / DATA_DIR_NAME / "config.yaml"
    return p if p.exists() else None


def load_settings(user_path: Path | None = None) -> Settings:
    """
    Load and merge settings from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/gym_tracker/defaults.yaml
    2. User override (``user_path`` or ~/.gym-tracker/config.yaml)

    Returns:
        Settings; built-in defaults for anything missing or invalid
    """
    config = _load_yaml_file(get_bundled_yaml_path())

    user = user_path if user_path is not None else get_user_yaml_path()
    if user is not None and user.exists():
        user_cfg = _load_yaml_file(user)
        if user_cfg:
            config = _deep_merge(config, user_cfg)

    return _to_settings(config)
