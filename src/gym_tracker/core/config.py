"""
Configuration constants for the workout tracker.

All fixed parameters are centralized here. User-adjustable settings
(default unit, comparison metric, data directory) are loaded from YAML by
config_loader and fall back to the defaults below.
"""

from typing import Final

# =============================================================================
# STORAGE SCHEMA
# =============================================================================

SCHEMA_VERSION: Final[int] = 1  # Tag written into every persisted blob
STORAGE_KEY: Final[str] = "gt_data_v1"  # Blob key; bump together with SCHEMA_VERSION
DATA_DIR_NAME: Final[str] = ".gym-tracker"  # Under the user's home directory
BACKUP_FILE_NAME: Final[str] = "gym-tracker-backup.json"

# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_UNIT: Final[str] = "kg"
DEFAULT_EXERCISE: Final[str] = "Bench Press"  # Seeded whenever no exercise is left

# =============================================================================
# UNITS
# =============================================================================

UNITS: Final[tuple[str, ...]] = ("kg", "lb")
KG_TO_LB: Final[float] = 2.2046226218  # 1 kg in pounds

# =============================================================================
# STRENGTH ESTIMATION
# =============================================================================

EPLEY_DIVISOR: Final[float] = 30.0  # 1RM = w * (1 + reps / 30)

# Metric used for baseline / best / percent change and the progress chart.
# "one_rep_max" compares Epley estimates, "weight" compares raw lifted weight.
METRIC_ONE_REP_MAX: Final[str] = "one_rep_max"
METRIC_WEIGHT: Final[str] = "weight"
COMPARISON_METRICS: Final[tuple[str, ...]] = (METRIC_ONE_REP_MAX, METRIC_WEIGHT)
DEFAULT_COMPARISON_METRIC: Final[str] = METRIC_ONE_REP_MAX
