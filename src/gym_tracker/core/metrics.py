"""
Pure metric computation functions.

All functions are pure and typed for testability. Cross-unit conversions
always go through kilograms; strength metrics are computed on kilograms and
only converted back to the display unit for presentation.
"""

import math
from typing import Sequence

from .config import EPLEY_DIVISOR, KG_TO_LB, METRIC_ONE_REP_MAX, METRIC_WEIGHT, UNITS
from .models import ComparisonMetric, ProgressSummary, SetEntry, Unit


def kg_to_lb(kg: float) -> float:
    """Convert kilograms to pounds."""
    return kg * KG_TO_LB


def lb_to_kg(lb: float) -> float:
    """Convert pounds to kilograms."""
    return lb / KG_TO_LB


def _check_unit(unit: str) -> None:
    if unit not in UNITS:
        raise ValueError(f"Invalid unit: {unit}. Must be one of {UNITS}")


def to_kg(weight: float, unit: Unit) -> float:
    """
    Express a weight given in ``unit`` in kilograms.

    Args:
        weight: Weight value in ``unit``
        unit: "kg" or "lb"

    Returns:
        Weight in kg
    """
    _check_unit(unit)
    return weight if unit == "kg" else lb_to_kg(weight)


def from_kg(weight_kg: float, unit: Unit) -> float:
    """
    Express a weight in kilograms in ``unit``.

    Args:
        weight_kg: Weight in kg
        unit: Target unit, "kg" or "lb"

    Returns:
        Weight in ``unit``
    """
    _check_unit(unit)
    return weight_kg if unit == "kg" else kg_to_lb(weight_kg)


def convert_weight(weight: float, from_unit: Unit, to_unit: Unit) -> float:
    """
    Convert a weight between units.

    Always round-trips through kilograms, even for kg -> kg, so the result is
    the same whichever direction the conversion runs.
    """
    return from_kg(to_kg(weight, from_unit), to_unit)


def round1(value: float) -> float:
    """
    Round to one decimal place, halves away from zero.

    Presentation only; never feed the result back into a computation.
    """
    return math.copysign(math.floor(abs(value) * 10 + 0.5) / 10, value)


def epley_1rm(weight_kg: float, reps: int) -> float:
    """
    Estimate 1RM using Epley formula.

    1RM = weight * (1 + reps/30)

    Args:
        weight_kg: Lifted weight in kg
        reps: Reps performed

    Returns:
        Estimated 1RM in kg
    """
    if reps <= 0:
        return 0.0
    return weight_kg * (1 + reps / EPLEY_DIVISOR)


def entry_metric_kg(entry: SetEntry, unit: Unit, metric: ComparisonMetric) -> float:
    """
    Comparison value of a single entry, in kg.

    Args:
        entry: Logged set, weight_display in ``unit``
        unit: Unit the entry's weight is stored in
        metric: "one_rep_max" for the Epley estimate, "weight" for raw weight

    Returns:
        Metric value in kg
    """
    weight_kg = to_kg(entry.weight_display, unit)
    if metric == METRIC_ONE_REP_MAX:
        return epley_1rm(weight_kg, entry.reps)
    if metric == METRIC_WEIGHT:
        return weight_kg
    raise ValueError(f"Unknown comparison metric: {metric}")


def sort_by_date(entries: Sequence[SetEntry]) -> list[SetEntry]:
    """Entries by date ascending; same-date entries keep their logged order."""
    return sorted(entries, key=lambda e: e.date)


def newest_first(entries: Sequence[SetEntry]) -> list[SetEntry]:
    """Entries by date descending; same-date entries keep their logged order."""
    return sorted(entries, key=lambda e: e.date, reverse=True)


def percent_change(baseline: float, best: float) -> float:
    """(best - baseline) / baseline * 100, or 0 when baseline is 0."""
    if baseline == 0:
        return 0.0
    return (best - baseline) / baseline * 100


def progress_summary(
    entries: Sequence[SetEntry],
    unit: Unit,
    metric: ComparisonMetric = METRIC_ONE_REP_MAX,
) -> ProgressSummary:
    """
    Compute baseline, best and percent change for one exercise.

    Baseline is the metric of the chronologically first entry (stable on
    ties). Best is the maximum over all entries, regardless of date.

    Args:
        entries: Exercise entries, weights in ``unit``
        unit: Current display unit
        metric: Comparison metric

    Returns:
        ProgressSummary with values in kg; all zeros when there are no entries
    """
    if not entries:
        return ProgressSummary(baseline_kg=0.0, best_kg=0.0, percent_change=0.0, count=0)

    baseline = entry_metric_kg(sort_by_date(entries)[0], unit, metric)
    best = max(entry_metric_kg(e, unit, metric) for e in entries)

    return ProgressSummary(
        baseline_kg=baseline,
        best_kg=best,
        percent_change=percent_change(baseline, best),
        count=len(entries),
    )


def daily_best(
    entries: Sequence[SetEntry],
    unit: Unit,
    metric: ComparisonMetric = METRIC_ONE_REP_MAX,
) -> list[tuple[str, float]]:
    """
    One chart point per date: the best metric value logged that day.

    Returns:
        List of (date, value_kg), date ascending
    """
    by_date: dict[str, float] = {}
    for entry in entries:
        value = entry_metric_kg(entry, unit, metric)
        if entry.date not in by_date or value > by_date[entry.date]:
            by_date[entry.date] = value

    return sorted(by_date.items())
