"""Analysis commands: stats, plot."""

import json
from typing import Annotated

import typer

from ...core.metrics import from_kg, progress_summary
from .. import views
from ..app import DataDirOption, ExerciseOption, MetricOption, app, get_tracker, resolve_metric


@app.command()
def stats(
    exercise: ExerciseOption = None,
    metric: MetricOption = None,
    data_dir: DataDirOption = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
) -> None:
    """
    Show baseline, best and percent change for an exercise.
    """
    tracker = get_tracker(data_dir, exercise)
    chosen = resolve_metric(metric)
    summary = progress_summary(tracker.entries(), tracker.unit, chosen)  # type: ignore[arg-type]

    if json_out:
        print(json.dumps({
            "exercise": tracker.active_exercise,
            "metric": chosen,
            "unit": tracker.unit,
            "baseline": from_kg(summary.baseline_kg, tracker.unit),
            "best": from_kg(summary.best_kg, tracker.unit),
            "percent_change": summary.percent_change,
            "sets": summary.count,
        }, indent=2))
        return

    views.print_summary(tracker.active_exercise, summary, tracker.unit, chosen)  # type: ignore[arg-type]


@app.command()
def plot(
    exercise: ExerciseOption = None,
    metric: MetricOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """
    Show an ASCII progress chart: best value per day.
    """
    tracker = get_tracker(data_dir, exercise)
    chosen = resolve_metric(metric)
    views.print_progress_plot(tracker.active_exercise, tracker.entries(), tracker.unit, chosen)  # type: ignore[arg-type]
