"""Set commands: log-set, delete-set, history, unit."""

import json
from typing import Annotated, Optional

import typer

from ...core.metrics import newest_first
from ...io.serializers import ValidationError, set_entry_to_dict
from .. import views
from ..app import DataDirOption, ExerciseOption, app, get_tracker


@app.command("log-set")
def log_set(
    weight: Annotated[
        str,
        typer.Option("--weight", "-w", help="Weight in the current unit"),
    ],
    reps: Annotated[
        str,
        typer.Option("--reps", "-r", help="Reps performed"),
    ],
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Set date (YYYY-MM-DD, default: today)"),
    ] = None,
    exercise: ExerciseOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """
    Log a set for an exercise.

      gym-tracker log-set -e "Bench Press" --weight 100 --reps 5 --date 2024-01-01
    """
    tracker = get_tracker(data_dir, exercise)

    try:
        entry = tracker.add_set(weight, reps, date)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(
        f"Logged {tracker.active_exercise}: {entry.weight_display:g} {tracker.unit} x {entry.reps}"
        f" on {entry.date}"
    )


@app.command("delete-set")
def delete_set(
    entry_id: Annotated[str, typer.Argument(help="Set ID as shown by 'history'")],
    exercise: ExerciseOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """
    Delete a logged set by its ID.
    """
    tracker = get_tracker(data_dir, exercise)

    if tracker.delete_set(entry_id):
        views.print_success(f"Deleted set {entry_id}")
    else:
        views.print_info(f"No set {entry_id} in {tracker.active_exercise}; nothing changed.")


@app.command("history")
def history(
    exercise: ExerciseOption = None,
    data_dir: DataDirOption = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
) -> None:
    """
    Show logged sets, newest first.
    """
    tracker = get_tracker(data_dir, exercise)
    entries = tracker.entries()

    if json_out:
        print(json.dumps({
            "exercise": tracker.active_exercise,
            "unit": tracker.unit,
            "sets": [set_entry_to_dict(e) for e in newest_first(entries)],
        }, indent=2))
        return

    views.print_history(tracker.active_exercise, entries, tracker.unit)


@app.command("unit")
def unit(
    new_unit: Annotated[str, typer.Argument(help="Display unit: kg | lb")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Switch the display unit. All logged weights are converted.
    """
    tracker = get_tracker(data_dir)
    old_unit = tracker.unit

    try:
        tracker.set_unit(new_unit)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if old_unit == tracker.unit:
        views.print_info(f"Unit is already {tracker.unit}.")
    else:
        views.print_success(f"Unit changed: {old_unit} -> {tracker.unit}")
