"""Exercise commands: exercises, add-exercise, delete-exercise."""

from typing import Annotated, Optional

import typer

from ...io.tracker import ExerciseNotFoundError
from .. import views
from ..app import DataDirOption, app, get_tracker


@app.command("exercises")
def list_exercises(data_dir: DataDirOption = None) -> None:
    """
    List exercises and how many sets each has.
    """
    tracker = get_tracker(data_dir)
    views.print_exercises(tracker.state.exercises, tracker.active_exercise)


@app.command("add-exercise")
def add_exercise(
    name: Annotated[str, typer.Argument(help="Exercise name, e.g. 'Squat'")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Add a new exercise. Adding an existing name does nothing.
    """
    tracker = get_tracker(data_dir)

    if not name.strip():
        views.print_info("Exercise name is blank; nothing added.")
        return

    existed = name.strip() in tracker.state.exercises
    tracker.add_exercise(name)

    if existed:
        views.print_info(f"Exercise already exists: {tracker.active_exercise}")
    else:
        views.print_success(f"Added exercise: {tracker.active_exercise}")


@app.command("delete-exercise")
def delete_exercise(
    name: Annotated[
        Optional[str],
        typer.Argument(help="Exercise to delete (default: first exercise)"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Skip confirmation prompt"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """
    Delete an exercise and all of its sets.
    """
    tracker = get_tracker(data_dir)
    target = tracker.active_exercise if name is None else name

    try:
        deleted = tracker.delete_exercise(
            target,
            confirm=(lambda _msg: True) if force else None,
        )
    except ExerciseNotFoundError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if not deleted:
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    views.print_success(f"Deleted exercise: {target}")
    views.print_info(f"Active exercise: {tracker.active_exercise}")
