"""Shared Typer app object, shared option types, and tracker utility."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from ..core.config import COMPARISON_METRICS
from ..core.config_loader import load_settings
from ..io.tracker import ExerciseNotFoundError, Tracker
from ..io.tracker_store import TrackerStore, get_default_data_dir
from . import views

# Shared --exercise option type used across exercise-scoped commands
ExerciseOption = Annotated[
    Optional[str],
    typer.Option("--exercise", "-e", help="Exercise name (default: first exercise)"),
]

# Shared --data-dir option type used across all commands
DataDirOption = Annotated[
    Optional[Path],
    typer.Option("--data-dir", "-p", help="Directory holding the tracker data file"),
]

MetricOption = Annotated[
    Optional[str],
    typer.Option("--metric", "-m", help="Comparison metric: one_rep_max | weight"),
]

app = typer.Typer(
    name="gym-tracker",
    help="Log sets per exercise and follow your strength progress.",
    no_args_is_help=True,
)


def setup_logging(verbose: bool = False) -> None:
    """Route log records through Rich on stderr; debug level when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def get_tracker(data_dir: Path | None, exercise: str | None = None) -> Tracker:
    """
    Build a tracker over the data directory and select ``exercise``.

    Exits with status 1 if the exercise does not exist.
    """
    settings = load_settings()
    if data_dir is None:
        data_dir = settings.data_dir or get_default_data_dir()

    store = TrackerStore(
        data_dir,
        default_unit=settings.default_unit,
        default_exercise=settings.default_exercise,
    )
    tracker = Tracker(
        store,
        confirm=views.confirm_action,
        default_exercise=settings.default_exercise,
    )

    if exercise is not None:
        try:
            tracker.select_exercise(exercise)
        except ExerciseNotFoundError as e:
            views.print_error(str(e))
            views.print_info("Run 'add-exercise' first, or 'exercises' to list them.")
            raise typer.Exit(1)

    return tracker


def resolve_metric(metric: str | None) -> str:
    """Return the requested metric, or the configured one; exit 1 if unknown."""
    if metric is None:
        return load_settings().comparison_metric
    if metric not in COMPARISON_METRICS:
        views.print_error(f"Unknown metric: {metric}. Use one of: {', '.join(COMPARISON_METRICS)}")
        raise typer.Exit(1)
    return metric
