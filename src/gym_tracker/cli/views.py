"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of workout data. All weights arrive
here in kg or in the stored display unit and leave rounded to one decimal.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.ascii_plot import create_progress_plot
from ..core.config import METRIC_ONE_REP_MAX
from ..core.metrics import daily_best, epley_1rm, from_kg, newest_first, round1, to_kg
from ..core.models import ComparisonMetric, ProgressSummary, SetEntry, Unit

console = Console()

_METRIC_LABELS = {
    "one_rep_max": "1RM",
    "weight": "weight",
}


def format_weight(weight_kg: float, unit: Unit) -> str:
    """Format a kg value in the display unit, e.g. ``116.7 kg``."""
    return f"{round1(from_kg(weight_kg, unit))} {unit}"


def format_history_table(exercise: str, entries: list[SetEntry], unit: Unit) -> Table:
    """
    Create a Rich table of logged sets, newest first.

    Args:
        exercise: Exercise name for the title
        entries: Entries with weights in ``unit``
        unit: Current display unit

    Returns:
        Rich Table object
    """
    table = Table(title=f"{escape(exercise)} History")

    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column(f"Weight ({unit})", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column(f"Est. 1RM ({unit})", justify="right", style="bold")
    table.add_column("ID", style="dim", overflow="fold")

    for entry in newest_first(entries):
        orm_kg = epley_1rm(to_kg(entry.weight_display, unit), entry.reps)
        table.add_row(
            entry.date,
            f"{round1(entry.weight_display)}",
            str(entry.reps),
            f"{round1(from_kg(orm_kg, unit))}",
            escape(entry.id),
        )

    return table


def print_history(exercise: str, entries: list[SetEntry], unit: Unit) -> None:
    """Print set history to console."""
    if not entries:
        console.print(f"[yellow]No sets recorded for {escape(exercise)} yet.[/yellow]")
        return

    console.print(format_history_table(exercise, entries, unit))


def print_exercises(exercises: dict[str, list[SetEntry]], active: str) -> None:
    """Print exercise names with their set counts; the active one is marked."""
    table = Table(title="Exercises")
    table.add_column("", width=1)
    table.add_column("Exercise", style="cyan")
    table.add_column("Sets", justify="right")

    for name, entries in exercises.items():
        table.add_row("*" if name == active else "", escape(name), str(len(entries)))

    console.print(table)


def print_summary(
    exercise: str,
    summary: ProgressSummary,
    unit: Unit,
    metric: ComparisonMetric = METRIC_ONE_REP_MAX,
) -> None:
    """
    Print baseline, best and percent change.

    Shows dashes when the exercise has no sets.
    """
    label = _METRIC_LABELS.get(metric, metric)

    table = Table(title=f"{escape(exercise)} Progress", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="bold")

    if summary.is_empty:
        baseline = best = change = "–"
    else:
        baseline = format_weight(summary.baseline_kg, unit)
        best = format_weight(summary.best_kg, unit)
        change = f"{round1(summary.percent_change)}%"

    table.add_row(f"Baseline {label}", baseline)
    table.add_row(f"Best {label}", best)
    table.add_row("Change", change)
    table.add_row("Sets", str(summary.count))

    console.print(table)


def print_progress_plot(
    exercise: str,
    entries: list[SetEntry],
    unit: Unit,
    metric: ComparisonMetric = METRIC_ONE_REP_MAX,
) -> None:
    """Print an ASCII chart of the best value per day."""
    points = [
        (date, round1(from_kg(value_kg, unit)))
        for date, value_kg in daily_best(entries, unit, metric)
    ]
    label = _METRIC_LABELS.get(metric, metric)
    chart = create_progress_plot(points, title=f"{exercise}: best {label}", unit=unit)
    console.print(chart, markup=False, highlight=False)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{escape(message)}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{escape(message)}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{escape(message)} \\[y/N]: ")
    return response.lower() in ("y", "yes")
