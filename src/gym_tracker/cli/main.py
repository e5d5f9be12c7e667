"""
CLI entry point using Typer.

Provides commands for the workout log:
- exercises / add-exercise / delete-exercise: manage exercises
- log-set / delete-set / history: manage logged sets
- unit: switch between kg and lb
- stats / plot: progress summary and ASCII chart
- export / import: JSON backups
"""

from typing import Annotated

import typer

from .app import app, setup_logging
from .commands import analysis, backup, exercises, sets  # noqa: F401  registers commands


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """
    Log sets per exercise and follow your strength progress.
    """
    setup_logging(verbose)


if __name__ == "__main__":
    app()
