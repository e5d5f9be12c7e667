"""Backup commands: export, import."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.config import BACKUP_FILE_NAME
from ...io.serializers import ValidationError
from .. import views
from ..app import DataDirOption, app, get_tracker


@app.command("export")
def export_data(
    path: Annotated[
        Optional[Path],
        typer.Argument(help=f"Backup file to write (default: ./{BACKUP_FILE_NAME})"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """
    Write all exercises and sets to a JSON backup file.
    """
    tracker = get_tracker(data_dir)
    target = path if path is not None else Path(BACKUP_FILE_NAME)

    try:
        target.write_text(tracker.export_data() + "\n", encoding="utf-8")
    except OSError as e:
        views.print_error(f"Cannot write {target}: {e}")
        raise typer.Exit(1)

    views.print_success(f"Exported {len(tracker.exercise_names())} exercises to {target}")


@app.command("import")
def import_data(
    path: Annotated[Path, typer.Argument(help="Backup file to load")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Replace all data with the contents of a JSON backup file.
    """
    tracker = get_tracker(data_dir)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        views.print_error(f"Import failed: cannot read {path}: {e}")
        raise typer.Exit(1)

    try:
        tracker.import_data(text)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Imported {len(tracker.exercise_names())} exercises from {path}")
    views.print_info(f"Active exercise: {tracker.active_exercise}")
