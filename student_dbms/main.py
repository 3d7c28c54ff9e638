from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from student_dbms.config import get_settings
from student_dbms.errors import SnapshotError
from student_dbms.reporter import print_records
from student_dbms.shell import MenuShell, restore_or_create
from student_dbms.table import StudentTable
from student_dbms.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Student DBMS: an in-memory student table with snapshot backups.")

log = get_logger(__name__)


def _snapshot_path(override: Optional[Path]) -> Path:
    return override if override is not None else Path(get_settings().snapshot_path)


@app.callback(invoke_without_command=True)
def _default(ctx: typer.Context) -> None:
    """
    Start the interactive menu when no command is given.
    """
    if ctx.invoked_subcommand is None:
        menu(snapshot=None)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"snapshot={settings.snapshot_path} | write_attempts={settings.snapshot_write_attempts} | "
        f"env={settings.app_env} log_level={settings.log_level} json_logs={settings.log_json}"
    )


@app.command()
def menu(
    snapshot: Optional[Path] = typer.Option(
        None,
        "--snapshot",
        "-f",
        help="Snapshot file to restore from and back up to (default from settings).",
    ),
) -> None:
    """
    Run the interactive student table menu.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    path = _snapshot_path(snapshot)

    console = Console()
    table = restore_or_create(path, console)
    shell = MenuShell(table, path, console=console, write_attempts=settings.snapshot_write_attempts)
    shell.run()


@app.command()
def show(
    snapshot: Optional[Path] = typer.Option(
        None,
        "--snapshot",
        "-f",
        help="Snapshot file to display (default from settings).",
    ),
) -> None:
    """
    Print the records stored in a snapshot without modifying it.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    path = _snapshot_path(snapshot)

    try:
        table = StudentTable.load_snapshot(path)
    except SnapshotError as exc:
        typer.echo(f"Unable to read snapshot: {exc}", err=True)
        raise typer.Exit(code=1)

    print_records(list(table), Console())
    typer.echo(f"Total Students: {table.count()} | Next ID: {table.next_id}")


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
