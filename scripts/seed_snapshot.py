"""
Seed script for the Student DBMS.

Builds a deterministic table of pseudo-random students and writes it as a
snapshot, so the menu can be tried out against realistic data.
"""

from __future__ import annotations

import random
import sys
import time
from pathlib import Path

import typer

from student_dbms.config import get_settings
from student_dbms.errors import SnapshotError
from student_dbms.table import StudentTable

app = typer.Typer(help="Generate a snapshot of synthetic student records.")

FIRST_NAMES = ["Aarav", "Diya", "Ishaan", "Meera", "Rohan", "Sana", "Kabir", "Anaya", "Vivaan", "Tara"]
COURSES = ["CS", "IT", "ECE", "Mechanical", "Civil"]
CITIES = ["Pune", "Mumbai", "Nagpur", "Nashik", "Satara"]


def _generate_students(count: int, seed: int) -> StudentTable:
    rng = random.Random(seed)
    table = StudentTable()
    for _ in range(count):
        table.insert(
            name=rng.choice(FIRST_NAMES),
            course=rng.choice(COURSES),
            score=rng.randint(0, 100),
            city=rng.choice(CITIES),
        )
    return table


@app.command()
def main(
    count: int = typer.Option(
        25,
        "--count",
        "-n",
        min=0,
        help="Number of students to generate.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Snapshot path (default from settings).",
    ),
) -> None:
    """
    Generate synthetic students and save them as a snapshot.
    """
    settings = get_settings()
    snapshot_path = output or Path(settings.snapshot_path)
    snapshot_path.parent.mkdir(parents=True, exist_ok=True)

    start = time.perf_counter()
    typer.echo(f"Generating {count:,} students -> {snapshot_path} (seed={seed})")
    table = _generate_students(count, seed)

    try:
        table.save_snapshot(snapshot_path, attempts=settings.snapshot_write_attempts)
    except SnapshotError as exc:
        typer.echo(f"Snapshot write failed: {exc}", err=True)
        raise typer.Exit(code=1)

    duration = time.perf_counter() - start
    typer.echo(f"Snapshot written in {duration:.2f}s (next id {table.next_id}).")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
