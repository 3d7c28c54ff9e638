from __future__ import annotations

from typing import Iterable, Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from student_dbms.domain.models import StudentRecord

RULE = "-" * 58


def build_records_table(records: Iterable[StudentRecord], title: str = "Data from the student table") -> Table:
    """
    Build a rich table of student records in the order given.
    """
    table = Table(title=title, box=box.ROUNDED)

    table.add_column("ID", justify="right", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Course", style="magenta")
    table.add_column("Marks", justify="right", style="green")
    table.add_column("City", style="yellow")

    for record in records:
        # Text() keeps user-entered brackets from being parsed as markup.
        table.add_row(
            str(record.id),
            Text(record.name),
            Text(record.course),
            str(record.score),
            Text(record.city),
        )
    return table


def print_records(records: Iterable[StudentRecord], console: Optional[Console] = None) -> None:
    """
    Render a listing of records, or the empty-table message.
    """
    console = console or Console()
    rows = list(records)

    console.print(RULE)
    if not rows:
        console.print("No records found.", markup=False, highlight=False)
    else:
        console.print(build_records_table(rows))
    console.print(RULE)


def print_record(record: StudentRecord, console: Optional[Console] = None) -> None:
    """Print a single record in its canonical one-line form."""
    console = console or Console()
    console.print(str(record), markup=False, highlight=False, soft_wrap=True)


def print_extreme(label: str, record: StudentRecord, console: Optional[Console] = None) -> None:
    """Print a highest/lowest marks result."""
    console = console or Console()
    console.print(f"{label} Marks: {record.score}", markup=False, highlight=False)
    console.print(f"Student: {record.name}", markup=False, highlight=False, soft_wrap=True)


def print_status(message: str, console: Optional[Console] = None, style: Optional[str] = None) -> None:
    """Print a plain status line, optionally styled."""
    console = console or Console()
    console.print(message, style=style, markup=False, highlight=False, soft_wrap=True)
