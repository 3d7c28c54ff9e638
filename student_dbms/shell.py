"""
Interactive menu shell for the Student DBMS.

The shell presents the numbered menu, collects the fields an option needs via
typer prompts, calls exactly one `StudentTable` operation and renders the
outcome. Persistence is touched in three places only: restoring at startup,
the explicit backup option, and the save on exit.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional

import typer
from rich.console import Console

from student_dbms import reporter
from student_dbms.domain.models import StudentRecord
from student_dbms.errors import EmptyTableError, SnapshotError
from student_dbms.table import StudentTable
from student_dbms.utils.logging import get_logger

log = get_logger(__name__)

EXIT_OPTION = 20

MENU_ENTRIES = (
    (1, "Insert into student table"),
    (2, "Display all records"),
    (3, "Take backup"),
    (4, "Search by Student ID"),
    (5, "Search by Student Name"),
    (6, "Delete by Student ID"),
    (7, "Count total students"),
    (8, "Display highest marks"),
    (9, "Display lowest marks"),
    (10, "Display average marks"),
    (11, "Update marks"),
    (EXIT_OPTION, "Exit the DBMS"),
)

BANNER = "-" * 61


def restore_or_create(path: Path | str, console: Optional[Console] = None) -> StudentTable:
    """
    Load the table saved at `path`, falling back to an empty table.
    """
    console = console or Console()
    try:
        table = StudentTable.load_snapshot(path)
    except SnapshotError as exc:
        log.warning("Snapshot restore failed, starting empty", extra={"path": str(path), "error": str(exc)})
        reporter.print_status("Unable to restore backup. Starting new DBMS...", console)
        reporter.print_status("Student DBMS Started Successfully...", console)
        return StudentTable()

    log.info("Snapshot restored", extra={"path": str(path), "records": len(table)})
    reporter.print_status(f"Backup restored: {len(table)} record(s).", console)
    return table


class MenuShell:
    """
    Menu loop bound to one table and one snapshot path.

    Parameters
    ----------
    table : StudentTable
        The table the menu operates on.
    snapshot_path : Path | str
        Where backups and the exit save are written.
    console : rich.console.Console, optional
        Output target; defaults to a console on stdout.
    write_attempts : int
        Attempts for each snapshot write (transient errors only).
    """

    def __init__(
        self,
        table: StudentTable,
        snapshot_path: Path | str,
        console: Optional[Console] = None,
        write_attempts: int = 3,
    ) -> None:
        self.table = table
        self.snapshot_path = Path(snapshot_path)
        self.console = console or Console()
        self.write_attempts = write_attempts
        self._handlers: Dict[int, Callable[[], None]] = {
            1: self.insert,
            2: self.display_all,
            3: self.backup,
            4: self.search_by_id,
            5: self.search_by_name,
            6: self.delete_by_id,
            7: self.count,
            8: self.highest_marks,
            9: self.lowest_marks,
            10: self.average_marks,
            11: self.update_marks,
        }

    def run(self) -> StudentTable:
        """Run the menu until the exit option is chosen; returns the final table."""
        self._say(BANNER)
        self._say("------------------------ Student DBMS -----------------------")
        self._say(BANNER)

        while True:
            self.print_menu()
            option = typer.prompt("Enter your choice", type=int)
            if not self.dispatch(option):
                return self.table

    def print_menu(self) -> None:
        self._say("")
        self._say("Choose an operation:")
        for number, label in MENU_ENTRIES:
            self._say(f"{number:<2} : {label}")

    def dispatch(self, option: int) -> bool:
        """Run one menu option. Returns False once the session should end."""
        if option == EXIT_OPTION:
            self.exit()
            return False

        handler = self._handlers.get(option)
        if handler is None:
            self._say("Invalid option. Please try again.")
            return True

        log.debug("Menu option selected", extra={"option": option})
        try:
            handler()
        except EmptyTableError:
            self._say("No records available.")
        return True

    # Menu actions

    def insert(self) -> None:
        name = typer.prompt("Enter Student Name")
        course = typer.prompt("Enter Course", default="", show_default=False)
        score = typer.prompt("Enter Marks", type=int)
        city = typer.prompt("Enter City", default="", show_default=False)
        record = self.table.insert(name, course, score, city)
        self._say(f"New Record Inserted Successfully (ID: {record.id})")

    def display_all(self) -> None:
        try:
            records = self.table.list_all()
        except EmptyTableError:
            records = []
        reporter.print_records(records, self.console)

    def backup(self) -> None:
        try:
            self.table.save_snapshot(self.snapshot_path, attempts=self.write_attempts)
        except SnapshotError:
            self._say("Exception occurred while taking backup.", style="red")
            return
        self._say("Backup created successfully.")

    def search_by_id(self) -> None:
        record_id = typer.prompt("Enter Student ID", type=int)
        self._show_lookup(self.table.find_by_id(record_id))

    def search_by_name(self) -> None:
        name = typer.prompt("Enter Student Name")
        self._show_lookup(self.table.find_by_name(name))

    def delete_by_id(self) -> None:
        record_id = typer.prompt("Enter Student ID to delete", type=int)
        if self.table.delete_by_id(record_id):
            self._say("Record deleted successfully.")
        else:
            self._say("Record not found.")

    def count(self) -> None:
        self._say(f"Total Students: {self.table.count()}")

    def highest_marks(self) -> None:
        reporter.print_extreme("Highest", self.table.max_score(), self.console)

    def lowest_marks(self) -> None:
        reporter.print_extreme("Lowest", self.table.min_score(), self.console)

    def average_marks(self) -> None:
        self._say(f"Class Average Marks: {self.table.average_score()}")

    def update_marks(self) -> None:
        record_id = typer.prompt("Enter Student ID to update marks", type=int)
        new_score = typer.prompt("Enter new marks", type=int)
        if self.table.update_score(record_id, new_score):
            self._say(f"Marks updated successfully for ID: {record_id}")
        else:
            self._say("Record not found.")

    def exit(self) -> None:
        self._say("Thank you for using Student DBMS!")
        self.backup()

    # Helpers

    def _show_lookup(self, record: Optional[StudentRecord]) -> None:
        if record is None:
            self._say("Record not found.")
        else:
            reporter.print_record(record, self.console)

    def _say(self, message: str, style: Optional[str] = None) -> None:
        reporter.print_status(message, self.console, style=style)


__all__ = ["EXIT_OPTION", "MENU_ENTRIES", "MenuShell", "restore_or_create"]
