"""
Student DBMS - an in-memory student record table with snapshot backups.

This package provides a small single-table record store and a console menu
around it:

- Insert, look up by id or name, delete and update student records
- Count, highest, lowest and average marks
- Save and restore the whole table to a versioned binary snapshot

Lookups are linear scans in insertion order; identifiers come from a counter
owned by the table and are never reused.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from student_dbms.config import Settings, get_settings
from student_dbms.domain.models import StudentRecord
from student_dbms.errors import (
    EmptyTableError,
    SnapshotError,
    SnapshotFormatError,
    StudentDBMSError,
)
from student_dbms.persistence.snapshot import TableSnapshot
from student_dbms.table import StudentTable
from student_dbms.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Core
    "StudentRecord",
    "StudentTable",
    "TableSnapshot",
    # Errors
    "StudentDBMSError",
    "EmptyTableError",
    "SnapshotError",
    "SnapshotFormatError",
    # Logging
    "configure_logging",
    "get_logger",
]
