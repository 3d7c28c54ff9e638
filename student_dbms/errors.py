"""
Exception hierarchy for the Student DBMS.

Lookups that miss are not errors: they return ``None`` or ``False``. The
exceptions below cover the other recoverable outcomes the shell has to render.
"""

from __future__ import annotations


class StudentDBMSError(Exception):
    """Base class for all recoverable Student DBMS failures."""


class EmptyTableError(StudentDBMSError):
    """Raised when a listing or aggregate is requested on an empty table."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"No records available for '{operation}'.")
        self.operation = operation


class SnapshotError(StudentDBMSError):
    """Raised when a snapshot cannot be written or read."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class SnapshotFormatError(SnapshotError):
    """The snapshot bytes are corrupt, truncated, or of an unsupported version."""


__all__ = [
    "StudentDBMSError",
    "EmptyTableError",
    "SnapshotError",
    "SnapshotFormatError",
]
