"""
In-memory student table.

`StudentTable` keeps records in insertion order and hands out identifiers from
its own counter. Every lookup is a linear scan that stops at the first match,
so ties (duplicate names, equal scores) always resolve to the earliest
inserted record.

Usage:
    from student_dbms.table import StudentTable

    table = StudentTable()
    table.insert("Alice", "CS", 70, "Pune")
    table.save_snapshot("students.snapshot")
    restored = StudentTable.load_snapshot("students.snapshot")
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from student_dbms.domain.models import StudentRecord
from student_dbms.errors import EmptyTableError
from student_dbms.persistence.snapshot import TableSnapshot, read_snapshot, write_snapshot
from student_dbms.utils.logging import get_logger

log = get_logger(__name__)


class StudentTable:
    """
    Ordered collection of `StudentRecord` rows plus the id counter.

    Parameters
    ----------
    records : iterable[StudentRecord], optional
        Rows to start with, in insertion order. Used when restoring.
    next_id : int
        Identifier the next insert receives. Never lowered, so ids freed by
        deletes are not handed out again.
    """

    def __init__(self, records: Optional[Iterable[StudentRecord]] = None, next_id: int = 1) -> None:
        self._records: List[StudentRecord] = list(records or [])
        highest = max((r.id for r in self._records), default=0)
        if next_id <= highest:
            raise ValueError(f"next_id {next_id} must exceed highest existing id {highest}")
        self._next_id = next_id

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[StudentRecord]:
        return iter(list(self._records))

    def __repr__(self) -> str:
        return f"StudentTable(records={len(self._records)}, next_id={self._next_id})"

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def is_empty(self) -> bool:
        return not self._records

    # Mutations

    def insert(self, name: str, course: str, score: int, city: str) -> StudentRecord:
        """Append a new record with the next identifier and return it."""
        record = StudentRecord(id=self._next_id, name=name, course=course, score=score, city=city)
        self._records.append(record)
        self._next_id += 1
        log.debug("Record inserted", extra={"id": record.id, "next_id": self._next_id})
        return record

    def delete_by_id(self, record_id: int) -> bool:
        """Remove the record with `record_id`. Returns False if there is none."""
        index = self._index_of(record_id)
        if index is None:
            log.debug("Delete missed", extra={"id": record_id})
            return False
        del self._records[index]
        log.debug("Record deleted", extra={"id": record_id})
        return True

    def update_score(self, record_id: int, new_score: int) -> bool:
        """
        Replace the score of the record with `record_id`. Returns False if there is none.

        The stored row is swapped for a validated copy, so a bad score raises
        `pydantic.ValidationError` before the table changes.
        """
        index = self._index_of(record_id)
        if index is None:
            log.debug("Update missed", extra={"id": record_id})
            return False
        current = self._records[index]
        updated = StudentRecord.model_validate({**current.model_dump(), "score": new_score})
        self._records[index] = updated
        log.debug("Score updated", extra={"id": record_id, "score": updated.score})
        return True

    # Lookups

    def list_all(self) -> List[StudentRecord]:
        """
        Return all records in insertion order.

        Raises
        ------
        EmptyTableError
            If the table holds no records.
        """
        if not self._records:
            raise EmptyTableError("list_all")
        return list(self._records)

    def find_by_id(self, record_id: int) -> Optional[StudentRecord]:
        index = self._index_of(record_id)
        return None if index is None else self._records[index]

    def find_by_name(self, name: str) -> Optional[StudentRecord]:
        """Case-insensitive exact match; the earliest inserted match wins."""
        wanted = name.lower()
        for record in self._records:
            if record.name.lower() == wanted:
                return record
        return None

    def count(self) -> int:
        return len(self._records)

    # Aggregates

    def max_score(self) -> StudentRecord:
        """Record with the highest score; earliest inserted on ties."""
        best = self._first("max_score")
        for record in self._records:
            if record.score > best.score:
                best = record
        return best

    def min_score(self) -> StudentRecord:
        """Record with the lowest score; earliest inserted on ties."""
        best = self._first("min_score")
        for record in self._records:
            if record.score < best.score:
                best = record
        return best

    def average_score(self) -> float:
        self._first("average_score")
        total = sum(record.score for record in self._records)
        return total / len(self._records)

    # Persistence

    def to_snapshot(self) -> TableSnapshot:
        return TableSnapshot(next_id=self._next_id, records=list(self._records))

    @classmethod
    def from_snapshot(cls, snapshot: TableSnapshot) -> "StudentTable":
        return cls(records=snapshot.records, next_id=snapshot.next_id)

    def save_snapshot(self, path: Path | str, attempts: int = 3) -> Path:
        """
        Write the whole table to `path`, overwriting any previous snapshot.

        Raises `SnapshotError` on failure; the table itself is left untouched.
        """
        return write_snapshot(path, self.to_snapshot(), attempts=attempts)

    @classmethod
    def load_snapshot(cls, path: Path | str) -> "StudentTable":
        """
        Rebuild a table from the snapshot at `path`.

        The restored `next_id` is the saved counter, not one past the highest
        surviving id. Raises `SnapshotError` (or `SnapshotFormatError`) on failure.
        """
        return cls.from_snapshot(read_snapshot(path))

    # Internals

    def _index_of(self, record_id: int) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None

    def _first(self, operation: str) -> StudentRecord:
        if not self._records:
            raise EmptyTableError(operation)
        return self._records[0]


__all__ = ["StudentTable"]
