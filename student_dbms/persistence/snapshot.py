"""
Binary snapshot codec for the Student DBMS.

A snapshot captures the full table state (every record in insertion order plus
the id counter) in a single file. Layout of format version 1:

    +---------+-----------------+----------------+-------------------------+
    | b"SDBS" | version (>H)    | length (>I)    | UTF-8 JSON payload      |
    +---------+-----------------+----------------+-------------------------+

The payload is the JSON form of `TableSnapshot`. Decoding validates the
header, the payload length, the schema and the table invariants before
anything is handed back, so a caller never sees a partially decoded table.

Usage:
    from student_dbms.persistence.snapshot import TableSnapshot, write_snapshot

    write_snapshot("students.snapshot", TableSnapshot(next_id=1, records=[]))
"""

from __future__ import annotations

import struct
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field, ValidationError, model_validator
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from student_dbms.domain.models import StudentRecord
from student_dbms.errors import SnapshotError, SnapshotFormatError
from student_dbms.utils.logging import get_logger

log = get_logger(__name__)

MAGIC = b"SDBS"
FORMAT_VERSION = 1
_HEADER = struct.Struct(">HI")
_PREFIX_SIZE = len(MAGIC) + _HEADER.size

# OS errors worth a second attempt; everything else fails immediately.
TRANSIENT_WRITE_ERRORS = (BlockingIOError, InterruptedError, TimeoutError)


class TableSnapshot(BaseModel):
    """
    Serializable state of a `StudentTable`.
    """

    format_version: int = Field(FORMAT_VERSION, description="Payload schema version.")
    next_id: int = Field(..., ge=1, description="Next identifier the table will assign.")
    saved_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    records: List[StudentRecord] = Field(default_factory=list)

    model_config = {
        "extra": "forbid",
    }

    @model_validator(mode="after")
    def _check_table_invariants(self) -> "TableSnapshot":
        previous = 0
        for record in self.records:
            if record.id <= previous:
                raise ValueError(
                    f"record ids must be strictly increasing, got {record.id} after {previous}"
                )
            previous = record.id
        if self.next_id <= previous:
            raise ValueError(f"next_id {self.next_id} must exceed highest stored id {previous}")
        return self


def encode_snapshot(snapshot: TableSnapshot) -> bytes:
    """Encode a snapshot into the versioned binary layout."""
    payload = snapshot.model_dump_json().encode("utf-8")
    return MAGIC + _HEADER.pack(FORMAT_VERSION, len(payload)) + payload


def decode_snapshot(blob: bytes) -> TableSnapshot:
    """
    Decode bytes produced by `encode_snapshot`.

    Raises
    ------
    SnapshotFormatError
        If the magic, version, length, schema or table invariants do not hold.
    """
    if len(blob) < _PREFIX_SIZE or not blob.startswith(MAGIC):
        raise SnapshotFormatError("Not a Student DBMS snapshot (bad magic).")

    try:
        version, length = _HEADER.unpack_from(blob, len(MAGIC))
    except struct.error as exc:
        raise SnapshotFormatError("Snapshot header is unreadable.") from exc

    if version != FORMAT_VERSION:
        raise SnapshotFormatError(
            f"Unsupported snapshot version {version} (expected {FORMAT_VERSION})."
        )

    payload = blob[_PREFIX_SIZE:]
    if len(payload) != length:
        raise SnapshotFormatError(
            f"Snapshot payload is {len(payload)} bytes, header declares {length}."
        )

    try:
        snapshot = TableSnapshot.model_validate_json(payload)
    except ValidationError as exc:
        raise SnapshotFormatError(f"Snapshot payload is invalid: {exc.error_count()} error(s).") from exc

    if snapshot.format_version != version:
        raise SnapshotFormatError(
            f"Payload version {snapshot.format_version} does not match header version {version}."
        )
    return snapshot


def write_snapshot(path: Path | str, snapshot: TableSnapshot, attempts: int = 3) -> Path:
    """
    Encode and write a snapshot, replacing any existing file at `path`.

    Transient OS errors are retried up to `attempts` times with exponential
    backoff. Any remaining failure is raised as `SnapshotError`.
    """
    target = Path(path)
    blob = encode_snapshot(snapshot)

    retrying = Retrying(
        stop=stop_after_attempt(max(1, attempts)),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=1),
        retry=retry_if_exception_type(TRANSIENT_WRITE_ERRORS),
        reraise=True,
    )
    try:
        for attempt in retrying:
            with attempt:
                target.write_bytes(blob)
    except OSError as exc:
        log.error(
            "Snapshot write failed",
            extra={"path": str(target), "error": str(exc)},
        )
        raise SnapshotError(f"Could not write snapshot to {target}: {exc}", str(target)) from exc

    log.info(
        "Snapshot written",
        extra={"path": str(target), "records": len(snapshot.records), "bytes": len(blob)},
    )
    return target


def read_snapshot(path: Path | str) -> TableSnapshot:
    """
    Read and decode the snapshot stored at `path`.

    Raises
    ------
    SnapshotError
        If the file is missing or unreadable.
    SnapshotFormatError
        If the file content is not a valid snapshot.
    """
    source = Path(path)
    try:
        blob = source.read_bytes()
    except OSError as exc:
        raise SnapshotError(f"Could not read snapshot from {source}: {exc}", str(source)) from exc

    try:
        snapshot = decode_snapshot(blob)
    except SnapshotFormatError as exc:
        exc.path = str(source)
        raise

    log.info(
        "Snapshot read",
        extra={"path": str(source), "records": len(snapshot.records), "next_id": snapshot.next_id},
    )
    return snapshot


__all__ = [
    "FORMAT_VERSION",
    "MAGIC",
    "TableSnapshot",
    "decode_snapshot",
    "encode_snapshot",
    "read_snapshot",
    "write_snapshot",
]
