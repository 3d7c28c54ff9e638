"""
Persistence package for the Student DBMS.

Owns the on-disk snapshot contract: the versioned binary codec and the
whole-file read/write helpers. Keep this layer free of table logic.
"""

from student_dbms.persistence.snapshot import (
    FORMAT_VERSION,
    TableSnapshot,
    decode_snapshot,
    encode_snapshot,
    read_snapshot,
    write_snapshot,
)

__all__ = [
    "FORMAT_VERSION",
    "TableSnapshot",
    "decode_snapshot",
    "encode_snapshot",
    "read_snapshot",
    "write_snapshot",
]
