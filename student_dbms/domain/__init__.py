"""
Domain package for the Student DBMS.

Exports the record model used by the table, the snapshot codec and the shell.
Keep this package focused on data definitions and validation concerns.
"""

from student_dbms.domain.models import StudentRecord

__all__ = [
    "StudentRecord",
]
