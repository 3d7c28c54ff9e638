"""
Utilities package for the Student DBMS.

Exports shared helpers for logging and other cross-cutting concerns.
Keep this package lightweight and free of domain-specific logic.
"""

from student_dbms.utils.logging import JsonFormatter, configure_logging, get_logger

__all__ = [
    "JsonFormatter",
    "configure_logging",
    "get_logger",
]
