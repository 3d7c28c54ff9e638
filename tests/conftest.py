"""
Pytest configuration for the Student DBMS.

Provides fixtures for:
- Settings isolated from the developer's environment
- Snapshot paths inside a per-test temporary directory
- A small populated table used by aggregate and persistence tests
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Generator

import pytest

from student_dbms.config import Settings, get_settings
from student_dbms.table import StudentTable

SETTINGS_ENV_VARS = (
    "SNAPSHOT_PATH",
    "SNAPSHOT_WRITE_ATTEMPTS",
    "APP_ENV",
    "LOG_LEVEL",
    "LOG_JSON",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    """
    Clear settings-related env vars and the settings cache around every test.

    The working directory is moved to `tmp_path` so a stray `.env` or default
    snapshot file is never picked up or written into the repository.
    """
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

    # configure_logging() binds handlers to the captured stderr of this test.
    root = logging.getLogger()
    for handler in list(root.handlers):
        if not type(handler).__module__.startswith("_pytest"):
            root.removeHandler(handler)
    root.setLevel(logging.WARNING)


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings fixture with test-specific overrides.
    """
    return Settings(
        snapshot_path=str(tmp_path / "students.snapshot"),
        snapshot_write_attempts=2,
        log_level="DEBUG",
    )


@pytest.fixture
def snapshot_path(tmp_path: Path) -> Path:
    return tmp_path / "students.snapshot"


@pytest.fixture
def populated_table() -> StudentTable:
    """
    Table with scores [70, 85, 85, 40] inserted in that order.
    """
    table = StudentTable()
    table.insert("Asha", "CS", 70, "Pune")
    table.insert("Bhavin", "IT", 85, "Mumbai")
    table.insert("Chitra", "CS", 85, "Nagpur")
    table.insert("Dev", "ECE", 40, "Pune")
    return table
