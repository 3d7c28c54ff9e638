"""
End-to-end tests for the Student DBMS command line.

These drive the typer app through `CliRunner` with scripted stdin and verify:
1. The menu restores from and saves to the snapshot file
2. Ids keep counting across sessions, even after deletes
3. Malformed input is re-prompted instead of crashing the session
"""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from student_dbms.main import app
from student_dbms.table import StudentTable
from scripts import seed_snapshot

runner = CliRunner()


def _menu(snapshot: Path, *lines: str):
    script = "\n".join(lines) + "\n"
    return runner.invoke(app, ["menu", "--snapshot", str(snapshot)], input=script)


class TestMenuSession:
    def test_first_session_starts_empty_and_saves_on_exit(self, snapshot_path: Path):
        result = _menu(
            snapshot_path,
            "1", "A", "CS", "70", "Pune",
            "1", "B", "CS", "85", "Mumbai",
            "7",
            "20",
        )

        assert result.exit_code == 0, result.output
        assert "Unable to restore backup. Starting new DBMS..." in result.output
        assert "Total Students: 2" in result.output
        assert "Thank you for using Student DBMS!" in result.output
        assert "Backup created successfully." in result.output

        table = StudentTable.load_snapshot(snapshot_path)
        assert [r.name for r in table] == ["A", "B"]
        assert table.next_id == 3

    def test_ids_continue_across_sessions_after_delete(self, snapshot_path: Path):
        first = _menu(
            snapshot_path,
            "1", "A", "CS", "70", "Pune",
            "1", "B", "CS", "85", "Mumbai",
            "6", "2",
            "20",
        )
        assert first.exit_code == 0, first.output

        second = _menu(
            snapshot_path,
            "1", "C", "IT", "90", "Pune",
            "4", "3",
            "20",
        )

        assert second.exit_code == 0, second.output
        assert "Backup restored: 1 record(s)." in second.output
        assert "ID: 3 | Name: C | Course: IT | Marks: 90 | City: Pune" in second.output

        table = StudentTable.load_snapshot(snapshot_path)
        assert {r.id for r in table} == {1, 3}
        assert table.next_id == 4

    def test_malformed_numbers_are_reprompted(self, snapshot_path: Path):
        result = _menu(
            snapshot_path,
            "abc",
            "1", "A", "CS", "seventy", "70", "Pune",
            "20",
        )

        assert result.exit_code == 0, result.output
        assert "is not a valid integer" in result.output
        assert StudentTable.load_snapshot(snapshot_path).find_by_id(1).score == 70

    def test_invalid_option_and_empty_aggregates(self, snapshot_path: Path):
        result = _menu(snapshot_path, "99", "8", "2", "20")

        assert result.exit_code == 0, result.output
        assert "Invalid option. Please try again." in result.output
        assert "No records available." in result.output
        assert "No records found." in result.output

    def test_default_command_uses_configured_snapshot(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ):
        target = tmp_path / "configured.snapshot"
        monkeypatch.setenv("SNAPSHOT_PATH", str(target))

        result = runner.invoke(app, [], input="20\n")

        assert result.exit_code == 0, result.output
        assert target.exists()


class TestReadOnlyCommands:
    def test_show_lists_snapshot_contents(self, populated_table: StudentTable, snapshot_path: Path):
        populated_table.save_snapshot(snapshot_path)

        result = runner.invoke(app, ["show", "--snapshot", str(snapshot_path)])

        assert result.exit_code == 0, result.output
        assert "Bhavin" in result.output
        assert "Total Students: 4 | Next ID: 5" in result.output

    def test_show_missing_snapshot_fails(self, tmp_path: Path):
        result = runner.invoke(app, ["show", "--snapshot", str(tmp_path / "absent.snapshot")])

        assert result.exit_code == 1

    def test_info_prints_settings(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SNAPSHOT_PATH", "elsewhere.snapshot")

        result = runner.invoke(app, ["info"])

        assert result.exit_code == 0
        assert "snapshot=elsewhere.snapshot" in result.output


def test_seed_script_writes_loadable_snapshot(snapshot_path: Path):
    result = runner.invoke(
        seed_snapshot.app, ["--count", "6", "--seed", "7", "--output", str(snapshot_path)]
    )

    assert result.exit_code == 0, result.output
    table = StudentTable.load_snapshot(snapshot_path)
    assert table.count() == 6
    assert table.next_id == 7
