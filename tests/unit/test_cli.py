"""Unit tests for the CLI commands.

Uses Click's CliRunner to invoke all commands without launching a real process.
Covers:
- cli root group (--help, --log-level)
- version command
- ready-at (duration, daily, weekly, remaining time, manual policy,
  missing options, invalid values)
- simulate (refresh only, uses with out-of-charge, unknown skill, bad
  --use syntax, missing file, invalid book)
"""
from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from skill_recast.cli.main import cli

_BOOK_YAML = """\
skills:
  - name: Dash
    recast:
      recast_type: duration
      recast_time: 30
  - name: Potion
    casting_charge_limit: 3
    initially_available: false
    recast:
      recast_type: manual
"""

START = "2024-05-13T12:00:00"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def book_path(tmp_path: Path) -> str:
    path = tmp_path / "skills.yaml"
    path.write_text(_BOOK_YAML, encoding="utf-8")
    return str(path)


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


class TestCliRoot:
    def test_help(self) -> None:
        result = _runner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "ready-at" in result.output
        assert "simulate" in result.output

    def test_log_level_option_accepted(self) -> None:
        result = _runner().invoke(cli, ["--log-level", "DEBUG", "version"])
        assert result.exit_code == 0

    def test_unknown_log_level_rejected(self) -> None:
        result = _runner().invoke(cli, ["--log-level", "LOUD", "version"])
        assert result.exit_code != 0


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


class TestVersionCommand:
    def test_version_exits_zero(self) -> None:
        result = _runner().invoke(cli, ["version"])
        assert result.exit_code == 0

    def test_version_output_contains_package_name(self) -> None:
        result = _runner().invoke(cli, ["version"])
        assert "skill-recast" in result.output

    def test_version_output_contains_python(self) -> None:
        result = _runner().invoke(cli, ["version"])
        assert "Python" in result.output


# ---------------------------------------------------------------------------
# ready-at
# ---------------------------------------------------------------------------


class TestReadyAtCommand:
    def test_duration(self) -> None:
        result = _runner().invoke(
            cli,
            ["ready-at", "--type", "duration", "--seconds", "60", "--from", START, "--now", START],
        )
        assert result.exit_code == 0
        assert "2024-05-13T12:01:00" in result.output
        assert "00:01:00" in result.output

    def test_duration_already_ready(self) -> None:
        result = _runner().invoke(
            cli,
            [
                "ready-at",
                "--type",
                "duration",
                "--seconds",
                "60",
                "--from",
                START,
                "--now",
                "2024-05-13T12:05:00",
            ],
        )
        assert result.exit_code == 0
        assert "ready" in result.output

    def test_daily_rolls_over(self) -> None:
        result = _runner().invoke(
            cli,
            ["ready-at", "--type", "daily", "--at", "08:00", "--from", "2024-05-13T09:00:00"],
        )
        assert result.exit_code == 0
        assert "2024-05-14T08:00:00" in result.output

    def test_daily_with_interval(self) -> None:
        result = _runner().invoke(
            cli,
            [
                "ready-at",
                "--type",
                "daily",
                "--at",
                "08:00",
                "--interval",
                "2",
                "--from",
                "2024-05-13T07:00:00",
            ],
        )
        assert result.exit_code == 0
        assert "2024-05-15T08:00:00" in result.output

    def test_weekly(self) -> None:
        result = _runner().invoke(
            cli,
            [
                "ready-at",
                "--type",
                "weekly",
                "--day",
                "friday",
                "--at",
                "08:00",
                "--from",
                "2024-05-13T09:00:00",
            ],
        )
        assert result.exit_code == 0
        assert "2024-05-17T08:00:00" in result.output

    def test_type_is_case_insensitive(self) -> None:
        result = _runner().invoke(
            cli, ["ready-at", "--type", "DURATION", "--seconds", "5", "--from", START]
        )
        assert result.exit_code == 0

    def test_manual_has_no_ready_instant(self) -> None:
        result = _runner().invoke(cli, ["ready-at", "--type", "manual", "--from", START])
        assert result.exit_code == 1
        assert "No ready instant" in result.output

    def test_duration_requires_seconds(self) -> None:
        result = _runner().invoke(cli, ["ready-at", "--type", "duration"])
        assert result.exit_code == 2
        assert "--seconds" in result.output

    def test_weekly_requires_day(self) -> None:
        result = _runner().invoke(cli, ["ready-at", "--type", "weekly", "--at", "08:00"])
        assert result.exit_code == 2

    def test_non_positive_duration(self) -> None:
        result = _runner().invoke(cli, ["ready-at", "--type", "duration", "--seconds", "0"])
        assert result.exit_code == 1
        assert "Invalid recast policy" in result.output

    def test_unknown_weekday(self) -> None:
        result = _runner().invoke(
            cli, ["ready-at", "--type", "weekly", "--day", "funday", "--at", "08:00"]
        )
        assert result.exit_code == 1
        assert "Invalid recast policy" in result.output

    def test_bad_instant(self) -> None:
        result = _runner().invoke(
            cli, ["ready-at", "--type", "duration", "--seconds", "5", "--from", "yesterday"]
        )
        assert result.exit_code == 2

    def test_missing_type(self) -> None:
        result = _runner().invoke(cli, ["ready-at"])
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# simulate
# ---------------------------------------------------------------------------


class TestSimulateCommand:
    def test_refresh_only(self, book_path: str) -> None:
        result = _runner().invoke(
            cli, ["simulate", book_path, "--start", START, "--duration", "120", "--tick", "60"]
        )
        assert result.exit_code == 0
        assert "Dash" in result.output
        assert "Potion" in result.output
        assert "1/1" in result.output
        assert "0/3" in result.output

    def test_uses_and_out_of_charge(self, book_path: str) -> None:
        result = _runner().invoke(
            cli,
            [
                "simulate",
                book_path,
                "--start",
                START,
                "--duration",
                "120",
                "--tick",
                "60",
                "--use",
                "Dash@0",
                "--use",
                "dash@10",
            ],
        )
        assert result.exit_code == 0
        assert "used" in result.output
        assert "out of charge" in result.output
        # recharged by the refresh at 60s
        assert "1/1" in result.output

    def test_final_table_keeps_book_order_after_use(self, book_path: str) -> None:
        result = _runner().invoke(
            cli,
            ["simulate", book_path, "--start", START, "--duration", "30", "--use", "Dash@0"],
        )
        assert result.exit_code == 0
        assert result.output.rindex("Dash") < result.output.rindex("Potion")

    def test_unknown_skill(self, book_path: str) -> None:
        result = _runner().invoke(
            cli, ["simulate", book_path, "--start", START, "--use", "Fireball@5"]
        )
        assert result.exit_code == 1
        assert "Unknown skill" in result.output

    def test_bad_use_syntax(self, book_path: str) -> None:
        result = _runner().invoke(cli, ["simulate", book_path, "--use", "Dash"])
        assert result.exit_code == 2

    def test_bad_tick(self, book_path: str) -> None:
        result = _runner().invoke(cli, ["simulate", book_path, "--tick", "0"])
        assert result.exit_code == 2

    def test_missing_file(self) -> None:
        result = _runner().invoke(cli, ["simulate", "/nonexistent/skills.yaml"])
        assert result.exit_code != 0

    def test_invalid_book(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("skills:\n  - name: ''\n    recast:\n      recast_type: manual\n", encoding="utf-8")
        result = _runner().invoke(cli, ["simulate", str(path)])
        assert result.exit_code == 1
        assert "Error loading skill book" in result.output
