"""Unit tests for the CLI: Typer command registration and command behavior.

Exercises help output, the one-shot commands, and the ``watch`` loop with
its sleep replaced so the run ends after a fixed number of ticks.
"""

from __future__ import annotations

import importlib
from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner

from swapmonitor.cli.app import app
from swapmonitor.monitor.loop import MonitorLoop

runner = CliRunner()


@pytest.fixture
def stop_watch_after(
    monkeypatch, interrupt_after, restore_root_logger
) -> Callable[[int], None]:
    """Make ``watch`` build loops that hit Ctrl+C after N ticks."""
    watch_module = importlib.import_module("swapmonitor.cli.commands.watch_cmd")

    def _install(ticks: int) -> None:
        sleep = interrupt_after(ticks)

        def _loop(*args, **kwargs) -> MonitorLoop:
            kwargs["sleep"] = sleep
            return MonitorLoop(*args, **kwargs)

        monkeypatch.setattr(watch_module, "MonitorLoop", _loop)

    return _install


# ---------------------------------------------------------------------------
# Test: CLI help and registration
# ---------------------------------------------------------------------------


class TestCliApp:
    """The CLI must register all expected commands and show help."""

    def test_no_args_shows_help(self):
        """Running 'swapmonitor' with no args should show help."""
        result = runner.invoke(app, [])
        # Typer's no_args_is_help may exit with 0 or 2 depending on version
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()

    def test_help_lists_commands(self):
        """--help must list every subcommand."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "watch" in result.output
        assert "snapshot" in result.output
        assert "path" in result.output

    def test_watch_command_exists(self):
        """'watch' command must be registered."""
        result = runner.invoke(app, ["watch", "--help"])
        assert result.exit_code == 0


# ---------------------------------------------------------------------------
# Test: path
# ---------------------------------------------------------------------------


class TestPathCommand:
    """'path' reports where the database is expected."""

    def test_reports_missing_file(self, tmp_path: Path):
        """A path with no file is reported as not found."""
        target = tmp_path / "sqlite"
        result = runner.invoke(app, ["path", "--db", str(target)])
        assert result.exit_code == 0
        assert "not found" in result.output

    def test_reports_existing_file(self, db_path: Path, writer):
        """An existing database is reported as existing."""
        result = runner.invoke(app, ["path", "--db", str(db_path)])
        assert result.exit_code == 0
        assert "exists" in result.output

    def test_rejects_unknown_network(self):
        """An unknown --network is a usage error."""
        result = runner.invoke(app, ["path", "--network", "regtest"])
        assert result.exit_code != 0


# ---------------------------------------------------------------------------
# Test: snapshot
# ---------------------------------------------------------------------------


class TestSnapshotCommand:
    """'snapshot' prints one frame and exits."""

    def test_missing_database_exits_1(self, tmp_path: Path):
        """A missing database prints the error frame and exits 1."""
        result = runner.invoke(app, ["snapshot", "--db", str(tmp_path / "sqlite")])
        assert result.exit_code == 1
        assert "Database not found yet" in result.output

    def test_prints_swaps(self, db_path: Path, append_state):
        """Swaps in the database appear in the printed table."""
        append_state("A", "BtcRedeemed", "2024-01-01 10:00:00")
        result = runner.invoke(app, ["snapshot", "--db", str(db_path)])
        assert result.exit_code == 0
        assert "BtcRedeemed" in result.output
        assert "No swaps yet." not in result.output

    def test_empty_database(self, db_path: Path, writer):
        """An empty database prints the empty-state message."""
        result = runner.invoke(app, ["snapshot", "--db", str(db_path)])
        assert result.exit_code == 0
        assert "No swaps yet." in result.output


# ---------------------------------------------------------------------------
# Test: watch
# ---------------------------------------------------------------------------


class TestWatchCommand:
    """'watch' redraws every tick and exits cleanly on Ctrl+C."""

    def test_no_live_redraws_each_tick(
        self, db_path: Path, append_state, stop_watch_after, tmp_path: Path
    ):
        """--no-live prints one frame per tick and writes logs to --log-file."""
        append_state("A", "BtcRedeemed", "2024-01-01 10:00:00")
        log_file = tmp_path / "watch.log"
        stop_watch_after(2)

        result = runner.invoke(
            app,
            [
                "watch",
                "--db", str(db_path),
                "--no-live",
                "--interval", "0.1",
                "--log-level", "INFO",
                "--log-file", str(log_file),
            ],
        )

        assert result.exit_code == 0
        assert result.output.count("Status: Connected") == 2
        assert "BtcRedeemed" in result.output
        log_text = log_file.read_text(encoding="utf-8")
        assert "Watching swaps every 0.1s" in log_text
        assert "Connected read-only" in log_text

    def test_live_shows_final_frame(self, db_path: Path, append_state, stop_watch_after):
        """--live ends on Ctrl+C with the latest frame on screen."""
        append_state("A", "EncSigSent", "2024-01-01 10:00:00")
        stop_watch_after(2)

        result = runner.invoke(app, ["watch", "--db", str(db_path), "--live"])

        assert result.exit_code == 0
        assert "EncSigSent" in result.output

    def test_missing_database_keeps_polling(self, tmp_path: Path, stop_watch_after):
        """A missing database is reported every tick without exiting early."""
        stop_watch_after(3)

        result = runner.invoke(
            app, ["watch", "--db", str(tmp_path / "sqlite"), "--no-live"]
        )

        assert result.exit_code == 0
        assert result.output.count("Database not found yet") == 3
