"""Shared test fixtures for swapmonitor."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable, Iterator
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from swapmonitor.core.data_source import SwapStateSource
from swapmonitor.monitor.loop import MonitorLoop

# Same layout the ASB migrations create.
_CREATE_SWAP_STATES = """
CREATE TABLE IF NOT EXISTS swap_states (
    id          INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,
    swap_id     TEXT NOT NULL,
    entered_at  TEXT NOT NULL,
    state       TEXT NOT NULL
);
"""

FIXED_NOW = datetime(2026, 2, 27, 12, 0, 0)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Location of a test ASB database.  Not created until a writer opens it."""
    return tmp_path / "asb" / "sqlite"


@pytest.fixture
def writer(db_path: Path) -> Iterator[sqlite3.Connection]:
    """A read-write connection standing in for the ASB, schema created."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    conn.execute(_CREATE_SWAP_STATES)
    conn.commit()
    yield conn
    conn.close()


@pytest.fixture
def append_state(writer: sqlite3.Connection) -> Callable[[str, str, str], None]:
    """Factory fixture: append one transition row, the way the ASB does."""

    def _append(swap_id: str, state: str, entered_at: str) -> None:
        writer.execute(
            "INSERT INTO swap_states (swap_id, entered_at, state) VALUES (?, ?, ?)",
            (swap_id, entered_at, state),
        )
        writer.commit()

    return _append


@pytest.fixture
def source() -> Iterator[SwapStateSource]:
    """A read-only source with a short busy timeout, closed after the test."""
    src = SwapStateSource(timeout=0.1)
    yield src
    src.close()


@pytest.fixture
def sleeps() -> list[float]:
    """Records every sleep the loop asks for."""
    return []


@pytest.fixture
def make_loop(
    db_path: Path, source: SwapStateSource, sleeps: list[float]
) -> Callable[..., MonitorLoop]:
    """Factory fixture: a MonitorLoop on the test database with a fixed clock."""

    def _factory(**overrides) -> MonitorLoop:
        kwargs = {
            "source": source,
            "clock": lambda: FIXED_NOW,
            "sleep": sleeps.append,
        }
        kwargs.update(overrides)
        resolver = kwargs.pop("path_resolver", lambda: db_path)
        return MonitorLoop(resolver, **kwargs)

    return _factory


@pytest.fixture
def interrupt_after() -> Callable[[int], Callable[[float], None]]:
    """Factory fixture: a sleep that raises KeyboardInterrupt on its Nth call."""

    def _factory(ticks: int) -> Callable[[float], None]:
        calls = {"n": 0}

        def _sleep(seconds: float) -> None:
            calls["n"] += 1
            if calls["n"] >= ticks:
                raise KeyboardInterrupt

        return _sleep

    return _factory


@pytest.fixture
def stepping_clock() -> Callable[[], datetime]:
    """A clock that advances one second per call, starting at FIXED_NOW + 1s."""
    ticks = {"n": 0}

    def _now() -> datetime:
        ticks["n"] += 1
        return FIXED_NOW + timedelta(seconds=ticks["n"])

    return _now


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """Undo any handler or level changes made to the root logger."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
