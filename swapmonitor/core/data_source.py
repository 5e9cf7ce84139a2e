"""Read-only access to the ASB ``swap_states`` table.

The ASB owns the database and keeps writing to it while we watch.
This module never writes:
- The connection is opened through a ``file:`` URI with ``mode=ro``, so a
  missing file is an error rather than a freshly created empty database.
- ``PRAGMA query_only`` is set on every handle.
- Journal mode is left alone; changing it would need a write lock.

A single handle is kept across polls.  Any query failure discards it and
the next poll reconnects from scratch.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from swapmonitor.models.swaps import SwapRecord

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

# Latest row per swap_id, by row id.  entered_at can tie, so id breaks ties
# in the ordering as well.
_SELECT_LATEST_STATES = """
SELECT swap_id, state, entered_at
FROM swap_states
WHERE id IN (SELECT MAX(id) FROM swap_states GROUP BY swap_id)
ORDER BY entered_at DESC, id DESC
"""


class DatabaseConnectionError(RuntimeError):
    """Raised when the database cannot be opened read-only."""


class QueryError(RuntimeError):
    """Raised when the latest-state query fails."""


def open_read_only(path: Path, *, timeout: float = 0.5) -> sqlite3.Connection:
    """Open *path* read-only.  Fails if the file does not exist.

    Parameters
    ----------
    path:
        Path to the ASB SQLite file.
    timeout:
        Seconds to wait on a locked database before giving up.
    """
    try:
        uri = f"{Path(path).absolute().as_uri()}?mode=ro"
        conn = sqlite3.connect(uri, uri=True, timeout=timeout)
    except (sqlite3.Error, OSError) as exc:
        raise DatabaseConnectionError(f"open database at {path}: {exc}") from exc

    conn.row_factory = sqlite3.Row
    try:
        conn.execute("PRAGMA query_only=ON")
    except sqlite3.Error as exc:
        conn.close()
        raise DatabaseConnectionError(f"open database at {path}: {exc}") from exc
    return conn


def fetch_latest_states(conn: sqlite3.Connection) -> list[SwapRecord]:
    """Return the latest state of every swap, most recent first.

    An empty ``swap_states`` table yields an empty list.
    """
    try:
        rows = conn.execute(_SELECT_LATEST_STATES).fetchall()
    except sqlite3.Error as exc:
        raise QueryError(str(exc)) from exc

    return [
        SwapRecord(
            swap_id=str(row["swap_id"]),
            state=str(row["state"]),
            entered_at=str(row["entered_at"]),
        )
        for row in rows
    ]


class SwapStateSource:
    """Owns the single read-only connection to the ASB database.

    Parameters
    ----------
    timeout:
        Busy timeout in seconds passed to ``open_read_only``.
    """

    def __init__(self, *, timeout: float = 0.5) -> None:
        self._timeout = timeout
        self._conn: sqlite3.Connection | None = None

    @property
    def connected(self) -> bool:
        return self._conn is not None

    def connect(self, path: Path) -> None:
        """Open *path* unless a handle is already open.

        Raises ``DatabaseConnectionError``; the source stays disconnected.
        """
        if self._conn is not None:
            return
        self._conn = open_read_only(path, timeout=self._timeout)
        logger.info("Connected read-only to %s", path)

    def query_latest_states(self) -> list[SwapRecord]:
        """Run the latest-state query on the open handle.

        On failure the handle is closed and dropped before ``QueryError``
        is raised, so the next ``connect()`` opens a fresh one.
        """
        if self._conn is None:
            raise QueryError("not connected")
        try:
            return fetch_latest_states(self._conn)
        except QueryError:
            self.close()
            raise

    def close(self) -> None:
        """Drop the handle, if any."""
        conn, self._conn = self._conn, None
        if conn is None:
            return
        try:
            conn.close()
        except sqlite3.Error as exc:
            logger.debug("Ignoring error while closing connection: %s", exc)
        logger.debug("Connection dropped")
