"""The poll-diff-render loop.

Each tick re-checks the database path, (re)connects if needed, queries
the latest swap states, marks changes and builds a full frame.  Nothing
a tick runs into is fatal: every failure becomes an error line in the
frame and the next tick tries again.

States
------
NO_PATH       home directory unknown, database path unresolvable
PATH_MISSING  path resolved but no file there yet
DISCONNECTED  file exists, no usable connection
CONNECTED     connection open and the last query succeeded
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict
from rich.console import RenderableType
from rich.text import Text

from swapmonitor.core.change_tracker import ChangeTracker
from swapmonitor.core.data_source import (
    DatabaseConnectionError,
    QueryError,
    SwapStateSource,
)
from swapmonitor.core.paths import NoHomeDirectory, abbreviate_home, home_dir
from swapmonitor.models.swaps import SwapView
from swapmonitor.monitor.renderer import (
    render_error,
    render_frame,
    render_header,
    render_hint,
    render_table,
)

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "WraithSwap ASB Monitor"
DEFAULT_INTERVAL = 2.0


class LoopState(str, Enum):
    NO_PATH = "no_path"
    PATH_MISSING = "path_missing"
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


class TickResult(BaseModel):
    """Outcome of a single tick: where the loop ended up and what to show."""

    model_config = ConfigDict(frozen=True)

    state: LoopState
    frame: Any  # Rich renderable
    views: list[SwapView] = []
    error: str | None = None


class MonitorLoop:
    """Ties path resolution, the data source, change tracking and rendering.

    The loop owns all mutable state: the connection (through
    ``SwapStateSource``) and the change mapping (through ``ChangeTracker``).

    Parameters
    ----------
    path_resolver:
        Returns the database path; may raise ``NoHomeDirectory``.
    source:
        Data source to query.  A fresh one is created if not provided.
    tracker:
        Change tracker.  A fresh one is created if not provided.
    title:
        Header title.
    network:
        Network name used in the "start ASB" hint.
    interval:
        Seconds to sleep between ticks.
    clock:
        Returns the time shown in the header.
    sleep:
        Called with ``interval`` between ticks.
    """

    def __init__(
        self,
        path_resolver: Callable[[], Path],
        *,
        source: SwapStateSource | None = None,
        tracker: ChangeTracker | None = None,
        title: str = DEFAULT_TITLE,
        network: str = "testnet",
        interval: float = DEFAULT_INTERVAL,
        clock: Callable[[], datetime] = datetime.now,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._resolve_path = path_resolver
        self.source = source or SwapStateSource()
        self.tracker = tracker or ChangeTracker()
        self._title = title
        self._network = network
        self._interval = interval
        self._clock = clock
        self._sleep = sleep
        self.state = LoopState.DISCONNECTED

    # ------------------------------------------------------------------
    # Single tick
    # ------------------------------------------------------------------

    def tick(self) -> TickResult:
        """Run one poll and return the frame to display."""
        try:
            path: Path | None = self._resolve_path()
        except NoHomeDirectory as exc:
            logger.debug("Database path unresolvable: %s", exc)
            path = None

        exists = False
        access_error: OSError | None = None
        if path is not None:
            try:
                exists = path.exists()
            except OSError as exc:
                access_error = exc

        header = render_header(
            self._title,
            connected=exists,
            db_display=abbreviate_home(path, home_dir()),
            now=self._clock(),
        )

        if path is None:
            self.source.close()
            return self._finish(
                LoopState.NO_PATH,
                header,
                "Could not resolve ASB data directory for this OS.",
            )

        if access_error is not None:
            self.source.close()
            logger.warning("Cannot check database path %s: %s", path, access_error)
            return self._finish(
                LoopState.PATH_MISSING,
                header,
                f"Cannot access database path: {access_error}",
            )

        if not exists:
            # A handle to a deleted file would keep reading the stale copy.
            self.source.close()
            logger.debug("Database not found at %s", path)
            return self._finish(
                LoopState.PATH_MISSING,
                header,
                f"Database not found yet: {path}",
                hint=f"Start ASB first: ./bin/asb --{self._network} start",
            )

        if not self.source.connected:
            try:
                self.source.connect(path)
            except DatabaseConnectionError as exc:
                logger.warning("Failed to connect to %s: %s", path, exc)
                return self._finish(
                    LoopState.DISCONNECTED,
                    header,
                    f"Failed to connect (read-only): {exc}",
                )

        try:
            records = self.source.query_latest_states()
        except QueryError as exc:
            logger.warning("Failed to query swaps, reconnecting next tick: %s", exc)
            return self._finish(
                LoopState.DISCONNECTED,
                header,
                f"Failed to query swaps: {exc}",
            )

        views = self.tracker.diff(records)
        frame = render_frame(
            header,
            render_table(views),
            Text(""),
            render_hint("Watching for changes... (Ctrl+C to exit)"),
        )
        self._set_state(LoopState.CONNECTED)
        return TickResult(state=LoopState.CONNECTED, frame=frame, views=views)

    def _finish(
        self,
        state: LoopState,
        header: RenderableType,
        message: str,
        *,
        hint: str | None = None,
    ) -> TickResult:
        body: list[RenderableType] = [render_error(message)]
        if hint:
            body.append(render_hint(hint))
        self._set_state(state)
        return TickResult(
            state=state, frame=render_frame(header, *body), error=message
        )

    def _set_state(self, state: LoopState) -> None:
        if state != self.state:
            logger.info("Monitor state %s -> %s", self.state.value, state.value)
        self.state = state

    # ------------------------------------------------------------------
    # Forever
    # ------------------------------------------------------------------

    def run(self, display: Callable[[RenderableType], None]) -> None:
        """Tick forever, handing each frame to *display*.

        Only returns by exception; Ctrl+C surfaces as ``KeyboardInterrupt``
        during the sleep between ticks.
        """
        logger.info("Watching swaps every %.1fs", self._interval)
        try:
            while True:
                display(self.tick().frame)
                self._sleep(self._interval)
        finally:
            self.source.close()
