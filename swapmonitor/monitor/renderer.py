"""Rich terminal renderer for the swap monitor.

Every ``render_*`` function is pure: it turns values into a Rich
renderable and keeps no state.  ``MonitorRenderer`` owns the console and
puts frames on screen, either by clearing and reprinting or through
``Rich.Live``.

Color scheme
------------
- cyan      : Started
- blue      : BtcLockProofReceived, XmrLockProofSent
- yellow    : EncSigSent
- green     : BtcRedeemed (with a check mark)
- magenta   : XmrRefunded, BtcCancelled
- red       : BtcPunished
- dim       : SafelyAborted
- bold      : any state that changed since the previous poll
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from rich import box
from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from swapmonitor.models.swaps import SwapView

if TYPE_CHECKING:
    from swapmonitor.monitor.loop import MonitorLoop


HEADER_WIDTH = 64
ID_WIDTH = 8
ID_PREFIX = 6
ID_ELLIPSIS = ".."
STATE_WIDTH = 23
TIMESTAMP_WIDTH = 23

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


# ---------------------------------------------------------------------------
# State -> Rich style mapping
# ---------------------------------------------------------------------------

_DEFAULT_STATE_STYLE = ""

_STATE_STYLES: dict[str, str] = {
    "Started": "cyan",
    "BtcLockProofReceived": "blue",
    "XmrLockProofSent": "blue",
    "EncSigSent": "yellow",
    "BtcRedeemed": "green",
    "XmrRefunded": "magenta",
    "BtcCancelled": "magenta",
    "BtcPunished": "red",
    "SafelyAborted": "dim",
}

_STATE_SUFFIXES: dict[str, str] = {
    "BtcRedeemed": " ✓",
}


def state_style(state: str) -> str:
    """Return the Rich style for *state*; unknown labels get no style."""
    return _STATE_STYLES.get(state, _DEFAULT_STATE_STYLE)


# ---------------------------------------------------------------------------
# Cell formatting
# ---------------------------------------------------------------------------


def truncate_id(swap_id: str) -> str:
    """Shorten long swap ids to ``ID_PREFIX`` characters plus ``..``."""
    if len(swap_id) <= ID_WIDTH:
        return swap_id
    return swap_id[:ID_PREFIX] + ID_ELLIPSIS


def truncate_timestamp(entered_at: str) -> str:
    return entered_at[:TIMESTAMP_WIDTH]


def format_state(state: str, changed: bool) -> Text:
    """Render a state label with its color, bold when it just changed.

    The label is never parsed as markup, so labels containing brackets
    display verbatim.
    """
    style = state_style(state)
    if changed:
        style = f"{style} bold".strip()
    return Text(state + _STATE_SUFFIXES.get(state, ""), style=style)


# ---------------------------------------------------------------------------
# Frame sections
# ---------------------------------------------------------------------------


def render_header(
    title: str,
    connected: bool,
    db_display: str,
    now: datetime,
) -> Panel:
    """Render the fixed-width status block shown at the top of every frame.

    Parameters
    ----------
    title:
        Dashboard title.
    connected:
        Whether the database file currently exists.
    db_display:
        Database path as it should be shown (home already abbreviated).
    now:
        Time of this redraw.
    """
    status = (
        Text("Connected", style="green")
        if connected
        else Text("Disconnected", style="red")
    )
    lines = Group(
        Text.assemble("Status: ", status),
        Text(f"Database: {db_display}", overflow="fold"),
        Text(f"Last updated: {now.strftime(TIMESTAMP_FORMAT)}"),
    )
    return Panel(
        lines,
        title=Text(title, style="bold"),
        box=box.DOUBLE,
        width=HEADER_WIDTH,
        padding=(0, 1),
    )


def render_table(views: list[SwapView]) -> RenderableType:
    """Render the swap table, or an empty-state message when there are no rows."""
    if not views:
        return Text("No swaps yet.", style="yellow")

    table = Table(
        box=box.SQUARE,
        show_header=True,
        header_style="bold",
        pad_edge=True,
    )
    table.add_column("Swap ID", width=ID_WIDTH, no_wrap=True)
    table.add_column("State", width=STATE_WIDTH, no_wrap=True)
    table.add_column("Entered At", width=TIMESTAMP_WIDTH, no_wrap=True)

    for view in views:
        table.add_row(
            Text(truncate_id(view.swap_id)),
            format_state(view.state, view.changed),
            Text(truncate_timestamp(view.entered_at)),
        )

    return table


def render_error(message: str) -> Text:
    return Text(f"Error: {message}", style="bold red")


def render_hint(message: str) -> Text:
    return Text(message, style="dim")


def render_frame(header: RenderableType, *body: RenderableType) -> Group:
    """Stack the header and body sections into one frame."""
    return Group(header, Text(""), *body)


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------


class MonitorRenderer:
    """Puts frames on the terminal.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def draw(self, frame: RenderableType) -> None:
        """Clear the screen and print *frame* from the top-left corner."""
        self.console.clear()
        self.console.print(frame)

    def render_live(self, loop: MonitorLoop) -> None:
        """Run *loop* inside ``Rich.Live``, replacing the frame every tick.

        Returns when interrupted with Ctrl+C.
        """
        with Live(
            console=self.console,
            auto_refresh=False,
            transient=False,
        ) as live:
            try:
                loop.run(lambda frame: live.update(frame, refresh=True))
            except KeyboardInterrupt:
                pass

    def render_plain(self, loop: MonitorLoop) -> None:
        """Run *loop*, clearing and redrawing the screen every tick."""
        try:
            loop.run(self.draw)
        except KeyboardInterrupt:
            pass
