"""``swapmonitor watch`` — poll the ASB database and redraw until Ctrl+C.

The display never stops on errors: a missing database, a failed connect
or a failed query is shown in the frame and retried on the next tick.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from swapmonitor.cli.commands._options import DbOption, NetworkOption, effective_config
from swapmonitor.core.data_source import SwapStateSource
from swapmonitor.logging_setup import setup_logging
from swapmonitor.monitor.loop import MonitorLoop
from swapmonitor.monitor.renderer import MonitorRenderer

console = Console()
log_console = Console(stderr=True)


def watch_cmd(
    network: Optional[str] = NetworkOption,
    db_path: Optional[Path] = DbOption,
    interval: Optional[float] = typer.Option(
        None,
        "--interval",
        "-i",
        min=0.1,
        help="Seconds between polls.",
    ),
    live: Optional[bool] = typer.Option(
        None,
        "--live/--no-live",
        help="Redraw in place with Rich Live, or clear the screen every tick.",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Write logs to this file instead of the terminal.",
    ),
) -> None:
    """Watch the latest state of every swap.

    Swaps whose state changed since the previous poll are shown in bold.
    Change history lives only in this process; a restart starts fresh.
    """
    cfg = effective_config(
        network,
        db_path,
        refresh_interval=interval,
        live=live,
        log_level=log_level,
        log_file=log_file,
    )
    setup_logging(cfg.log_level, log_file=cfg.log_file, console=log_console)

    loop = MonitorLoop(
        cfg.path_resolver(),
        source=SwapStateSource(timeout=cfg.connect_timeout),
        title=cfg.title,
        network=cfg.network,
        interval=cfg.refresh_interval,
    )
    renderer = MonitorRenderer(console=console)

    if cfg.live:
        renderer.render_live(loop)
    else:
        renderer.render_plain(loop)
