"""``swapmonitor snapshot`` — poll once and print the frame.

Exits with code 1 when the database could not be read.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from swapmonitor.cli.commands._options import DbOption, NetworkOption, effective_config
from swapmonitor.core.data_source import SwapStateSource
from swapmonitor.monitor.loop import LoopState, MonitorLoop

console = Console()


def snapshot_cmd(
    network: Optional[str] = NetworkOption,
    db_path: Optional[Path] = DbOption,
) -> None:
    """Print the latest state of every swap once."""
    cfg = effective_config(network, db_path)
    loop = MonitorLoop(
        cfg.path_resolver(),
        source=SwapStateSource(timeout=cfg.connect_timeout),
        title=cfg.title,
        network=cfg.network,
    )
    try:
        result = loop.tick()
    finally:
        loop.source.close()

    console.print(result.frame)
    if result.state != LoopState.CONNECTED:
        raise typer.Exit(code=1)
