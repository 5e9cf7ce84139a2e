"""``swapmonitor path`` — show the resolved ASB database path."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from swapmonitor.cli.commands._options import DbOption, NetworkOption, effective_config
from swapmonitor.core.paths import NoHomeDirectory

console = Console()


def path_cmd(
    network: Optional[str] = NetworkOption,
    db_path: Optional[Path] = DbOption,
) -> None:
    """Print where the ASB database is expected and whether it exists."""
    cfg = effective_config(network, db_path)
    try:
        path = cfg.path_resolver()()
    except NoHomeDirectory:
        console.print("[bold red]Could not resolve ASB data directory for this OS.[/bold red]")
        raise typer.Exit(code=1)

    console.print(str(path), highlight=False, soft_wrap=True)
    if path.exists():
        console.print("[green]exists[/green]")
    else:
        console.print("[yellow]not found[/yellow]")
