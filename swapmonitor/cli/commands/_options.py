"""Options shared by the commands that read the database."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from swapmonitor.config import MonitorConfig, config

NetworkOption = typer.Option(
    None,
    "--network",
    "-n",
    help="ASB network whose database to read (testnet or mainnet).",
)

DbOption = typer.Option(
    None,
    "--db",
    help="Explicit path to the ASB SQLite file; skips OS-specific lookup.",
)


def effective_config(
    network: Optional[str] = None,
    db_path: Optional[Path] = None,
    **overrides: object,
) -> MonitorConfig:
    """Return the module config with any CLI values layered on top."""
    update: dict[str, object] = {
        key: value for key, value in overrides.items() if value is not None
    }
    if network is not None:
        if network not in ("testnet", "mainnet"):
            raise typer.BadParameter(
                f"Unknown network {network!r}; expected testnet or mainnet.",
                param_hint="--network",
            )
        update["network"] = network
    if db_path is not None:
        update["db_path"] = db_path
    return config.model_copy(update=update)
