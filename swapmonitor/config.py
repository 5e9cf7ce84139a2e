"""Monitor configuration — env-driven.

Centralized config using pydantic-settings.  Reads from a .env file and
SWAPMONITOR_* environment variables; CLI options override both.
"""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Callable, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from swapmonitor.core.paths import resolve_db_path


class MonitorConfig(BaseSettings):
    """Monitor configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export SWAPMONITOR_NETWORK=mainnet
        export SWAPMONITOR_REFRESH_INTERVAL=5
        export SWAPMONITOR_DB_PATH=/data/asb/sqlite

    Or via .env file::

        SWAPMONITOR_LOG_FILE=swapmonitor.log
        SWAPMONITOR_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SWAPMONITOR_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database location
    network: Literal["testnet", "mainnet"] = "testnet"
    db_path: Path | None = None  # skips OS-specific resolution when set

    # Polling
    refresh_interval: float = 2.0
    connect_timeout: float = 0.5

    # Display
    title: str = "WraithSwap ASB Monitor"
    live: bool = True

    # Logging
    log_level: str = "WARNING"
    log_file: Path | None = None

    def path_resolver(self) -> Callable[[], Path]:
        """Return a callable yielding the database path on every tick."""
        if self.db_path is not None:
            db_path = self.db_path.expanduser()
            return lambda: db_path
        return partial(resolve_db_path, self.network)


# Module-level singleton — import as `from swapmonitor.config import config`
config = MonitorConfig()
