"""Root logger setup for the CLI.

Logs go to a file when one is configured.  Otherwise they go through a
``RichHandler`` on the dashboard console, which prints them above a
``Rich.Live`` display instead of through it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

_FILE_FORMAT = '%(asctime)s level=%(levelname)s name=%(name)s msg="%(message)s"'


def setup_logging(
    level: str = "WARNING",
    *,
    log_file: Path | None = None,
    console: Console | None = None,
) -> logging.Handler:
    """Install a single handler on the root logger and return it."""
    handler: logging.Handler
    if log_file is not None:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    else:
        handler = RichHandler(console=console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)
    return handler
