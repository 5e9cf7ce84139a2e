"""Locate the ASB database file for the current OS and user.

Nothing here touches the filesystem; callers check existence themselves
on every tick because the ASB may create the file after we start.
"""

from __future__ import annotations

import platform
from pathlib import Path


_DARWIN_DATA_DIR = Path("Library/Application Support")
_XDG_DATA_DIR = Path(".local/share")
_ASB_SUBDIR = Path("xmr-btc-swap/asb")
_DB_FILENAME = "sqlite"

NETWORKS: tuple[str, ...] = ("testnet", "mainnet")


class NoHomeDirectory(RuntimeError):
    """Raised when the invoking user's home directory cannot be determined."""


def home_dir() -> Path | None:
    """Return the current user's home directory, or None if unknown."""
    try:
        return Path.home()
    except (RuntimeError, KeyError):
        return None


def resolve_db_path(
    network: str = "testnet",
    *,
    system: str | None = None,
    home: Path | None = None,
) -> Path:
    """Return the expected path of the ASB SQLite database.

    Parameters
    ----------
    network:
        ``testnet`` or ``mainnet``.
    system:
        OS name as reported by ``platform.system()``.  Detected when omitted.
    home:
        Home directory to resolve against.  Detected when omitted.

    Raises
    ------
    NoHomeDirectory
        If no home directory was given and none could be detected.
    ValueError
        If ``network`` is not a known network.
    """
    if network not in NETWORKS:
        raise ValueError(f"Unknown network {network!r}; expected one of {NETWORKS}")

    if home is None:
        home = home_dir()
        if home is None:
            raise NoHomeDirectory("Could not determine the home directory")

    system = system if system is not None else platform.system()
    data_dir = _DARWIN_DATA_DIR if system == "Darwin" else _XDG_DATA_DIR
    return Path(home) / data_dir / _ASB_SUBDIR / network / _DB_FILENAME


def abbreviate_home(path: Path | None, home: Path | None) -> str:
    """Render *path* for display, replacing the home prefix with ``~``."""
    if path is None:
        return "unknown"
    if home is None:
        return str(path)
    try:
        relative = Path(path).relative_to(home)
    except ValueError:
        return str(path)
    return "~" if relative == Path(".") else f"~/{relative.as_posix()}"
