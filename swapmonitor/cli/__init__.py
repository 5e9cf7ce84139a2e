"""swapmonitor CLI — Typer-based command-line interface.

Provides the ``swapmonitor`` command with subcommands for watching the
ASB swap table, printing a single snapshot, and showing where the
database is expected.

All output uses Rich for formatted terminal display.
"""
