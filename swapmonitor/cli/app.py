"""Main Typer application — imports and registers all CLI commands.

Entry point: ``swapmonitor`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import typer

from swapmonitor.cli.commands.path_cmd import path_cmd
from swapmonitor.cli.commands.snapshot_cmd import snapshot_cmd
from swapmonitor.cli.commands.watch_cmd import watch_cmd

app = typer.Typer(
    name="swapmonitor",
    help="Read-only terminal dashboard for ASB swap states.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="watch", help="Watch swap states until interrupted.")(watch_cmd)
app.command(name="snapshot", help="Print the current swap table once.")(snapshot_cmd)
app.command(name="path", help="Show where the ASB database is expected.")(path_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
