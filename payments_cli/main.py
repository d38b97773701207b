#!/usr/bin/env python3
"""
Payments CLI - batch account replay

Main entrypoint for the payments command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from payments_cli.commands import entries, process, verify

app = typer.Typer(
    name="payments",
    help="Replay transaction logs into client account balances",
    add_completion=False,
)

console = Console()

app.command("process")(process.process_command)
app.command("entries")(entries.entries_command)
app.command("verify")(verify.verify_command)


@app.command()
def version():
    """Show version information."""
    from payments import __version__ as engine_version
    from payments_cli import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]Payments CLI[/bold]", f"v{__version__}")
    table.add_row("Engine", f"v{engine_version}")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
