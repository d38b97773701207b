"""
Verify command: check a ledger journal hash chain
"""

import json

import typer
from rich.console import Console

from payments.core.errors import IntegrityError
from payments.log import verify_journal

from ._common import fail

console = Console()


def verify_command(
    journal: str = typer.Option("transactions.journal", "--journal", "-j", help="Path to ledger journal"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Verify every link of a journal written by the file backend.

    Examples:
        payments verify --journal transactions.journal
        payments verify -j transactions.journal --json
    """
    try:
        count = verify_journal(journal)
    except FileNotFoundError:
        fail(f"journal not found: {journal}")
    except IntegrityError as e:
        if json_output:
            print(json.dumps({"valid": False, "error": str(e)}))
            raise typer.Exit(1)
        fail(str(e), code=1)

    if json_output:
        print(json.dumps({"valid": True, "records": count}))
    else:
        console.print(f"[green]✓ Journal valid[/green] ({count} records)")
