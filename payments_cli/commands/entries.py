"""
Entries command: show one client's ledger after ingestion
"""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from payments.core.errors import IntegrityError, MalformedEventError, StoreError
from payments.core.money import format_amount
from payments.ingest import Ingestor
from payments.io import read_events_from_path
from payments.query import get_entries
from payments.replay import fold_entries

from ._common import fail, init_run, open_ledger

console = Console()


def entries_command(
    input_path: str = typer.Argument(..., help="Path to transactions CSV"),
    client: int = typer.Option(..., "--client", "-c", help="Client id"),
    store: Optional[str] = typer.Option(None, "--store", "-s", help="Ledger backend: sqlite, memory, file"),
    db_url: Optional[str] = typer.Option(None, "--db", help="SQLAlchemy URL for the sqlite backend"),
    journal: Optional[str] = typer.Option(None, "--journal", "-j", help="Journal path for the file backend"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Ingest a transaction log and list the ledger entries of one client.

    Examples:
        payments entries transactions.csv --client 1
        payments entries transactions.csv -c 1 --json
    """
    settings, _ = init_run(__name__)

    try:
        with open_ledger(settings, store, db_url, journal) as ledger:
            ledger.reset()
            Ingestor(ledger).ingest(read_events_from_path(input_path))
            entries = get_entries(ledger, client)
    except FileNotFoundError:
        fail(f"input file not found: {input_path}")
    except OSError as e:
        fail(f"cannot read input file {input_path}: {e.strerror or e}")
    except MalformedEventError as e:
        fail(f"malformed input: {e}")
    except (StoreError, IntegrityError) as e:
        fail(f"ledger store failure: {e}")

    account = fold_entries(client, entries)

    if json_output:
        output = {
            "client": client,
            "entries": [
                {
                    "ordinal": e.ordinal,
                    "tx": e.tx,
                    "amount": str(e.amount),
                    "disputed": e.disputed,
                    "charged_back": e.charged_back,
                }
                for e in entries
            ],
            "account": account.to_dict(),
        }
        print(json.dumps(output, indent=2))
        return

    if not entries:
        console.print(f"[yellow]No ledger entries for client {client}[/yellow]")
        return

    table = Table(title=f"Ledger: client {client}")
    table.add_column("Ordinal", style="cyan", justify="right")
    table.add_column("Tx", justify="right")
    table.add_column("Amount", justify="right")
    table.add_column("Disputed", style="yellow")
    table.add_column("Charged back", style="red")

    for e in entries:
        table.add_row(
            str(e.ordinal),
            str(e.tx),
            str(e.amount),
            "yes" if e.disputed else "",
            "yes" if e.charged_back else "",
        )

    console.print(table)
    console.print(
        f"\n[bold]Available:[/bold] {format_amount(account.available)}  "
        f"[bold]Held:[/bold] {format_amount(account.held)}  "
        f"[bold]Total:[/bold] {format_amount(account.total)}  "
        f"[bold]Locked:[/bold] {'yes' if account.locked else 'no'}"
    )
