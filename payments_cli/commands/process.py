"""
Process command: replay a transaction CSV into an account report
"""

import json
import sys
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from payments.core.account import AccountSnapshot
from payments.core.errors import IntegrityError, MalformedEventError, StoreError
from payments.core.money import format_amount
from payments.io import read_events_from_path, write_accounts
from payments.pipeline import BatchResult, run_batch

from ._common import fail, init_run, open_ledger

OUTPUT_FORMATS = ("csv", "json", "table")

console = Console()


def _print_table(accounts: List[AccountSnapshot]) -> None:
    table = Table(title="Accounts")
    table.add_column("Client", style="cyan", justify="right")
    table.add_column("Available", justify="right")
    table.add_column("Held", style="yellow", justify="right")
    table.add_column("Total", style="green", justify="right")
    table.add_column("Locked")

    for acct in accounts:
        table.add_row(
            str(acct.client),
            format_amount(acct.available),
            format_amount(acct.held),
            format_amount(acct.total),
            "[red]yes[/red]" if acct.locked else "no",
        )

    console.print(table)
    console.print(f"\n[bold]Total accounts:[/bold] {len(accounts)}")


def _emit(result: BatchResult, output_format: str) -> None:
    if output_format == "csv":
        write_accounts(result.accounts, sys.stdout)
    elif output_format == "json":
        output = {
            "accounts": [acct.to_dict() for acct in result.accounts],
            "ingest": result.ingest.to_dict(),
        }
        print(json.dumps(output, indent=2))
    else:
        _print_table(result.accounts)


def process_command(
    input_path: str = typer.Argument(..., help="Path to transactions CSV"),
    store: Optional[str] = typer.Option(None, "--store", "-s", help="Ledger backend: sqlite, memory, file"),
    db_url: Optional[str] = typer.Option(None, "--db", help="SQLAlchemy URL for the sqlite backend"),
    journal: Optional[str] = typer.Option(None, "--journal", "-j", help="Journal path for the file backend"),
    output_format: str = typer.Option("csv", "--format", "-f", help="Output format: csv, json, table"),
):
    """
    Replay a transaction log and print one row per client account.

    Examples:
        payments process transactions.csv > accounts.csv
        payments process transactions.csv --store memory
        payments process transactions.csv --format table
    """
    output_format = output_format.lower()
    if output_format not in OUTPUT_FORMATS:
        fail(f"unknown format {output_format!r} (expected one of {', '.join(OUTPUT_FORMATS)})")

    settings, logger = init_run(__name__)

    try:
        with open_ledger(settings, store, db_url, journal) as ledger:
            logger.info("processing", extra={"path": input_path, "store": type(ledger).__name__})
            result = run_batch(read_events_from_path(input_path), ledger)
    except FileNotFoundError:
        fail(f"input file not found: {input_path}")
    except OSError as e:
        fail(f"cannot read input file {input_path}: {e.strerror or e}")
    except MalformedEventError as e:
        fail(f"malformed input: {e}")
    except (StoreError, IntegrityError) as e:
        fail(f"ledger store failure: {e}")

    _emit(result, output_format)
