"""
Helpers shared by CLI commands.
"""

import uuid
from typing import NoReturn, Optional

import typer
from rich.console import Console

from payments.config import Settings, load_settings
from payments.log import LedgerStore, open_store
from payments.logging_config import get_logger, setup_logging

err_console = Console(stderr=True)


def fail(message: str, code: int = 2) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {message}", highlight=False)
    raise typer.Exit(code)


def init_run(name: str):
    """
    Load settings and configure logging for one CLI invocation.

    Returns:
        (settings, logger) with a fresh run_id on the logger
    """
    try:
        settings = load_settings()
    except ValueError as e:
        fail(str(e))
    setup_logging(settings.log_level, settings.log_format)
    return settings, get_logger(name, run_id=uuid.uuid4().hex[:12])


def open_ledger(
    settings: Settings,
    store: Optional[str],
    db_url: Optional[str],
    journal: Optional[str],
) -> LedgerStore:
    """
    Open the ledger selected by CLI options, falling back to settings.

    Every command resets the ledger before ingesting, so a journal left by
    an earlier run is truncated rather than loaded.
    """
    try:
        return open_store(
            kind=(store or settings.store).lower(),
            db_url=db_url or settings.db_url,
            journal_path=journal or settings.journal_path,
            fsync=settings.journal_fsync,
            fresh=True,
        )
    except ValueError as e:
        fail(str(e))
