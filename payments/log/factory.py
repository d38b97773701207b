"""
Store construction from a backend name.
"""

from typing import Optional

from .store import LedgerStore
from .memory_store import MemoryLedgerStore
from .file_store import FileLedgerStore
from .sql_store import DEFAULT_DB_URL, SqlLedgerStore

STORE_KINDS = ("sqlite", "memory", "file")

DEFAULT_JOURNAL_PATH = "transactions.journal"


def open_store(
    kind: str = "sqlite",
    db_url: Optional[str] = None,
    journal_path: Optional[str] = None,
    fsync: bool = True,
    fresh: bool = False,
) -> LedgerStore:
    """
    Build a ledger store.

    Args:
        kind: Backend name (sqlite, memory, file)
        db_url: SQLAlchemy URL for the sqlite backend
        journal_path: Journal file for the file backend
        fsync: Fsync journal appends (file backend only)
        fresh: Caller resets the store before use; an existing journal is
            truncated instead of loaded

    Raises:
        ValueError: If kind is unknown
    """
    if kind == "memory":
        return MemoryLedgerStore()
    if kind == "sqlite":
        return SqlLedgerStore(db_url or DEFAULT_DB_URL)
    if kind == "file":
        return FileLedgerStore(journal_path or DEFAULT_JOURNAL_PATH, fsync=fsync, truncate=fresh)
    raise ValueError(f"unknown store kind: {kind!r} (expected one of {', '.join(STORE_KINDS)})")
