"""
Ledger storage and integrity verification.

This module provides:
- LedgerStore: Abstract interface for ledger persistence
- MemoryLedgerStore: Process-local arena of entries
- SqlLedgerStore: SQLAlchemy-backed table (SQLite by default)
- FileLedgerStore: Append-only, hash-chained JSONL journal
- Integrity: Journal hash chain verification
"""

from .store import LedgerStore, LedgerEntry
from .memory_store import MemoryLedgerStore
from .sql_store import SqlLedgerStore
from .file_store import FileLedgerStore
from .factory import STORE_KINDS, open_store
from .integrity import ZERO_HASH, hash_record, chain_record, verify_journal

__all__ = [
    "LedgerStore",
    "LedgerEntry",
    "MemoryLedgerStore",
    "SqlLedgerStore",
    "FileLedgerStore",
    "STORE_KINDS",
    "open_store",
    "ZERO_HASH",
    "hash_record",
    "chain_record",
    "verify_journal",
]
