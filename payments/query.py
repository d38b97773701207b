"""
Deterministic query helpers over a ledger store.
"""

from typing import List

from .log.store import LedgerEntry, LedgerStore


def list_clients(store: LedgerStore) -> List[int]:
    """Distinct clients with at least one entry, ascending."""
    return sorted(store.list_clients())


def get_entries(store: LedgerStore, client: int) -> List[LedgerEntry]:
    return list(store.stream_entries(client))

