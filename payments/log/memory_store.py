"""
In-memory ledger store.

Entries live in an arena list indexed by ordinal; each client has an
ordered view of arena positions.
"""

import threading
from dataclasses import replace
from decimal import Decimal
from typing import Dict, Iterator, List, Optional

from .store import LedgerEntry, LedgerStore


class MemoryLedgerStore(LedgerStore):
    """
    Process-local ledger store.

    Guarantees:
    - Writes serialized by a lock
    - stream_entries yields the entries as they were when it was called
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._arena: List[LedgerEntry] = []
        self._by_tx: Dict[int, int] = {}
        self._by_client: Dict[int, List[int]] = {}

    def reset(self) -> None:
        with self._lock:
            self._arena = []
            self._by_tx = {}
            self._by_client = {}

    def _next_ordinal(self) -> int:
        return len(self._arena) + 1

    def _find(self, client: int, tx: int) -> Optional[int]:
        idx = self._by_tx.get(tx)
        if idx is None or self._arena[idx].client != client:
            return None
        return idx

    def insert(self, client: int, tx: int, amount: Decimal) -> bool:
        with self._lock:
            if tx in self._by_tx:
                return False
            entry = LedgerEntry(
                ordinal=self._next_ordinal(),
                client=client,
                tx=tx,
                amount=amount,
            )
            self._arena.append(entry)
            idx = len(self._arena) - 1
            self._by_tx[tx] = idx
            self._by_client.setdefault(client, []).append(idx)
            return True

    def set_disputed(self, client: int, tx: int, disputed: bool) -> bool:
        with self._lock:
            idx = self._find(client, tx)
            if idx is None or self._arena[idx].disputed == disputed:
                return False
            self._arena[idx] = replace(self._arena[idx], disputed=disputed)
            return True

    def chargeback(self, client: int, tx: int) -> bool:
        with self._lock:
            idx = self._find(client, tx)
            if idx is None or not self._arena[idx].disputed:
                return False
            self._arena[idx] = replace(self._arena[idx], disputed=False, charged_back=True)
            return True

    def list_clients(self) -> List[int]:
        with self._lock:
            return list(self._by_client.keys())

    def stream_entries(self, client: int) -> Iterator[LedgerEntry]:
        with self._lock:
            view = [self._arena[idx] for idx in self._by_client.get(client, [])]
        return iter(view)
