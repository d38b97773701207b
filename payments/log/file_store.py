"""
File-backed ledger store using an append-only JSONL journal.

Every applied mutation (insert, dispute, resolve, chargeback) is written
as its own immutable, hash-chained record. Entry flags are never updated
in place on disk: reopening the journal folds the records back into the
current ledger view.
"""

import os
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from ..core.canonical import canonical_json_str
from ..core.errors import IntegrityError, StoreError
from ..core.money import amount_to_text
from .integrity import ZERO_HASH, chain_record, iter_verified
from .memory_store import MemoryLedgerStore

logger = logging.getLogger(__name__)

OP_INSERT = "insert"
OP_DISPUTE = "dispute"
OP_RESOLVE = "resolve"
OP_CHARGEBACK = "chargeback"


class FileLedgerStore(MemoryLedgerStore):
    """
    Journal-backed ledger store.

    Storage format: JSONL (newline-delimited JSON)
    Each line: {"prev_hash": "...", "record_hash": "...", "record": {...}}

    Guarantees:
    - Append-only (no rewrites; reset() truncates)
    - Only mutations that take effect are journaled
    - Hash chain verified when an existing journal is opened (unless truncated)
    - Optional fsync after each append
    """

    def __init__(self, path: str, fsync: bool = True, truncate: bool = False) -> None:
        """
        Open (or create) a journal and load its records.

        Args:
            path: Path to JSONL journal
            fsync: Fsync after every append
            truncate: Start from an empty journal, discarding any existing
                file without reading it

        Raises:
            StoreError: If the file cannot be opened
            IntegrityError: If an existing journal fails verification
        """
        super().__init__()
        self.path = path
        self.fsync = fsync
        self._seq = 0
        self._last_hash = ZERO_HASH
        self._fh = None

        try:
            os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
            if not truncate and os.path.exists(path):
                self._load()
            self._fh = open(path, "wb" if truncate else "ab")
        except OSError as ex:
            raise StoreError(str(ex)) from ex

    def _load(self) -> None:
        with open(self.path, "r", encoding="utf-8") as f:
            for record, record_hash in iter_verified(f):
                try:
                    self._apply(record)
                except (KeyError, TypeError, InvalidOperation) as ex:
                    raise IntegrityError(f"malformed journal record: {record!r}") from ex
                self._seq = record["seq"] + 1
                self._last_hash = record_hash
        logger.debug("journal loaded", extra={"path": self.path, "records": self._seq})

    def _apply(self, record: Dict[str, Any]) -> None:
        op = record["op"]
        client = record["client"]
        tx = record["tx"]
        if op == OP_INSERT:
            super().insert(client, tx, Decimal(record["amount"]))
        elif op == OP_DISPUTE:
            super().set_disputed(client, tx, True)
        elif op == OP_RESOLVE:
            super().set_disputed(client, tx, False)
        elif op == OP_CHARGEBACK:
            super().chargeback(client, tx)
        else:
            raise IntegrityError(f"unknown journal op: {op}")

    def _append(self, op: str, client: int, tx: int, amount: Optional[Decimal] = None) -> None:
        record: Dict[str, Any] = {"seq": self._seq, "op": op, "client": client, "tx": tx}
        if amount is not None:
            record["amount"] = amount_to_text(amount)

        rec = chain_record(self._last_hash, record)
        line = canonical_json_str(rec) + "\n"
        try:
            self._fh.write(line.encode("utf-8"))
            self._fh.flush()
            if self.fsync:
                os.fsync(self._fh.fileno())
        except (OSError, ValueError) as ex:
            raise StoreError(str(ex)) from ex

        self._seq += 1
        self._last_hash = rec["record_hash"]

    def reset(self) -> None:
        with self._lock:
            try:
                if self._fh is not None:
                    self._fh.close()
                self._fh = open(self.path, "wb")
            except OSError as ex:
                raise StoreError(str(ex)) from ex
            self._seq = 0
            self._last_hash = ZERO_HASH
            super().reset()

    def insert(self, client: int, tx: int, amount: Decimal) -> bool:
        with self._lock:
            if tx in self._by_tx:
                return False
            self._append(OP_INSERT, client, tx, amount)
            return super().insert(client, tx, amount)

    def set_disputed(self, client: int, tx: int, disputed: bool) -> bool:
        with self._lock:
            idx = self._find(client, tx)
            if idx is None or self._arena[idx].disputed == disputed:
                return False
            self._append(OP_DISPUTE if disputed else OP_RESOLVE, client, tx)
            return super().set_disputed(client, tx, disputed)

    def chargeback(self, client: int, tx: int) -> bool:
        with self._lock:
            idx = self._find(client, tx)
            if idx is None or not self._arena[idx].disputed:
                return False
            self._append(OP_CHARGEBACK, client, tx)
            return super().chargeback(client, tx)

    def close(self) -> None:
        with self._lock:
            if self._fh is not None:
                self._fh.close()
                self._fh = None
