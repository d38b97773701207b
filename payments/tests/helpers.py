"""
Shared builders for tests.
"""

import os
from decimal import Decimal
from typing import List, Optional

from payments.core.account import AccountSnapshot
from payments.core.events import Event, TransactionType
from payments.log import FileLedgerStore, MemoryLedgerStore, SqlLedgerStore

BACKENDS = ["memory", "sqlite-memory", "sqlite-file", "file"]


def make_store(backend: str, tmpdir: str):
    if backend == "memory":
        return MemoryLedgerStore()
    if backend == "sqlite-memory":
        return SqlLedgerStore("sqlite://")
    if backend == "sqlite-file":
        return SqlLedgerStore("sqlite:///" + os.path.join(tmpdir, "transactions.db"))
    if backend == "file":
        return FileLedgerStore(os.path.join(tmpdir, "transactions.journal"), fsync=False)
    raise ValueError(backend)


def ev(kind: str, client: int, tx: int, amount: Optional[str] = None) -> Event:
    return Event(
        type=TransactionType(kind),
        client=client,
        tx=tx,
        amount=Decimal(amount) if amount is not None else None,
    )


def events(*rows) -> List[Event]:
    return [ev(*row) for row in rows]


def acct(client: int, available: str, held: str, total: str, locked: bool) -> AccountSnapshot:
    return AccountSnapshot(
        client=client,
        available=Decimal(available),
        held=Decimal(held),
        total=Decimal(total),
        locked=locked,
    )
