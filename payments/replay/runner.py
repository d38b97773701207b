"""
Replay runner: reconstruct account snapshots from the ledger.

A snapshot is a fold over one client's entries in ordinal order. The fold
is pure; only reconstruct_account() touches the store.
"""

from decimal import localcontext
from typing import Iterable, Iterator

from ..core.account import AccountSnapshot
from ..core.money import LEDGER_CONTEXT, ZERO
from ..log.store import LedgerEntry, LedgerStore
from ..query import list_clients


def fold_entries(client: int, entries: Iterable[LedgerEntry]) -> AccountSnapshot:
    """
    Fold ledger entries into an account snapshot.

    Per entry, in order:
    - charged_back: stop and lock, keeping what was accumulated so far
    - disputed: abs(amount) goes to held; a disputed withdrawal also
      debits available
    - otherwise: amount goes to available
    - a candidate with available < 0 is dropped and the fold moves on

    Args:
        client: Client the entries belong to
        entries: Entries in ascending ordinal order

    Returns:
        Snapshot rounded half-even to 4 places
    """
    available = ZERO
    held = ZERO
    locked = False

    with localcontext(LEDGER_CONTEXT):
        for entry in entries:
            if entry.charged_back:
                locked = True
                break

            new_available = available
            new_held = held
            if entry.disputed:
                new_held += abs(entry.amount)
                if entry.amount < ZERO:
                    new_available += entry.amount
            else:
                new_available += entry.amount

            if new_available < ZERO:
                continue

            available = new_available
            held = new_held

        snapshot = AccountSnapshot(
            client=client,
            available=available,
            held=held,
            total=available + held,
            locked=locked,
        )
        return snapshot.rounded()


def reconstruct_account(store: LedgerStore, client: int) -> AccountSnapshot:
    """
    Replay one client's ledger.

    Same store contents always produce the same snapshot. Flags may change
    between calls, so results are only stable for a fixed store.
    """
    return fold_entries(client, store.stream_entries(client))


def replay_accounts(store: LedgerStore) -> Iterator[AccountSnapshot]:
    """
    Replay every client in ascending client order.

    Must only run once ingestion is complete.

    Yields:
        One snapshot per client
    """
    for client in list_clients(store):
        yield reconstruct_account(store, client)
