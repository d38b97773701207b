"""
Replay system for account reconstruction.

Replay folds each client's ledger into a snapshot.
Must be 100% deterministic: same ledger -> same snapshots.
"""

from .runner import fold_entries, reconstruct_account, replay_accounts

__all__ = [
    "fold_entries",
    "reconstruct_account",
    "replay_accounts",
]
