"""
Account snapshot model.

Snapshots are derived and ephemeral: rebuilt from the ledger on every
report, never persisted.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict

from .money import ZERO, add_amounts, round_amount


@dataclass(frozen=True)
class AccountSnapshot:
    """
    Final state of one client account.

    Fields:
        client: Client identifier
        available: Funds free to use
        held: Funds frozen by open disputes
        total: available + held
        locked: True once a chargeback halted the replay
    """
    client: int
    available: Decimal = ZERO
    held: Decimal = ZERO
    total: Decimal = ZERO
    locked: bool = False

    @staticmethod
    def empty(client: int) -> "AccountSnapshot":
        return AccountSnapshot(client=client)

    def rounded(self) -> "AccountSnapshot":
        """
        Round available and held to reporting precision.

        total is recomputed from the rounded parts so that
        total == available + held holds exactly in the report.
        """
        available = round_amount(self.available)
        held = round_amount(self.held)
        return AccountSnapshot(
            client=self.client,
            available=available,
            held=held,
            total=add_amounts(available, held),
            locked=self.locked,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "client": self.client,
            "available": str(self.available),
            "held": str(self.held),
            "total": str(self.total),
            "locked": self.locked,
        }
