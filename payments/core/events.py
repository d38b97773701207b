"""
Event model for incoming transaction records.

Events are transient: the ingestor turns each one into a single store
mutation and discards it.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


@dataclass(frozen=True)
class Event:
    """
    Immutable transaction event.

    Fields:
        type: One of the five transaction kinds
        client: Client identifier (u16)
        tx: Transaction identifier (u32, globally unique for deposits/withdrawals)
        amount: Unsigned amount for deposits/withdrawals, None otherwise
        line: Source line number, when the event came from a file
    """
    type: TransactionType
    client: int
    tx: int
    amount: Optional[Decimal] = None
    line: Optional[int] = None
