"""
LedgerStore abstract interface.

Defines the contract every ledger backend implements.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator, List


@dataclass(frozen=True)
class LedgerEntry:
    """
    One deposit or withdrawal record.

    Fields:
        ordinal: Insertion order (assigned by the store, monotonic)
        client: Owning client
        tx: Transaction id (unique across the whole ledger)
        amount: Signed amount (positive = deposit, negative = withdrawal)
        disputed: Currently under dispute
        charged_back: Reversed by a chargeback
    """
    ordinal: int
    client: int
    tx: int
    amount: Decimal
    disputed: bool = False
    charged_back: bool = False


class LedgerStore(ABC):
    """
    Abstract ledger storage interface.

    All implementations must guarantee:
    - One entry per tx (first insert wins, later collisions are ignored)
    - Ordinals increase with insertion order
    - Flag updates match on (client, tx), never on tx alone
    - Writes are serialized
    """

    @abstractmethod
    def reset(self) -> None:
        """
        Drop every entry and start from an empty ledger.

        Raises:
            StoreError: If the backend cannot be recreated
        """
        ...

    @abstractmethod
    def insert(self, client: int, tx: int, amount: Decimal) -> bool:
        """
        Insert a new entry unless tx already exists.

        Returns:
            True if inserted, False if tx collided
        """
        ...

    @abstractmethod
    def set_disputed(self, client: int, tx: int, disputed: bool) -> bool:
        """
        Set the disputed flag on the (client, tx) entry.

        Returns:
            True if an entry matched and its flag changed
        """
        ...

    @abstractmethod
    def chargeback(self, client: int, tx: int) -> bool:
        """
        Charge back the (client, tx) entry if it is currently disputed.

        Clears disputed and sets charged_back.

        Returns:
            True if the chargeback was applied
        """
        ...

    @abstractmethod
    def list_clients(self) -> List[int]:
        """Return distinct clients with at least one entry."""
        ...

    @abstractmethod
    def stream_entries(self, client: int) -> Iterator[LedgerEntry]:
        """
        Read a client's entries.

        Yields:
            Entries in ascending ordinal order
        """
        ...

    def close(self) -> None:
        """
        Release backend resources.

        Implementations may override. Default does nothing.
        """
        return None

    def __enter__(self) -> "LedgerStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
