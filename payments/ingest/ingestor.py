"""
Ingestor: turn transaction events into ledger mutations.

Each event maps to exactly one store call. Balance rules are not checked
here; withdrawals are recorded unconditionally and judged at replay time.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Dict, Iterable

from ..core.errors import MissingAmountError, UnexpectedAmountError, UnknownEventTypeError
from ..core.events import Event, TransactionType
from ..log.store import LedgerStore

logger = logging.getLogger(__name__)

# Handler signature: (store, event) -> whether the mutation took effect
Handler = Callable[[LedgerStore, Event], bool]


@dataclass
class IngestReport:
    """
    Counters for one ingestion run.

    Fields:
        events: Events consumed
        applied: Mutations that took effect, by event type
        ignored: Events that changed nothing (duplicate tx, unknown
            reference, chargeback of an undisputed entry), by event type
    """
    events: int = 0
    applied: Counter = field(default_factory=Counter)
    ignored: Counter = field(default_factory=Counter)

    def record(self, event_type: TransactionType, took_effect: bool) -> None:
        self.events += 1
        if took_effect:
            self.applied[event_type.value] += 1
        else:
            self.ignored[event_type.value] += 1

    def to_dict(self) -> Dict[str, object]:
        return {
            "events": self.events,
            "applied": dict(sorted(self.applied.items())),
            "ignored": dict(sorted(self.ignored.items())),
        }


def _require_amount(event: Event) -> Decimal:
    if event.amount is None:
        raise MissingAmountError(
            f"{event.type.value} for tx {event.tx} must have an amount", line=event.line
        )
    return event.amount


def _reject_amount(event: Event) -> None:
    if event.amount is not None:
        raise UnexpectedAmountError(
            f"{event.type.value} for tx {event.tx} must not have an amount", line=event.line
        )


def handle_deposit(store: LedgerStore, event: Event) -> bool:
    return store.insert(event.client, event.tx, _require_amount(event))


def handle_withdrawal(store: LedgerStore, event: Event) -> bool:
    return store.insert(event.client, event.tx, _require_amount(event).copy_negate())


def handle_dispute(store: LedgerStore, event: Event) -> bool:
    _reject_amount(event)
    return store.set_disputed(event.client, event.tx, True)


def handle_resolve(store: LedgerStore, event: Event) -> bool:
    _reject_amount(event)
    return store.set_disputed(event.client, event.tx, False)


def handle_chargeback(store: LedgerStore, event: Event) -> bool:
    _reject_amount(event)
    return store.chargeback(event.client, event.tx)


class Ingestor:
    """
    Registry of per-type handlers applied against one store.

    Usage:
        ingestor = Ingestor(store)
        ingestor.apply(event)
        report = ingestor.ingest(events)
    """

    def __init__(self, store: LedgerStore) -> None:
        self.store = store
        self._handlers: Dict[TransactionType, Handler] = {}
        self.register(TransactionType.DEPOSIT, handle_deposit)
        self.register(TransactionType.WITHDRAWAL, handle_withdrawal)
        self.register(TransactionType.DISPUTE, handle_dispute)
        self.register(TransactionType.RESOLVE, handle_resolve)
        self.register(TransactionType.CHARGEBACK, handle_chargeback)

    def register(self, event_type: TransactionType, handler: Handler) -> None:
        self._handlers[event_type] = handler

    def apply(self, event: Event) -> bool:
        """
        Apply one event to the store.

        Returns:
            True if the store changed. References to a missing or foreign
            (client, tx) are not errors and return False.

        Raises:
            MalformedEventError: If the event cannot be applied
            StoreError: If the store fails
        """
        handler = self._handlers.get(event.type)
        if handler is None:
            raise UnknownEventTypeError(f"no handler for event type: {event.type}", line=event.line)

        took_effect = handler(self.store, event)
        if not took_effect:
            logger.debug(
                "event ignored",
                extra={"type": event.type.value, "client": event.client, "tx": event.tx},
            )
        return took_effect

    def ingest(self, events: Iterable[Event]) -> IngestReport:
        """
        Apply events sequentially, in arrival order.

        Stops at the first malformed event or store failure.
        """
        report = IngestReport()
        for event in events:
            report.record(event.type, self.apply(event))
        logger.info("ingestion complete", extra=report.to_dict())
        return report
