"""
Batch pipeline: reset, ingest, replay.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List

from .core.account import AccountSnapshot
from .core.events import Event
from .ingest.ingestor import Ingestor, IngestReport
from .log.store import LedgerStore
from .replay.runner import replay_accounts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchResult:
    """
    Result of one batch run.

    Fields:
        ingest: Ingestion counters
        accounts: One snapshot per client, ascending client order
    """
    ingest: IngestReport
    accounts: List[AccountSnapshot]


def run_batch(events: Iterable[Event], store: LedgerStore) -> BatchResult:
    """
    Process a full event log against a fresh ledger.

    Ingestion finishes before any account is replayed, so every snapshot
    sees the same fully ingested ledger.

    Raises:
        MalformedEventError: On the first bad event (nothing is reported)
        StoreError: On any store failure
    """
    store.reset()
    report = Ingestor(store).ingest(events)
    accounts = list(replay_accounts(store))
    logger.info("replay complete", extra={"accounts": len(accounts)})
    return BatchResult(ingest=report, accounts=accounts)
