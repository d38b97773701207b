"""
Relational ledger store on SQLAlchemy.

Defaults to an embedded SQLite database in WAL mode. Amounts are stored as
TEXT so decimal values round-trip exactly.
"""

import logging
from decimal import Decimal
from typing import Iterator, List, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..core.errors import StoreError
from ..core.money import amount_to_text
from .store import LedgerEntry, LedgerStore

logger = logging.getLogger(__name__)

DEFAULT_DB_URL = "sqlite:///transactions.db"

_DROP_SQL = text("DROP TABLE IF EXISTS transactions")

_CREATE_SQL = text("""
    CREATE TABLE transactions
    (
        ordinal         INTEGER PRIMARY KEY,
        client_id       INTEGER NOT NULL,
        transaction_id  INTEGER NOT NULL UNIQUE,
        amount          TEXT NOT NULL,
        disputed        BOOLEAN NOT NULL DEFAULT 0,
        charged_back    BOOLEAN NOT NULL DEFAULT 0
    )
""")

_CREATE_INDEX_SQL = text("""
    CREATE INDEX ix_transactions_client_ordinal
    ON transactions (client_id, ordinal)
""")

_INSERT_SQL = text("""
    INSERT INTO transactions (client_id, transaction_id, amount, disputed, charged_back)
    VALUES (:client_id, :transaction_id, :amount, 0, 0)
    ON CONFLICT (transaction_id) DO NOTHING
""")

_SET_DISPUTED_SQL = text("""
    UPDATE transactions
    SET disputed = :disputed
    WHERE client_id = :client_id AND transaction_id = :transaction_id AND disputed != :disputed
""")

_CHARGEBACK_SQL = text("""
    UPDATE transactions
    SET disputed = 0, charged_back = 1
    WHERE client_id = :client_id AND transaction_id = :transaction_id AND disputed = 1
""")

_LIST_CLIENTS_SQL = text("SELECT DISTINCT client_id FROM transactions")

_SELECT_ENTRIES_SQL = text("""
    SELECT ordinal, client_id, transaction_id, amount, disputed, charged_back
    FROM transactions
    WHERE client_id = :client_id
    ORDER BY ordinal
""")


def _enable_wal(dbapi_conn, _record) -> None:
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def create_sqlite_engine(url: str = DEFAULT_DB_URL) -> Engine:
    """
    Create an engine for the given URL.

    File-backed SQLite databases are switched to WAL mode on connect.
    """
    engine = create_engine(url)
    if engine.dialect.name == "sqlite" and engine.url.database not in (None, "", ":memory:"):
        event.listen(engine, "connect", _enable_wal)
    return engine


class SqlLedgerStore(LedgerStore):
    """
    Ledger store backed by a single relational table.

    Guarantees:
    - tx uniqueness enforced by a UNIQUE constraint (insert-or-ignore)
    - ordinal is the INTEGER PRIMARY KEY, so it follows insertion order
    - Each write runs in its own transaction
    """

    def __init__(self, url: str = DEFAULT_DB_URL, engine: Optional[Engine] = None) -> None:
        self.url = url
        try:
            self._engine = engine or create_sqlite_engine(url)
        except SQLAlchemyError as ex:
            raise StoreError(str(ex)) from ex

    def _write(self, statement, params=None) -> int:
        try:
            with self._engine.begin() as conn:
                result = conn.execute(statement, params or {})
                return result.rowcount
        except SQLAlchemyError as ex:
            raise StoreError(str(ex)) from ex

    def reset(self) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(_DROP_SQL)
                conn.execute(_CREATE_SQL)
                conn.execute(_CREATE_INDEX_SQL)
        except SQLAlchemyError as ex:
            raise StoreError(str(ex)) from ex
        logger.debug("ledger table recreated", extra={"url": self.url})

    def insert(self, client: int, tx: int, amount: Decimal) -> bool:
        count = self._write(
            _INSERT_SQL,
            {"client_id": client, "transaction_id": tx, "amount": amount_to_text(amount)},
        )
        return count > 0

    def set_disputed(self, client: int, tx: int, disputed: bool) -> bool:
        count = self._write(
            _SET_DISPUTED_SQL,
            {"client_id": client, "transaction_id": tx, "disputed": 1 if disputed else 0},
        )
        return count > 0

    def chargeback(self, client: int, tx: int) -> bool:
        count = self._write(_CHARGEBACK_SQL, {"client_id": client, "transaction_id": tx})
        return count > 0

    def list_clients(self) -> List[int]:
        try:
            with self._engine.connect() as conn:
                return [row.client_id for row in conn.execute(_LIST_CLIENTS_SQL)]
        except SQLAlchemyError as ex:
            raise StoreError(str(ex)) from ex

    def stream_entries(self, client: int) -> Iterator[LedgerEntry]:
        try:
            with self._engine.connect() as conn:
                result = conn.execute(_SELECT_ENTRIES_SQL, {"client_id": client})
                for row in result:
                    yield LedgerEntry(
                        ordinal=row.ordinal,
                        client=row.client_id,
                        tx=row.transaction_id,
                        amount=Decimal(row.amount),
                        disputed=bool(row.disputed),
                        charged_back=bool(row.charged_back),
                    )
        except SQLAlchemyError as ex:
            raise StoreError(str(ex)) from ex

    def close(self) -> None:
        self._engine.dispose()
