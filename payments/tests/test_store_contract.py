"""
Tests for the ledger store contract.

Critical: Every backend must behave identically; replay never knows which
one it is reading.
"""

from decimal import Decimal

from payments.log import LedgerEntry


def test_insert_transactions(store):
    """Entries come back in insertion order with fresh flags."""
    store.insert(7, 15, Decimal("2.50"))
    store.insert(7, 19, Decimal("3.50"))

    assert list(store.stream_entries(7)) == [
        LedgerEntry(ordinal=1, client=7, tx=15, amount=Decimal("2.50")),
        LedgerEntry(ordinal=2, client=7, tx=19, amount=Decimal("3.50")),
    ]


def test_amount_text_preserved(store):
    """Amounts round-trip exactly, including trailing zeros and sign."""
    store.insert(1, 1, Decimal("-0.1000"))

    entry = next(store.stream_entries(1))
    assert str(entry.amount) == "-0.1000"


def test_dispute_transaction(store):
    store.insert(7, 15, Decimal("2.50"))
    assert store.set_disputed(7, 15, True) is True

    (entry,) = store.stream_entries(7)
    assert entry.disputed is True
    assert entry.charged_back is False


def test_resolve_dispute(store):
    store.insert(7, 15, Decimal("2.50"))
    store.set_disputed(7, 15, True)
    store.set_disputed(7, 15, False)

    (entry,) = store.stream_entries(7)
    assert entry.disputed is False
    assert entry.charged_back is False


def test_chargeback_transaction(store):
    store.insert(7, 15, Decimal("2.50"))
    store.set_disputed(7, 15, True)
    assert store.chargeback(7, 15) is True

    (entry,) = store.stream_entries(7)
    assert entry.disputed is False
    assert entry.charged_back is True


def test_chargeback_requires_dispute(store):
    """Chargeback on an undisputed entry changes nothing."""
    store.insert(7, 15, Decimal("2.50"))

    assert store.chargeback(7, 15) is False
    (entry,) = store.stream_entries(7)
    assert entry.charged_back is False


def test_duplicate_tx_first_writer_wins(store):
    """A colliding tx is ignored and does not consume an ordinal."""
    assert store.insert(7, 15, Decimal("2.50")) is True
    assert store.insert(8, 15, Decimal("99")) is False
    assert store.insert(7, 16, Decimal("1")) is True

    assert list(store.stream_entries(7)) == [
        LedgerEntry(ordinal=1, client=7, tx=15, amount=Decimal("2.50")),
        LedgerEntry(ordinal=2, client=7, tx=16, amount=Decimal("1")),
    ]
    assert list(store.stream_entries(8)) == []


def test_flags_match_client_and_tx(store):
    """Another client's tx id must not be affected."""
    store.insert(7, 15, Decimal("2.50"))

    assert store.set_disputed(8, 15, True) is False
    assert store.chargeback(8, 15) is False

    (entry,) = store.stream_entries(7)
    assert entry.disputed is False


def test_unknown_reference_is_noop(store):
    assert store.set_disputed(1, 404, True) is False
    assert store.set_disputed(1, 404, False) is False
    assert store.chargeback(1, 404) is False
    assert store.list_clients() == []


def test_get_clients(store):
    store.insert(7, 15, Decimal("2.50"))
    store.insert(8, 13, Decimal("2.50"))
    store.insert(7, 19, Decimal("2.50"))

    assert set(store.list_clients()) == {7, 8}


def test_get_transactions_for_client(store):
    """Ordinals are global; a client's view skips other clients' entries."""
    store.insert(7, 15, Decimal("2.50"))
    store.insert(8, 13, Decimal("2.50"))
    store.insert(7, 19, Decimal("3.50"))

    assert list(store.stream_entries(7)) == [
        LedgerEntry(ordinal=1, client=7, tx=15, amount=Decimal("2.50")),
        LedgerEntry(ordinal=3, client=7, tx=19, amount=Decimal("3.50")),
    ]


def test_stream_is_restartable(store):
    store.insert(1, 1, Decimal("1"))
    store.insert(1, 2, Decimal("2"))

    first = [e.tx for e in store.stream_entries(1)]
    second = [e.tx for e in store.stream_entries(1)]

    assert first == second == [1, 2]


def test_reset_drops_everything(store):
    store.insert(1, 1, Decimal("1"))
    store.reset()

    assert store.list_clients() == []
    assert store.insert(1, 1, Decimal("5")) is True
    (entry,) = store.stream_entries(1)
    assert entry.ordinal == 1
    assert entry.amount == Decimal("5")


def test_unchanged_flag_is_noop(store):
    """Resolving an undisputed entry or disputing twice changes nothing."""
    store.insert(7, 15, Decimal("2.50"))

    assert store.set_disputed(7, 15, False) is False
    assert store.set_disputed(7, 15, True) is True
    assert store.set_disputed(7, 15, True) is False
    assert store.set_disputed(7, 15, False) is True

    (entry,) = store.stream_entries(7)
    assert entry.disputed is False
