"""
Tests for the journal-backed ledger store.

Critical: Reopening a journal must rebuild the exact ledger view, and any
tampering with the file must be detected.
"""

import json
import os
import tempfile
from decimal import Decimal

import pytest

from payments.core.errors import IntegrityError
from payments.log import FileLedgerStore, LedgerEntry, ZERO_HASH, verify_journal
from payments.replay import reconstruct_account


def _journal_path(tmpdir):
    return os.path.join(tmpdir, "ledger", "transactions.journal")


def _read_lines(path):
    with open(path, "r", encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


def test_reopen_restores_ledger():
    """Flags, ordinals and amounts survive a close and reopen."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _journal_path(tmpdir)

        with FileLedgerStore(path, fsync=False) as store:
            store.insert(1, 1, Decimal("100"))
            store.insert(2, 2, Decimal("5.5000"))
            store.insert(1, 3, Decimal("-30"))
            store.set_disputed(1, 3, True)
            store.set_disputed(2, 2, True)
            store.chargeback(2, 2)
            before = [list(store.stream_entries(c)) for c in (1, 2)]

        with FileLedgerStore(path, fsync=False) as reopened:
            after = [list(reopened.stream_entries(c)) for c in (1, 2)]
            assert sorted(reopened.list_clients()) == [1, 2]
            account = reconstruct_account(reopened, 1)

        assert after == before
        assert after[1] == [
            LedgerEntry(ordinal=2, client=2, tx=2, amount=Decimal("5.5000"), charged_back=True),
        ]
        assert account.held == Decimal("30")


def test_appends_continue_chain_after_reopen():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _journal_path(tmpdir)

        with FileLedgerStore(path, fsync=False) as store:
            store.insert(1, 1, Decimal("1"))

        with FileLedgerStore(path, fsync=False) as store:
            assert store.insert(1, 1, Decimal("9")) is False
            store.insert(1, 2, Decimal("2"))

        assert verify_journal(path) == 2
        lines = _read_lines(path)
        assert [line["record"]["seq"] for line in lines] == [0, 1]
        assert lines[0]["prev_hash"] == ZERO_HASH
        assert lines[1]["prev_hash"] == lines[0]["record_hash"]


def test_only_effective_mutations_are_journaled():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _journal_path(tmpdir)

        with FileLedgerStore(path, fsync=False) as store:
            store.insert(1, 1, Decimal("10"))
            store.insert(1, 1, Decimal("10"))
            store.set_disputed(2, 1, True)
            store.chargeback(1, 1)
            store.set_disputed(1, 404, True)

        ops = [line["record"]["op"] for line in _read_lines(path)]
        assert ops == ["insert"]


def test_amount_stored_as_text():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _journal_path(tmpdir)

        with FileLedgerStore(path, fsync=True) as store:
            store.insert(1, 1, Decimal("-0.1000"))

        (line,) = _read_lines(path)
        assert line["record"]["amount"] == "-0.1000"


def test_tampered_amount_detected():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _journal_path(tmpdir)

        with FileLedgerStore(path, fsync=False) as store:
            store.insert(1, 1, Decimal("10"))
            store.insert(1, 2, Decimal("20"))

        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
        with open(path, "w", encoding="utf-8") as f:
            f.write(content.replace('"amount":"10"', '"amount":"1000"'))

        with pytest.raises(IntegrityError):
            verify_journal(path)
        with pytest.raises(IntegrityError):
            FileLedgerStore(path, fsync=False)


def test_removed_line_detected():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _journal_path(tmpdir)

        with FileLedgerStore(path, fsync=False) as store:
            for tx in range(1, 4):
                store.insert(1, tx, Decimal(tx))

        with open(path, "r", encoding="utf-8") as f:
            lines = f.readlines()
        with open(path, "w", encoding="utf-8") as f:
            f.writelines([lines[0], lines[2]])

        with pytest.raises(IntegrityError, match="prev_hash"):
            verify_journal(path)


def test_garbage_line_detected():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _journal_path(tmpdir)

        with FileLedgerStore(path, fsync=False) as store:
            store.insert(1, 1, Decimal("1"))
        with open(path, "a", encoding="utf-8") as f:
            f.write("not json\n")

        with pytest.raises(IntegrityError, match="line 2"):
            verify_journal(path)


def test_reset_truncates_journal():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _journal_path(tmpdir)

        with FileLedgerStore(path, fsync=False) as store:
            store.insert(1, 1, Decimal("1"))
            store.reset()
            store.insert(2, 1, Decimal("7"))

        assert verify_journal(path) == 1
        with FileLedgerStore(path, fsync=False) as store:
            assert store.list_clients() == [2]


def test_empty_journal_verifies():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _journal_path(tmpdir)

        FileLedgerStore(path, fsync=False).close()

        assert verify_journal(path) == 0


def test_unchanged_flags_are_not_journaled():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _journal_path(tmpdir)

        with FileLedgerStore(path, fsync=False) as store:
            store.insert(1, 1, Decimal("10"))
            store.set_disputed(1, 1, False)
            store.set_disputed(1, 1, True)
            store.set_disputed(1, 1, True)

        ops = [line["record"]["op"] for line in _read_lines(path)]
        assert ops == ["insert", "dispute"]


def test_truncate_skips_corrupt_journal():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _journal_path(tmpdir)
        os.makedirs(os.path.dirname(path))
        with open(path, "w", encoding="utf-8") as f:
            f.write("not a journal\n")

        with FileLedgerStore(path, fsync=False, truncate=True) as store:
            assert store.list_clients() == []
            store.insert(1, 1, Decimal("1"))

        assert verify_journal(path) == 1
