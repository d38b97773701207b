"""
Hash chain integrity for the ledger journal.

Each journal line carries the hash of the previous line, so any edit,
reordering or truncation in the middle of the file breaks the chain.
"""

import hashlib
import json
from typing import Any, Dict, Iterator, Tuple

from ..core.canonical import canonical_json_bytes
from ..core.errors import IntegrityError

ZERO_HASH = "0" * 64


def hash_record(prev_hash: str, record: Dict[str, Any]) -> str:
    """
    Compute hash of a journal record chained to the previous hash.

    Hash input: prev_hash + canonical_json(record)

    Returns:
        SHA-256 hash as hex string
    """
    b = prev_hash.encode("utf-8") + canonical_json_bytes(record)
    return hashlib.sha256(b).hexdigest()


def chain_record(prev_hash: str, record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create the stored form of a journal record.

    Record includes:
    - prev_hash: Hash of previous line (or ZERO_HASH for the first)
    - record_hash: Hash of this line
    - record: The mutation itself
    """
    return {
        "prev_hash": prev_hash,
        "record_hash": hash_record(prev_hash, record),
        "record": record,
    }


def iter_verified(lines) -> Iterator[Tuple[Dict[str, Any], str]]:
    """
    Walk journal lines and check every link.

    Yields:
        (record, record_hash) for each line, in file order

    Raises:
        IntegrityError: On unparsable lines or a broken chain
    """
    prev_hash = ZERO_HASH
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            rec = json.loads(line)
            record = rec["record"]
            stored_prev = rec["prev_hash"]
            stored_hash = rec["record_hash"]
        except (ValueError, KeyError, TypeError) as ex:
            raise IntegrityError(f"journal line {lineno} is not a chain record") from ex

        if stored_prev != prev_hash:
            raise IntegrityError(f"journal line {lineno}: prev_hash does not match previous record")
        if hash_record(prev_hash, record) != stored_hash:
            raise IntegrityError(f"journal line {lineno}: record_hash mismatch")

        yield record, stored_hash
        prev_hash = stored_hash


def verify_journal(path: str) -> int:
    """
    Verify a journal file end to end.

    Returns:
        Number of records checked

    Raises:
        IntegrityError: If the chain is broken
    """
    count = 0
    with open(path, "r", encoding="utf-8") as f:
        for _ in iter_verified(f):
            count += 1
    return count
