"""
Canonical serialization for journal records and JSON reports.

Every record written to the journal goes through these functions so the
hash chain is computed over identical bytes on every platform.
"""

import json
from decimal import Decimal
from typing import Any


def canonicalize(obj: Any) -> Any:
    """
    Convert nested dict/list structures to canonical form.

    Rules:
    - dict keys sorted alphabetically
    - tuples converted to lists
    - Decimal rendered as its exact text form
    """
    if isinstance(obj, dict):
        return {k: canonicalize(obj[k]) for k in sorted(obj.keys())}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    if isinstance(obj, Decimal):
        return str(obj)
    return obj


def canonical_json_bytes(obj: Any) -> bytes:
    """
    Deterministic JSON bytes for hashing.

    Returns:
        UTF-8 encoded JSON bytes with sorted keys and no whitespace
    """
    canon = canonicalize(obj)
    s = json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def canonical_json_str(obj: Any) -> str:
    """Same guarantees as canonical_json_bytes but returns a string."""
    return canonical_json_bytes(obj).decode("utf-8")
