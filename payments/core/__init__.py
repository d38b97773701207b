"""
Core primitives for account replay.

- Event: Incoming transaction record
- AccountSnapshot: Derived account state
- Money helpers: Decimal parsing and half-even rounding
- Canonical: Deterministic serialization
"""

from .events import Event, TransactionType
from .account import AccountSnapshot
from .money import AMOUNT_PLACES, ZERO, format_amount, parse_amount, round_amount
from .canonical import canonicalize, canonical_json_bytes, canonical_json_str
from .errors import (
    MalformedEventError,
    MissingAmountError,
    UnexpectedAmountError,
    UnknownEventTypeError,
    InvalidAmountError,
    StoreError,
    IntegrityError,
)

__all__ = [
    "Event",
    "TransactionType",
    "AccountSnapshot",
    "AMOUNT_PLACES",
    "ZERO",
    "format_amount",
    "parse_amount",
    "round_amount",
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "MalformedEventError",
    "MissingAmountError",
    "UnexpectedAmountError",
    "UnknownEventTypeError",
    "InvalidAmountError",
    "StoreError",
    "IntegrityError",
]
