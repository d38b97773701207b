"""
Exception types for the payments replay engine.
"""

from typing import Optional


class MalformedEventError(Exception):
    """Raised when an input event cannot be applied (aborts the run)."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class MissingAmountError(MalformedEventError):
    """Raised when a deposit or withdrawal carries no amount."""
    pass


class UnexpectedAmountError(MalformedEventError):
    """Raised when a dispute, resolve or chargeback carries an amount."""
    pass


class UnknownEventTypeError(MalformedEventError):
    """Raised when the event type is not one of the five known kinds."""
    pass


class InvalidAmountError(MalformedEventError):
    """Raised when an amount is not a finite, non-negative decimal."""
    pass


class StoreError(Exception):
    """Raised when a ledger store operation fails."""
    pass


class IntegrityError(Exception):
    """Raised when journal hash chain verification fails."""
    pass
