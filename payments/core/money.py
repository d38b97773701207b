"""
Decimal helpers for monetary values.

All amounts are decimal.Decimal. Values cross the store boundary as text
(str(Decimal)) so no precision is lost on the way through.
"""

from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
)

# Reported precision (fractional digits)
AMOUNT_PLACES = 4

# Bound on digits either side of the decimal point for a single amount
MAX_AMOUNT_DIGITS = 1000

ZERO = Decimal(0)

_QUANTUM = Decimal(1).scaleb(-AMOUNT_PLACES)

# Ledger arithmetic is exact: any rounding inside the fold raises Inexact
LEDGER_CONTEXT = Context(
    prec=MAX_PREC,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    rounding=ROUND_HALF_EVEN,
    traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
)

_REPORT_CONTEXT = Context(
    prec=MAX_PREC,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    rounding=ROUND_HALF_EVEN,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)


def parse_amount(text: str) -> Decimal:
    """
    Parse decimal text into a Decimal.

    Raises:
        ValueError: If text is not a finite decimal number, or has more than
            MAX_AMOUNT_DIGITS digits before or after the decimal point
    """
    try:
        value = Decimal(text.strip())
    except InvalidOperation as ex:
        raise ValueError(f"not a decimal number: {text!r}") from ex
    if not value.is_finite():
        raise ValueError(f"amount must be finite: {text!r}")
    if not value.is_zero() and value.adjusted() >= MAX_AMOUNT_DIGITS:
        raise ValueError(f"amount has more than {MAX_AMOUNT_DIGITS} integer digits")
    if value.as_tuple().exponent < -MAX_AMOUNT_DIGITS:
        raise ValueError(f"amount has more than {MAX_AMOUNT_DIGITS} fractional digits")
    return value


def amount_to_text(value: Decimal) -> str:
    return str(value)


def add_amounts(a: Decimal, b: Decimal) -> Decimal:
    return LEDGER_CONTEXT.add(a, b)


def round_amount(value: Decimal, places: int = AMOUNT_PLACES) -> Decimal:
    """Round half-even to a fixed number of fractional digits."""
    quantum = _QUANTUM if places == AMOUNT_PLACES else Decimal(1).scaleb(-places)
    rounded = value.quantize(quantum, rounding=ROUND_HALF_EVEN, context=_REPORT_CONTEXT)
    # No negative zero in reports
    return abs(rounded) if rounded.is_zero() else rounded


def format_amount(value: Decimal, places: int = AMOUNT_PLACES) -> str:
    """Fixed-point text with exactly `places` fractional digits."""
    return format(round_amount(value, places), "f")
