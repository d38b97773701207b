"""
CSV transaction reader.

Input format:
    type, client, tx, amount
    deposit, 1, 1, 1.0
    dispute, 1, 1,

Headers and fields are trimmed, blank lines skipped, and the amount column
may be empty or missing for dispute/resolve/chargeback rows.
"""

import csv
from decimal import Decimal
from typing import IO, Dict, Iterable, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..core.errors import InvalidAmountError, MalformedEventError, UnknownEventTypeError
from ..core.events import Event, TransactionType
from ..core.money import parse_amount

U16_MAX = 2**16 - 1
U32_MAX = 2**32 - 1

REQUIRED_COLUMNS = ("type", "client", "tx")


class TransactionRecord(BaseModel):
    """One validated CSV row."""

    model_config = ConfigDict(frozen=True)

    type: TransactionType
    client: int = Field(ge=0, le=U16_MAX)
    tx: int = Field(ge=0, le=U32_MAX)
    amount: Optional[Decimal] = None

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def _parse_amount(cls, value):
        if value is None:
            return None
        if isinstance(value, str):
            if not value.strip():
                return None
            return parse_amount(value)
        return value

    @field_validator("amount")
    @classmethod
    def _non_negative(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        if value is not None and value < 0:
            raise ValueError("amount must not be negative")
        return value

    def to_event(self, line: Optional[int] = None) -> Event:
        return Event(type=self.type, client=self.client, tx=self.tx, amount=self.amount, line=line)


def _translate(ex: ValidationError, line: int) -> MalformedEventError:
    err = ex.errors()[0]
    field = err["loc"][0] if err["loc"] else None
    message = f"{field}: {err['msg']}" if field else err["msg"]
    if field == "type":
        return UnknownEventTypeError(message, line=line)
    if field == "amount":
        return InvalidAmountError(message, line=line)
    return MalformedEventError(message, line=line)


def parse_record(fields: Dict[str, Optional[str]], line: Optional[int] = None) -> Event:
    """
    Validate one row (column name -> raw text) into an Event.

    Raises:
        MalformedEventError: If any field is invalid
    """
    try:
        record = TransactionRecord.model_validate(fields)
    except ValidationError as ex:
        raise _translate(ex, line) from ex
    return record.to_event(line=line)


def _is_blank(row: List[str]) -> bool:
    return all(not cell.strip() for cell in row)


def _rows(reader) -> Iterator[List[str]]:
    """Iterate CSV rows, reporting undecodable bytes and CSV syntax errors as bad input."""
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except UnicodeDecodeError as ex:
            raise MalformedEventError(
                f"input is not valid UTF-8: {ex.reason}",
                line=reader.line_num + 1,
            ) from ex
        except csv.Error as ex:
            raise MalformedEventError(f"unreadable CSV row: {ex}", line=reader.line_num) from ex
        yield row


def read_events(stream: Iterable[str]) -> Iterator[Event]:
    """
    Stream events from CSV text.

    Args:
        stream: Text stream (or any iterable of lines) starting at the header row

    Yields:
        Events in file order

    Raises:
        MalformedEventError: On a bad header or row, undecodable bytes or
            broken CSV syntax
    """
    reader = csv.reader(stream)
    header: Optional[List[str]] = None

    for row in _rows(reader):
        if _is_blank(row):
            continue

        if header is None:
            header = [name.strip().lower() for name in row]
            missing = [col for col in REQUIRED_COLUMNS if col not in header]
            if missing:
                raise MalformedEventError(
                    f"missing column(s): {', '.join(missing)}", line=reader.line_num
                )
            continue

        if len(row) > len(header):
            raise MalformedEventError(
                f"expected at most {len(header)} fields, got {len(row)}", line=reader.line_num
            )

        fields: Dict[str, Optional[str]] = {name: None for name in header}
        for name, cell in zip(header, row):
            fields[name] = cell.strip()

        yield parse_record(fields, line=reader.line_num)


def _decode_lines(binary: IO[bytes]) -> Iterator[str]:
    for raw in binary:
        yield raw.decode("utf-8")


def read_events_from_path(path: str) -> Iterator[Event]:
    """
    Stream events from a UTF-8 CSV file; the file stays open until exhausted.

    Lines are decoded one at a time so a bad byte is reported on its own line.
    """
    with open(path, "rb") as f:
        yield from read_events(_decode_lines(f))
