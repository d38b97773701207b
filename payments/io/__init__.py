"""
CSV input parsing and account report emission.
"""

from .csv_input import TransactionRecord, parse_record, read_events, read_events_from_path
from .csv_output import REPORT_COLUMNS, snapshot_row, write_accounts

__all__ = [
    "TransactionRecord",
    "parse_record",
    "read_events",
    "read_events_from_path",
    "REPORT_COLUMNS",
    "snapshot_row",
    "write_accounts",
]
