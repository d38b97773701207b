"""
CSV account report writer.
"""

import csv
from typing import IO, Iterable, List

from ..core.account import AccountSnapshot
from ..core.money import format_amount

REPORT_COLUMNS = ("client", "available", "held", "total", "locked")


def snapshot_row(snapshot: AccountSnapshot) -> List[str]:
    return [
        str(snapshot.client),
        format_amount(snapshot.available),
        format_amount(snapshot.held),
        format_amount(snapshot.total),
        "true" if snapshot.locked else "false",
    ]


def write_accounts(snapshots: Iterable[AccountSnapshot], stream: IO[str]) -> int:
    """
    Write one CSV row per snapshot, header first.

    Returns:
        Number of account rows written
    """
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(REPORT_COLUMNS)
    count = 0
    for snapshot in snapshots:
        writer.writerow(snapshot_row(snapshot))
        count += 1
    stream.flush()
    return count
