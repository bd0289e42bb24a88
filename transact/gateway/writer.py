"""CSV sink for account snapshots."""

from __future__ import annotations

import csv
from collections.abc import Iterable
from typing import IO

from transact.core.money import format_amount
from transact.ledger.transactions import Account

HEADER: tuple[str, ...] = ("client", "available", "held", "total", "locked")


def account_to_row(account: Account) -> tuple[str, ...]:
    return (
        str(account.client),
        format_amount(account.available),
        format_amount(account.held),
        format_amount(account.total),
        "true" if account.locked else "false",
    )


def write_accounts(accounts: Iterable[Account], stream: IO[str]) -> int:
    """Write header plus one row per account. Returns the number of rows written."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(HEADER)
    count = 0
    for account in accounts:
        writer.writerow(account_to_row(account))
        count += 1
    return count
