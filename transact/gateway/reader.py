"""CSV source for transaction records.

Header names and cells are whitespace-trimmed; rows may omit trailing
columns (a dispute row without the amount cell is fine). The whole file
is parsed before anything reaches the engine, so one malformed row fails
the run with no partial ingestion.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import IO

from transact.core.errors import FieldViolation, InputError, ValidationError
from transact.core.result import Err, Ok
from transact.gateway.parser import parse_transaction
from transact.ledger.transactions import Transaction

REQUIRED_COLUMNS: tuple[str, ...] = ("type", "client", "tx")


def _is_blank(row: list[str]) -> bool:
    return all(not cell.strip() for cell in row)


def read_transactions(
    stream: IO[str],
) -> Ok[tuple[Transaction, ...]] | Err[ValidationError]:
    """Parse every row of an open CSV stream, in file order."""
    reader = csv.reader(stream, skipinitialspace=True)
    header: list[str] | None = None
    transactions: list[Transaction] = []

    for row in reader:
        if _is_blank(row):
            continue
        if header is None:
            header = [name.strip().lower() for name in row]
            missing = [c for c in REQUIRED_COLUMNS if c not in header]
            if missing:
                return Err(ValidationError.of(
                    "gateway.reader.read_transactions",
                    tuple(FieldViolation(
                        path=f"header.{c}", constraint="required column", actual_value="missing",
                    ) for c in missing),
                    message="CSV header is missing required columns",
                ))
            continue
        raw: dict[str, object] = dict(zip(header, (c.strip() for c in row), strict=False))
        match parse_transaction(raw):
            case Err(e):
                return Err(e.with_context(f"line {reader.line_num}"))
            case Ok(tx):
                transactions.append(tx)

    return Ok(tuple(transactions))


def load_transactions(
    path: Path,
) -> Ok[tuple[Transaction, ...]] | Err[ValidationError | InputError]:
    """Open a CSV file and parse it. Unreadable files come back as InputError."""
    try:
        with path.open("r", encoding="utf-8-sig", newline="") as f:
            return read_transactions(f)
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        return Err(InputError.of("gateway.reader.load_transactions", str(path), str(exc)))
