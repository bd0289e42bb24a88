"""Gateway parser — raw row dict to Transaction.

parse_transaction is the single entry point for external transaction data.
Total: always returns Ok or Err, never raises. All field violations of a
row are collected before returning.
"""

from __future__ import annotations

from decimal import Decimal

from transact.core.errors import FieldViolation, ValidationError
from transact.core.identifiers import parse_client_id, parse_tx_id
from transact.core.money import parse_amount
from transact.core.result import Err, Ok
from transact.ledger.transactions import Transaction, TransactionType

FIELDS: tuple[str, ...] = ("type", "client", "tx", "amount")


def _extract_str(raw: dict[str, object], key: str) -> str | None:
    val = raw.get(key)
    if isinstance(val, str):
        return val.strip()
    if isinstance(val, (int, Decimal)) and not isinstance(val, bool):
        return str(val)
    return None


def parse_transaction(raw: dict[str, object]) -> Ok[Transaction] | Err[ValidationError]:
    """Parse a raw row into a Transaction in state New.

    ``amount`` is optional; an empty cell counts as absent. Amounts on
    dispute/resolve/chargeback rows are ignored.
    """
    violations: list[FieldViolation] = []

    tx_type: TransactionType | None = None
    type_raw = _extract_str(raw, "type")
    if type_raw is None or not type_raw:
        violations.append(FieldViolation(
            path="type", constraint="required", actual_value=repr(raw.get("type")),
        ))
    else:
        try:
            tx_type = TransactionType(type_raw.lower())
        except ValueError:
            violations.append(FieldViolation(
                path="type",
                constraint="must be one of " + ", ".join(t.value for t in TransactionType),
                actual_value=repr(type_raw),
            ))

    client: int | None = None
    client_raw = _extract_str(raw, "client")
    if client_raw is None:
        violations.append(FieldViolation(
            path="client", constraint="required", actual_value=repr(raw.get("client")),
        ))
    else:
        match parse_client_id(client_raw):
            case Err(e):
                violations.append(FieldViolation(
                    path="client", constraint=e, actual_value=repr(client_raw),
                ))
            case Ok(v):
                client = v

    tx_id: int | None = None
    tx_raw = _extract_str(raw, "tx")
    if tx_raw is None:
        violations.append(FieldViolation(
            path="tx", constraint="required", actual_value=repr(raw.get("tx")),
        ))
    else:
        match parse_tx_id(tx_raw):
            case Err(e):
                violations.append(FieldViolation(
                    path="tx", constraint=e, actual_value=repr(tx_raw),
                ))
            case Ok(v):
                tx_id = v

    amount: Decimal | None = None
    amount_raw = _extract_str(raw, "amount")
    if amount_raw:
        match parse_amount(amount_raw):
            case Err(e):
                violations.append(FieldViolation(
                    path="amount", constraint=e, actual_value=repr(amount_raw),
                ))
            case Ok(v):
                amount = v

    if violations or tx_type is None or client is None or tx_id is None:
        return Err(ValidationError.of(
            "gateway.parser.parse_transaction", tuple(violations),
            message="Invalid transaction record",
        ))

    return Ok(Transaction(
        type=tx_type,
        client=client,
        tx=tx_id,
        amount=amount if tx_type.is_balance_bearing else None,
    ))
