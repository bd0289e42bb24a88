"""Tests for transact.gateway.parser — raw rows to Transaction records."""

from __future__ import annotations

from decimal import Decimal

from transact.core.result import Err, unwrap
from transact.gateway.parser import parse_transaction
from transact.ledger.transactions import Transaction, TransactionState, TransactionType


def _row(type_: object = "deposit", client: object = "1", tx: object = "1",
         amount: object = "1.0") -> dict[str, object]:
    return {"type": type_, "client": client, "tx": tx, "amount": amount}


def _paths(raw: dict[str, object]) -> set[str]:
    result = parse_transaction(raw)
    assert isinstance(result, Err)
    return {f.path for f in result.error.fields}


class TestValidRows:
    def test_deposit(self) -> None:
        tx = unwrap(parse_transaction(_row()))
        assert tx == Transaction(
            type=TransactionType.DEPOSIT, client=1, tx=1, amount=Decimal("1.0"),
        )
        assert tx.state is TransactionState.NEW

    def test_withdrawal_with_whitespace(self) -> None:
        tx = unwrap(parse_transaction(_row(" withdrawal ", " 2 ", " 7 ", " 0.5 ")))
        assert tx.type is TransactionType.WITHDRAWAL
        assert (tx.client, tx.tx, tx.amount) == (2, 7, Decimal("0.5"))

    def test_type_is_case_insensitive(self) -> None:
        assert unwrap(parse_transaction(_row("Deposit"))).type is TransactionType.DEPOSIT

    def test_dispute_without_amount(self) -> None:
        raw: dict[str, object] = {"type": "dispute", "client": "1", "tx": "1"}
        tx = unwrap(parse_transaction(raw))
        assert tx.type is TransactionType.DISPUTE
        assert tx.amount is None

    def test_amount_on_event_rows_is_dropped(self) -> None:
        assert unwrap(parse_transaction(_row("chargeback", amount="5"))).amount is None

    def test_empty_amount_is_absent(self) -> None:
        assert unwrap(parse_transaction(_row(amount=""))).amount is None

    def test_negative_amount_accepted(self) -> None:
        tx = unwrap(parse_transaction(_row("withdrawal", amount="-5")))
        assert tx.amount == Decimal("-5")

    def test_integer_cells_accepted(self) -> None:
        tx = unwrap(parse_transaction(_row(client=3, tx=4, amount=Decimal("2"))))
        assert (tx.client, tx.tx, tx.amount) == (3, 4, Decimal("2"))


class TestInvalidRows:
    def test_missing_type(self) -> None:
        assert _paths(_row(type_="")) == {"type"}

    def test_unknown_type(self) -> None:
        result = parse_transaction(_row(type_="transfer"))
        assert isinstance(result, Err)
        assert "deposit" in result.error.fields[0].constraint

    def test_missing_client(self) -> None:
        raw = _row()
        del raw["client"]
        assert _paths(raw) == {"client"}

    def test_client_out_of_range(self) -> None:
        assert _paths(_row(client="65536")) == {"client"}

    def test_tx_not_numeric(self) -> None:
        assert _paths(_row(tx="abc")) == {"tx"}

    def test_non_finite_amount(self) -> None:
        assert _paths(_row(amount="NaN")) == {"amount"}

    def test_bool_is_not_an_id(self) -> None:
        assert _paths(_row(client=True)) == {"client"}

    def test_all_violations_collected(self) -> None:
        assert _paths(_row("nope", "x", "-3", "abc")) == {"type", "client", "tx", "amount"}

    def test_error_code(self) -> None:
        result = parse_transaction(_row(tx=""))
        assert isinstance(result, Err)
        assert result.error.code == "VALIDATION_ERROR"
        assert result.error.source == "gateway.parser.parse_transaction"

