"""Ledger domain types: Transaction, AccountDelta, Account.

Transaction is the input unit, AccountDelta the balance effect of one
accepted lifecycle transition, Account the folded per-client view.
All three are frozen; the engine replaces a Transaction to change state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import final

from transact.core.money import ZERO


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def is_balance_bearing(self) -> bool:
        """Deposits and withdrawals carry an amount and are stored by id."""
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


class TransactionState(Enum):
    NEW = "New"
    DISPUTE = "Dispute"
    RESOLVE = "Resolve"
    CHARGEBACK = "Chargeback"


@final
@dataclass(frozen=True, slots=True)
class Transaction:
    """One input record.

    ``tx`` identifies a deposit/withdrawal; dispute, resolve and chargeback
    records reference that same id and carry no amount.
    """

    type: TransactionType
    client: int
    tx: int
    amount: Decimal | None = None
    state: TransactionState = TransactionState.NEW

    def with_state(self, state: TransactionState) -> Transaction:
        return replace(self, state=state)

    @property
    def amount_or_zero(self) -> Decimal:
        return self.amount if self.amount is not None else ZERO


@final
@dataclass(frozen=True, slots=True)
class AccountDelta:
    """Incremental balance effect of one accepted transition.

    ``adjusts_held`` marks dispute-related deltas (those moving funds into
    or out of held); the overdraft guard in merge() lets them through.
    """

    client: int
    available: Decimal
    held: Decimal
    total: Decimal
    locked: bool
    adjusts_held: bool


@final
@dataclass(frozen=True, slots=True)
class Account:
    """Accumulated balance view for one client."""

    client: int
    available: Decimal = ZERO
    held: Decimal = ZERO
    total: Decimal = ZERO
    locked: bool = False

    @staticmethod
    def empty(client: int) -> Account:
        return Account(client=client)
