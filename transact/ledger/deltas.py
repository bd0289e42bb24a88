"""Account delta algebra: (type, state) -> balance effect.

DELTA_TABLE is closed over the eight (balance-bearing type, state) pairs.
Each row holds the signs applied to the original amount for the
available, held and total columns, the locked flag, and whether the
delta moves funds through held (dispute-related).

    Type        State       available  held  total  locked
    Deposit     New            +a        0    +a    false
    Deposit     Dispute        -a       +a     0    false
    Deposit     Resolve        +a       -a     0    false
    Deposit     Chargeback      0       -a    -a    true
    Withdrawal  New            -a        0    -a    false
    Withdrawal  Dispute        +a       -a     0    false
    Withdrawal  Resolve        -a        0    -a    false
    Withdrawal  Chargeback      0        0     0    true
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, final

from transact.core.errors import FieldViolation, ValidationError
from transact.core.money import TRANSACT_DECIMAL_CONTEXT
from transact.core.result import Err, Ok
from transact.ledger.transactions import (
    AccountDelta,
    Transaction,
    TransactionState,
    TransactionType,
)


@final
@dataclass(frozen=True, slots=True)
class DeltaRule:
    available: int
    held: int
    total: int
    locked: bool

    @property
    def adjusts_held(self) -> bool:
        return self.held != 0


_D = TransactionType.DEPOSIT
_W = TransactionType.WITHDRAWAL
_S = TransactionState

DELTA_TABLE: Final = MappingProxyType({
    (_D, _S.NEW): DeltaRule(available=+1, held=0, total=+1, locked=False),
    (_D, _S.DISPUTE): DeltaRule(available=-1, held=+1, total=0, locked=False),
    (_D, _S.RESOLVE): DeltaRule(available=+1, held=-1, total=0, locked=False),
    (_D, _S.CHARGEBACK): DeltaRule(available=0, held=-1, total=-1, locked=True),
    (_W, _S.NEW): DeltaRule(available=-1, held=0, total=-1, locked=False),
    (_W, _S.DISPUTE): DeltaRule(available=+1, held=-1, total=0, locked=False),
    (_W, _S.RESOLVE): DeltaRule(available=-1, held=0, total=-1, locked=False),
    (_W, _S.CHARGEBACK): DeltaRule(available=0, held=0, total=0, locked=True),
})


def delta_for(tx: Transaction) -> Ok[AccountDelta] | Err[ValidationError]:
    """Compute the delta for a stored deposit/withdrawal in its current state.

    Dispute, resolve and chargeback records are events, not balance-bearing
    entries: they have no row and come back as Err.
    """
    rule = DELTA_TABLE.get((tx.type, tx.state))
    if rule is None:
        return Err(ValidationError.of(
            "ledger.deltas.delta_for",
            (FieldViolation(
                path="type", constraint="must be deposit or withdrawal",
                actual_value=tx.type.value,
            ),),
            message=f"No delta for {tx.type.value} in state {tx.state.value}",
        ))
    amount = tx.amount_or_zero
    ctx = TRANSACT_DECIMAL_CONTEXT
    return Ok(AccountDelta(
        client=tx.client,
        available=ctx.multiply(amount, rule.available),
        held=ctx.multiply(amount, rule.held),
        total=ctx.multiply(amount, rule.total),
        locked=rule.locked,
        adjusts_held=rule.adjusts_held,
    ))
