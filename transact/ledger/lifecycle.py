"""Dispute lifecycle state machine.

DISPUTE_TRANSITIONS defines the valid edges New -> Dispute -> {Resolve,
Chargeback}. EVENT_TARGETS maps each dispute-workflow event type to the
state it moves a stored transaction into.
"""

from __future__ import annotations

from datetime import UTC, datetime
from types import MappingProxyType
from typing import Final, TypeAlias

from transact.core.errors import IllegalTransitionError
from transact.core.result import Err, Ok
from transact.ledger.transactions import TransactionState, TransactionType

TransitionTable: TypeAlias = frozenset[tuple[TransactionState, TransactionState]]

DISPUTE_TRANSITIONS: TransitionTable = frozenset({
    (TransactionState.NEW, TransactionState.DISPUTE),
    (TransactionState.DISPUTE, TransactionState.RESOLVE),
    (TransactionState.DISPUTE, TransactionState.CHARGEBACK),
})

EVENT_TARGETS: Final = MappingProxyType({
    TransactionType.DISPUTE: TransactionState.DISPUTE,
    TransactionType.RESOLVE: TransactionState.RESOLVE,
    TransactionType.CHARGEBACK: TransactionState.CHARGEBACK,
})


def check_transition(
    tx_id: int,
    from_state: TransactionState,
    to_state: TransactionState,
    transitions: TransitionTable = DISPUTE_TRANSITIONS,
) -> Ok[None] | Err[IllegalTransitionError]:
    """Validate a state transition against a transition table."""
    if (from_state, to_state) in transitions:
        return Ok(None)
    return Err(IllegalTransitionError(
        message=f"Invalid transition for tx {tx_id}: {from_state.value} -> {to_state.value}",
        code="ILLEGAL_TRANSITION",
        source="ledger.lifecycle.check_transition",
        timestamp=datetime.now(tz=UTC),
        tx_id=tx_id,
        from_state=from_state.value,
        to_state=to_state.value,
    ))
