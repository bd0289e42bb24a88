"""Transaction store: authoritative lifecycle state per transaction id.

Only the engine worker touches a TransactionStore. Each try_transition()
is a single check-then-mutate step with no intermediate observable state.
"""

from __future__ import annotations

from typing import final

from transact.core.errors import (
    DuplicateTransactionError,
    IllegalTransitionError,
    UnknownTransactionError,
)
from transact.core.result import Err, Ok
from transact.infra.config import DuplicatePolicy
from transact.ledger.lifecycle import EVENT_TARGETS, check_transition
from transact.ledger.transactions import Transaction, TransactionState, TransactionType


@final
class TransactionStore:
    """Map from tx id to the stored deposit/withdrawal and its current state."""

    def __init__(self, duplicate_policy: DuplicatePolicy = DuplicatePolicy.OVERWRITE) -> None:
        self._entries: dict[int, Transaction] = {}
        self._duplicate_policy = duplicate_policy

    def record(self, tx: Transaction) -> Ok[Transaction] | Err[DuplicateTransactionError]:
        """Insert a deposit/withdrawal in state New.

        Under OVERWRITE a reused id silently replaces the earlier entry.
        """
        if tx.tx in self._entries and self._duplicate_policy is DuplicatePolicy.REJECT:
            return Err(DuplicateTransactionError.of("ledger.store.record", tx.tx))
        entry = tx.with_state(TransactionState.NEW)
        self._entries[tx.tx] = entry
        return Ok(entry)

    def try_transition(
        self, tx_id: int, event_type: TransactionType,
    ) -> Ok[Transaction] | Err[UnknownTransactionError | IllegalTransitionError]:
        """Move a stored transaction along the dispute lifecycle.

        Returns the updated entry (original type and amount, new state).
        """
        current = self._entries.get(tx_id)
        if current is None:
            return Err(UnknownTransactionError.of("ledger.store.try_transition", tx_id))
        target = EVENT_TARGETS[event_type]
        match check_transition(tx_id, current.state, target):
            case Err(e):
                return Err(e)
            case Ok(_):
                pass
        updated = current.with_state(target)
        self._entries[tx_id] = updated
        return Ok(updated)

    def get(self, tx_id: int) -> Transaction | None:
        return self._entries.get(tx_id)

    def __contains__(self, tx_id: object) -> bool:
        return tx_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
