"""Tests for transact.ledger.lifecycle — dispute state machine."""

from __future__ import annotations

from transact.core.result import Err, Ok
from transact.ledger.lifecycle import DISPUTE_TRANSITIONS, EVENT_TARGETS, check_transition
from transact.ledger.transactions import TransactionState, TransactionType

_S = TransactionState

# ---------------------------------------------------------------------------
# Valid transitions
# ---------------------------------------------------------------------------


class TestValidTransitions:
    def test_new_to_dispute(self) -> None:
        assert isinstance(check_transition(1, _S.NEW, _S.DISPUTE), Ok)

    def test_dispute_to_resolve(self) -> None:
        assert isinstance(check_transition(1, _S.DISPUTE, _S.RESOLVE), Ok)

    def test_dispute_to_chargeback(self) -> None:
        assert isinstance(check_transition(1, _S.DISPUTE, _S.CHARGEBACK), Ok)

    def test_exactly_three_edges(self) -> None:
        assert len(DISPUTE_TRANSITIONS) == 3


# ---------------------------------------------------------------------------
# Invalid transitions
# ---------------------------------------------------------------------------


class TestInvalidTransitions:
    def test_new_to_resolve(self) -> None:
        result = check_transition(9, _S.NEW, _S.RESOLVE)
        assert isinstance(result, Err)
        assert result.error.tx_id == 9
        assert result.error.from_state == "New"
        assert result.error.to_state == "Resolve"

    def test_new_to_chargeback(self) -> None:
        assert isinstance(check_transition(1, _S.NEW, _S.CHARGEBACK), Err)

    def test_dispute_to_dispute(self) -> None:
        assert isinstance(check_transition(1, _S.DISPUTE, _S.DISPUTE), Err)

    def test_terminal_states_are_immutable(self) -> None:
        for terminal in (_S.RESOLVE, _S.CHARGEBACK):
            for to_state in TransactionState:
                assert isinstance(check_transition(1, terminal, to_state), Err)

    def test_nothing_returns_to_new(self) -> None:
        for from_state in TransactionState:
            assert isinstance(check_transition(1, from_state, _S.NEW), Err)


class TestEventTargets:
    def test_only_dispute_workflow_events(self) -> None:
        assert set(EVENT_TARGETS) == {
            TransactionType.DISPUTE, TransactionType.RESOLVE, TransactionType.CHARGEBACK,
        }

    def test_targets(self) -> None:
        assert EVENT_TARGETS[TransactionType.DISPUTE] is _S.DISPUTE
        assert EVENT_TARGETS[TransactionType.RESOLVE] is _S.RESOLVE
        assert EVENT_TARGETS[TransactionType.CHARGEBACK] is _S.CHARGEBACK
