"""Shared hypothesis strategies and a sequential reference run.

Strategies are composable: transaction streams are built from amounts,
client ids and a running pool of known deposit/withdrawal ids so that
dispute-workflow events hit real transactions most of the time.
"""

from __future__ import annotations

from decimal import Decimal

from hypothesis import strategies as st
from hypothesis.strategies import DrawFn, SearchStrategy

from transact.core.result import Ok, unwrap
from transact.ledger.deltas import delta_for
from transact.ledger.delta_log import DeltaLog
from transact.ledger.snapshot import build_snapshot
from transact.ledger.store import TransactionStore
from transact.ledger.transactions import (
    Account,
    AccountDelta,
    Transaction,
    TransactionState,
    TransactionType,
)

# ===================================================================
# STRATEGIES
# ===================================================================


def amounts(max_value: str = "10000") -> SearchStrategy[Decimal]:
    """Non-negative finite amounts with up to four decimal places."""
    return st.decimals(
        min_value=Decimal(0),
        max_value=Decimal(max_value),
        places=4,
        allow_nan=False,
        allow_infinity=False,
    )


def client_ids(max_client: int = 4) -> SearchStrategy[int]:
    return st.integers(min_value=1, max_value=max_client)


@st.composite
def transaction_streams(
    draw: DrawFn, max_size: int = 40, max_client: int = 4,
) -> list[Transaction]:
    """Ordered event streams with unique deposit/withdrawal ids."""
    size = draw(st.integers(min_value=0, max_value=max_size))
    stream: list[Transaction] = []
    known: list[tuple[int, int]] = []
    next_id = 1
    for _ in range(size):
        kind = draw(st.sampled_from(list(TransactionType)))
        client = draw(client_ids(max_client))
        if kind.is_balance_bearing:
            stream.append(Transaction(type=kind, client=client, tx=next_id, amount=draw(amounts())))
            known.append((next_id, client))
            next_id += 1
        elif known and draw(st.booleans()):
            tx_id, owner = draw(st.sampled_from(known))
            stream.append(Transaction(type=kind, client=owner, tx=tx_id))
        else:
            stream.append(Transaction(type=kind, client=client, tx=100_000 + next_id))
    return stream


def deltas(client: int) -> SearchStrategy[AccountDelta]:
    """Arbitrary deltas for one client, drawn through the delta table."""
    return st.builds(
        lambda kind, state, amount: unwrap(delta_for(
            Transaction(type=kind, client=client, tx=1, amount=amount, state=state),
        )),
        st.sampled_from([TransactionType.DEPOSIT, TransactionType.WITHDRAWAL]),
        st.sampled_from(list(TransactionState)),
        amounts(),
    )


# ---------------------------------------------------------------------------
# Sequential reference: same rules, no worker thread
# ---------------------------------------------------------------------------


def replay(stream: list[Transaction]) -> tuple[Account, ...]:
    """Apply a stream directly to a store and log, then fold."""
    store = TransactionStore()
    log = DeltaLog()
    for tx in stream:
        if tx.type.is_balance_bearing:
            result = store.record(tx)
        else:
            result = store.try_transition(tx.tx, tx.type)
        if isinstance(result, Ok):
            log.append(unwrap(delta_for(result.value)))
    return build_snapshot(log)
