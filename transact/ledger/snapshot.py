"""Snapshot builder: fold the delta log into one Account per client.

merge() is NOT associative or commutative. A locked accumulator ignores
every later delta, and a delta that would push available below zero is
dropped unless it is dispute-related. The fold therefore runs strictly
left-to-right in log order.
"""

from __future__ import annotations

from collections.abc import Iterable

from transact.core.money import ZERO, add
from transact.ledger.transactions import Account, AccountDelta


def merge(acc: Account, delta: AccountDelta) -> Account:
    """Apply one delta to an accumulated account."""
    # Frozen accounts never change again.
    if acc.locked:
        return acc
    if add(acc.available, delta.available) < ZERO and not delta.adjusts_held:
        return acc
    return Account(
        client=acc.client,
        available=add(acc.available, delta.available),
        held=add(acc.held, delta.held),
        total=add(acc.total, delta.total),
        locked=acc.locked or delta.locked,
    )


def build_snapshot(deltas: Iterable[AccountDelta]) -> tuple[Account, ...]:
    """Left fold of deltas into accounts, sorted by client id."""
    accounts: dict[int, Account] = {}
    for delta in deltas:
        acc = accounts.get(delta.client)
        if acc is None:
            acc = Account.empty(delta.client)
        accounts[delta.client] = merge(acc, delta)
    return tuple(accounts[c] for c in sorted(accounts))
