"""Append-only delta log. Insertion order is event arrival order."""

from __future__ import annotations

from collections.abc import Iterator
from typing import final

from transact.ledger.transactions import AccountDelta


@final
class DeltaLog:
    """Ordered sequence of deltas emitted by accepted transitions."""

    def __init__(self) -> None:
        self._log: list[AccountDelta] = []

    def append(self, delta: AccountDelta) -> None:
        self._log.append(delta)

    def entries(self) -> tuple[AccountDelta, ...]:
        """Immutable view of the log, in append order."""
        return tuple(self._log)

    def __iter__(self) -> Iterator[AccountDelta]:
        return iter(tuple(self._log))

    def __len__(self) -> int:
        return len(self._log)
