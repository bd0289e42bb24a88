"""Ledger engine: single-writer actor over the store and the delta log.

One worker thread owns TransactionStore and DeltaLog. Producers only
enqueue messages on a FIFO channel; the worker applies each message
exactly once, in arrival order, until it receives Stop.

Lifecycle: CREATED -start-> RUNNING -stop-> STOPPED | FAILED.
snapshot() reads the log only after the worker has been joined.

LedgerEngine is @final but NOT a dataclass — it holds mutable internal state.
"""

from __future__ import annotations

import queue
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from types import TracebackType
from typing import TypeAlias, final

from transact.core.errors import EngineError, TransactError
from transact.core.result import Err, Ok
from transact.infra.config import EngineConfig
from transact.infra.logging_config import get_logger
from transact.ledger.deltas import delta_for
from transact.ledger.delta_log import DeltaLog
from transact.ledger.snapshot import build_snapshot
from transact.ledger.store import TransactionStore
from transact.ledger.transactions import Account, Transaction

logger = get_logger("ledger.engine")

# ---------------------------------------------------------------------------
# Channel messages
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class Ingest:
    """Apply one transaction record."""

    transaction: Transaction


@final
@dataclass(frozen=True, slots=True)
class Stop:
    """Terminate the worker once every earlier message is processed."""


EngineMessage: TypeAlias = Ingest | Stop


class EngineStatus(Enum):
    CREATED = "CREATED"
    RUNNING = "RUNNING"
    STOPPED = "STOPPED"
    FAILED = "FAILED"


@final
@dataclass(frozen=True, slots=True)
class EngineStats:
    """Worker counters. Read after stop()."""

    ingested: int
    accepted: int
    absorbed: int
    deltas: int


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


@final
class LedgerEngine:
    """Actor that turns an ordered transaction stream into account deltas.

    Usage::

        engine = LedgerEngine()
        engine.start()
        for tx in transactions:
            engine.submit(tx)
        engine.stop()
        accounts = unwrap(engine.snapshot())
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config if config is not None else EngineConfig()
        self._store = TransactionStore(self._config.duplicate_policy)
        self._log = DeltaLog()
        self._inbox: queue.Queue[EngineMessage] = queue.Queue(
            maxsize=self._config.queue_maxsize,
        )
        self._thread: threading.Thread | None = None
        # Guards _status against concurrent start/submit/stop callers.
        self._lock = threading.Lock()
        self._status = EngineStatus.CREATED
        # Written by the worker only.
        self._fatal: TransactError | None = None
        self._ingested = 0
        self._accepted = 0
        self._absorbed = 0

    # -- Producer side -------------------------------------------------------

    @property
    def status(self) -> EngineStatus:
        return self._status

    def start(self) -> Ok[None] | Err[EngineError]:
        """Spawn the worker thread."""
        with self._lock:
            if self._status is not EngineStatus.CREATED:
                return Err(EngineError.of(
                    "ledger.engine.LedgerEngine.start", "start",
                    f"Engine cannot start from state {self._status.value}",
                ))
            self._thread = threading.Thread(
                target=self._run, name=self._config.worker_name, daemon=True,
            )
            self._thread.start()
            self._status = EngineStatus.RUNNING
        logger.info("engine_started", extra={"queue_maxsize": self._config.queue_maxsize})
        return Ok(None)

    def submit(self, transaction: Transaction) -> Ok[None] | Err[EngineError]:
        """Enqueue one transaction. Err if the engine is not accepting input."""
        with self._lock:
            if self._status is not EngineStatus.RUNNING:
                return Err(EngineError.of(
                    "ledger.engine.LedgerEngine.submit", "submit",
                    f"Engine is not running (state {self._status.value})",
                ))
            if self._thread is None or not self._thread.is_alive():
                return Err(EngineError.of(
                    "ledger.engine.LedgerEngine.submit", "submit",
                    "Engine worker has terminated",
                ))
            if self._fatal is not None:
                return Err(EngineError.of(
                    "ledger.engine.LedgerEngine.submit", "submit",
                    f"Engine halted: {self._fatal.message}",
                ))
            # Enqueued under the lock so no Ingest can land behind Stop.
            self._inbox.put(Ingest(transaction))
        return Ok(None)

    def stop(self) -> Ok[None] | Err[TransactError]:
        """Enqueue Stop and block until the worker has terminated.

        Returns the fatal error recorded by the worker, if any.
        """
        with self._lock:
            if self._status is not EngineStatus.RUNNING or self._thread is None:
                return Err(EngineError.of(
                    "ledger.engine.LedgerEngine.stop", "stop",
                    f"Engine is not running (state {self._status.value})",
                ))
            thread = self._thread
            self._inbox.put(Stop())
            thread.join(timeout=self._config.join_timeout_s)
            if thread.is_alive():
                self._status = EngineStatus.FAILED
                return Err(EngineError.of(
                    "ledger.engine.LedgerEngine.stop", "stop",
                    f"Worker did not terminate within {self._config.join_timeout_s}s",
                ))
            if self._fatal is not None:
                self._status = EngineStatus.FAILED
                return Err(self._fatal)
            self._status = EngineStatus.STOPPED
        logger.info("engine_stopped", extra={
            "ingested": self._ingested,
            "accepted": self._accepted,
            "absorbed": self._absorbed,
        })
        return Ok(None)

    def snapshot(self) -> Ok[tuple[Account, ...]] | Err[EngineError]:
        """Fold the delta log into accounts. Only valid after a clean stop()."""
        if self._status is not EngineStatus.STOPPED:
            return Err(EngineError.of(
                "ledger.engine.LedgerEngine.snapshot", "snapshot",
                f"Snapshot requires a stopped engine (state {self._status.value})",
            ))
        return Ok(build_snapshot(self._log.entries()))

    def stats(self) -> EngineStats:
        return EngineStats(
            ingested=self._ingested,
            accepted=self._accepted,
            absorbed=self._absorbed,
            deltas=len(self._log),
        )

    def __enter__(self) -> LedgerEngine:
        match self.start():
            case Err(e):
                raise RuntimeError(e.message)
            case Ok(_):
                return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._status is not EngineStatus.RUNNING:
            return
        result = self.stop()
        if exc_type is None and isinstance(result, Err):
            raise RuntimeError(result.error.message)

    # -- Worker side ---------------------------------------------------------

    def _run(self) -> None:
        while True:
            message = self._inbox.get()
            match message:
                case Stop():
                    return
                case Ingest(transaction):
                    if self._fatal is not None:
                        # Halted: drain without applying so producers never block.
                        continue
                    try:
                        self._apply(transaction)
                    except Exception as exc:
                        logger.exception("engine_worker_failed", extra={"tx": transaction.tx})
                        self._fatal = EngineError.of(
                            "ledger.engine.LedgerEngine._run", "worker",
                            f"Worker failed on tx {transaction.tx}: {exc!r}",
                        )

    def _apply(self, tx: Transaction) -> None:
        self._ingested += 1
        if tx.type.is_balance_bearing:
            match self._store.record(tx):
                case Err(e):
                    logger.error("engine_ingest_rejected", extra={
                        "tx": tx.tx, "error_code": e.code, "error": e.message,
                    })
                    self._fatal = e
                case Ok(entry):
                    self._emit(entry)
            return

        match self._store.try_transition(tx.tx, tx.type):
            case Err(e):
                self._absorbed += 1
                logger.debug("event_absorbed", extra={
                    "tx": tx.tx, "event": tx.type, "error_code": e.code, "error": e.message,
                })
            case Ok(entry):
                self._emit(entry)

    def _emit(self, entry: Transaction) -> None:
        match delta_for(entry):
            case Err(e):
                self._fatal = e
            case Ok(delta):
                self._log.append(delta)
                self._accepted += 1
                logger.debug("delta_emitted", extra={
                    "tx": entry.tx, "client": entry.client, "state": entry.state,
                })


def process_transactions(
    transactions: Iterable[Transaction],
    config: EngineConfig | None = None,
) -> Ok[tuple[Account, ...]] | Err[TransactError]:
    """Run a whole stream through a fresh engine and return the snapshot.

    All or nothing: any submit, stop or worker failure yields Err and no
    accounts.
    """
    engine = LedgerEngine(config)
    match engine.start():
        case Err(e):
            return Err(e)
        case Ok(_):
            pass

    for tx in transactions:
        match engine.submit(tx):
            case Err(e):
                # A halted worker reports its own cause from stop().
                match engine.stop():
                    case Err(cause):
                        return Err(cause)
                    case Ok(_):
                        return Err(e)
            case Ok(_):
                pass

    match engine.stop():
        case Err(e):
            return Err(e)
        case Ok(_):
            pass
    match engine.snapshot():
        case Err(e):
            return Err(e)
        case Ok(accounts):
            return Ok(accounts)
