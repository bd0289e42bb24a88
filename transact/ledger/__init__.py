"""transact.ledger — transaction lifecycle, delta algebra, engine and snapshots."""

from transact.infra.config import DuplicatePolicy as DuplicatePolicy
from transact.ledger.deltas import DELTA_TABLE as DELTA_TABLE
from transact.ledger.deltas import delta_for as delta_for
from transact.ledger.delta_log import DeltaLog as DeltaLog
from transact.ledger.engine import EngineStats as EngineStats
from transact.ledger.engine import EngineStatus as EngineStatus
from transact.ledger.engine import LedgerEngine as LedgerEngine
from transact.ledger.engine import process_transactions as process_transactions
from transact.ledger.lifecycle import DISPUTE_TRANSITIONS as DISPUTE_TRANSITIONS
from transact.ledger.lifecycle import check_transition as check_transition
from transact.ledger.snapshot import build_snapshot as build_snapshot
from transact.ledger.snapshot import merge as merge
from transact.ledger.store import TransactionStore as TransactionStore
from transact.ledger.transactions import Account as Account
from transact.ledger.transactions import AccountDelta as AccountDelta
from transact.ledger.transactions import Transaction as Transaction
from transact.ledger.transactions import TransactionState as TransactionState
from transact.ledger.transactions import TransactionType as TransactionType
