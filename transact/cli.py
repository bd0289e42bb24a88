"""Command-line entry point.

Usage:
    transact <transactions.csv> [--log-level LEVEL] [--duplicate-policy POLICY]
                                [--queue-size N]

Reads the transaction CSV, runs it through the ledger engine and writes
one CSV row per client account to stdout. Any input or engine error is
reported on stderr with exit status 1 and no account output. A missing
input argument is a usage error (exit status 2) raised before any work.

Environment defaults (TRANSACT_QUEUE_MAXSIZE, TRANSACT_DUPLICATE_POLICY,
TRANSACT_JOIN_TIMEOUT_S, TRANSACT_LOG_LEVEL) apply unless a flag overrides.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from transact.core.errors import TransactError
from transact.core.result import Err, Ok
from transact.gateway.reader import load_transactions
from transact.gateway.writer import write_accounts
from transact.infra.config import DuplicatePolicy, EngineConfig
from transact.infra.logging_config import configure_logging, get_logger
from transact.ledger.engine import process_transactions

EXIT_OK = 0
EXIT_FAILURE = 1

logger = get_logger("cli")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="transact",
        description="Process a transaction CSV and print the final client accounts.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "input",
        type=Path,
        help="Path to the transaction CSV (columns: type, client, tx, amount).",
    )
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        type=str.upper,
        default=None,
        help="Log level for the JSON logs written to stderr.",
    )
    parser.add_argument(
        "--duplicate-policy",
        choices=[p.value for p in DuplicatePolicy],
        default=None,
        help="How a reused deposit/withdrawal id is handled (default: overwrite).",
    )
    parser.add_argument(
        "--queue-size",
        type=int,
        default=None,
        help="Bound the engine inbox (0 = unbounded).",
    )
    return parser.parse_args(argv)


def _fail(error: TransactError) -> int:
    print(f"error: {error.message}", file=sys.stderr)
    logger.error("run_failed", extra={"error": error.to_dict()})
    return EXIT_FAILURE


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    match EngineConfig.from_env():
        case Err(e):
            return _fail(e)
        case Ok(base):
            config = base.with_overrides(
                log_level=args.log_level,
                duplicate_policy=(
                    DuplicatePolicy(args.duplicate_policy) if args.duplicate_policy else None
                ),
                queue_maxsize=args.queue_size,
            )

    configure_logging(level=config.log_level_number)

    match load_transactions(args.input):
        case Err(e):
            return _fail(e)
        case Ok(transactions):
            pass
    logger.info("input_loaded", extra={"path": str(args.input), "records": len(transactions)})

    match process_transactions(transactions, config):
        case Err(e):
            return _fail(e)
        case Ok(accounts):
            write_accounts(accounts, sys.stdout)
    sys.stdout.flush()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
