"""Engine configuration.

Pure configuration data with defaults. from_env() reads TRANSACT_*
variables; CLI flags override whatever it returns.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, final

from transact.core.errors import FieldViolation, ValidationError
from transact.core.result import Err, Ok

ENV_PREFIX: str = "TRANSACT_"

_LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DuplicatePolicy(Enum):
    """What the store does with a deposit/withdrawal id it already holds."""

    OVERWRITE = "overwrite"
    REJECT = "reject"


@final
@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Configuration for a LedgerEngine run."""

    queue_maxsize: int = 0              # 0 = unbounded channel
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.OVERWRITE
    join_timeout_s: float | None = None  # None = wait for the worker indefinitely
    worker_name: str = "ledger-engine"
    log_level: str = "WARNING"

    @property
    def log_level_number(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level]

    def with_overrides(self, **changes: Any) -> EngineConfig:
        """Return a copy with the non-None keyword values applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @staticmethod
    def from_env(
        environ: Mapping[str, str] | None = None,
    ) -> Ok[EngineConfig] | Err[ValidationError]:
        """Build a config from TRANSACT_* environment variables.

        Recognised: TRANSACT_QUEUE_MAXSIZE, TRANSACT_DUPLICATE_POLICY,
        TRANSACT_JOIN_TIMEOUT_S, TRANSACT_LOG_LEVEL.
        """
        env = os.environ if environ is None else environ
        violations: list[FieldViolation] = []
        config = EngineConfig()

        raw = env.get(f"{ENV_PREFIX}QUEUE_MAXSIZE")
        if raw is not None:
            if raw.strip().isdigit():
                config = replace(config, queue_maxsize=int(raw))
            else:
                violations.append(FieldViolation(
                    path=f"{ENV_PREFIX}QUEUE_MAXSIZE", constraint="non-negative integer",
                    actual_value=repr(raw),
                ))

        raw = env.get(f"{ENV_PREFIX}DUPLICATE_POLICY")
        if raw is not None:
            try:
                config = replace(config, duplicate_policy=DuplicatePolicy(raw.strip().lower()))
            except ValueError:
                violations.append(FieldViolation(
                    path=f"{ENV_PREFIX}DUPLICATE_POLICY", constraint="overwrite or reject",
                    actual_value=repr(raw),
                ))

        raw = env.get(f"{ENV_PREFIX}JOIN_TIMEOUT_S")
        if raw is not None:
            try:
                timeout = float(raw)
            except ValueError:
                timeout = -1.0
            if timeout > 0:
                config = replace(config, join_timeout_s=timeout)
            else:
                violations.append(FieldViolation(
                    path=f"{ENV_PREFIX}JOIN_TIMEOUT_S", constraint="positive number",
                    actual_value=repr(raw),
                ))

        raw = env.get(f"{ENV_PREFIX}LOG_LEVEL")
        if raw is not None:
            if raw.strip().upper() in _LOG_LEVELS:
                config = replace(config, log_level=raw.strip().upper())
            else:
                violations.append(FieldViolation(
                    path=f"{ENV_PREFIX}LOG_LEVEL", constraint=f"one of {', '.join(_LOG_LEVELS)}",
                    actual_value=repr(raw),
                ))

        if violations:
            return Err(ValidationError.of(
                "infra.config.EngineConfig.from_env", tuple(violations),
                message="Invalid environment configuration",
            ))
        return Ok(config)
