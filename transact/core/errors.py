"""Error value hierarchy for the ledger pipeline.

Every error is a frozen dataclass value that can be pattern-matched,
logged and serialized. Base class TransactError, @final subclasses.

Two families:
  - absorbed: UnknownTransactionError, IllegalTransitionError. The engine
    drops the offending event and carries on.
  - fatal: ValidationError, InputError, DuplicateTransactionError,
    EngineError. The run aborts with no account output.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Self, final


def _now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True, slots=True)
class TransactError:
    """Base error value. NOT @final — has subclasses."""

    message: str
    code: str
    source: str  # "module.function" that produced this error
    timestamp: datetime

    def with_context(self, context: str) -> Self:
        """Return a copy with context prepended to message."""
        return replace(self, message=f"{context}: {self.message}")

    def to_dict(self) -> dict[str, object]:
        return {
            "message": self.message,
            "code": self.code,
            "source": self.source,
            "timestamp": self.timestamp.isoformat(),
        }


@final
@dataclass(frozen=True, slots=True)
class FieldViolation:
    """Describes a single field validation failure."""

    path: str  # e.g. "row 3.amount"
    constraint: str  # e.g. "must be a decimal"
    actual_value: str


@final
@dataclass(frozen=True, slots=True)
class ValidationError(TransactError):
    """One or more fields of an input record failed validation."""

    fields: tuple[FieldViolation, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            **TransactError.to_dict(self),
            "fields": [
                {"path": f.path, "constraint": f.constraint, "actual_value": f.actual_value}
                for f in self.fields
            ],
        }

    @staticmethod
    def of(
        source: str, fields: tuple[FieldViolation, ...], message: str = "Invalid record",
    ) -> ValidationError:
        return ValidationError(
            message=message, code="VALIDATION_ERROR", source=source,
            timestamp=_now(), fields=fields,
        )


@final
@dataclass(frozen=True, slots=True)
class InputError(TransactError):
    """The input source could not be opened or read."""

    path: str

    def to_dict(self) -> dict[str, object]:
        return {**TransactError.to_dict(self), "path": self.path}

    @staticmethod
    def of(source: str, path: str, message: str) -> InputError:
        return InputError(
            message=message, code="INPUT_ERROR", source=source,
            timestamp=_now(), path=path,
        )


@final
@dataclass(frozen=True, slots=True)
class UnknownTransactionError(TransactError):
    """An event referenced a transaction id the store has never seen."""

    tx_id: int

    def to_dict(self) -> dict[str, object]:
        return {**TransactError.to_dict(self), "tx_id": self.tx_id}

    @staticmethod
    def of(source: str, tx_id: int) -> UnknownTransactionError:
        return UnknownTransactionError(
            message=f"Unknown transaction: {tx_id}", code="UNKNOWN_TRANSACTION",
            source=source, timestamp=_now(), tx_id=tx_id,
        )


@final
@dataclass(frozen=True, slots=True)
class IllegalTransitionError(TransactError):
    """Lifecycle state transition is not allowed."""

    tx_id: int
    from_state: str
    to_state: str

    def to_dict(self) -> dict[str, object]:
        return {
            **TransactError.to_dict(self),
            "tx_id": self.tx_id,
            "from_state": self.from_state,
            "to_state": self.to_state,
        }


@final
@dataclass(frozen=True, slots=True)
class DuplicateTransactionError(TransactError):
    """A deposit or withdrawal reused an id already held by the store."""

    tx_id: int

    def to_dict(self) -> dict[str, object]:
        return {**TransactError.to_dict(self), "tx_id": self.tx_id}

    @staticmethod
    def of(source: str, tx_id: int) -> DuplicateTransactionError:
        return DuplicateTransactionError(
            message=f"Duplicate transaction id: {tx_id}", code="DUPLICATE_TRANSACTION",
            source=source, timestamp=_now(), tx_id=tx_id,
        )


@final
@dataclass(frozen=True, slots=True)
class EngineError(TransactError):
    """Engine lifecycle or worker coordination failed."""

    operation: str  # "start", "submit", "stop", "snapshot", "worker"

    def to_dict(self) -> dict[str, object]:
        return {**TransactError.to_dict(self), "operation": self.operation}

    @staticmethod
    def of(source: str, operation: str, message: str) -> EngineError:
        return EngineError(
            message=message, code="ENGINE_ERROR", source=source,
            timestamp=_now(), operation=operation,
        )
