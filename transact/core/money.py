"""Decimal context and amount parsing.

All balance arithmetic runs under TRANSACT_DECIMAL_CONTEXT with prec=28,
ROUND_HALF_EVEN, and traps for InvalidOperation/DivisionByZero/Overflow.
"""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN as _ROUND_HALF_EVEN
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)

from transact.core.result import Err, Ok

TRANSACT_DECIMAL_CONTEXT = Context(
    prec=28,
    rounding=_ROUND_HALF_EVEN,
    Emin=-999999,
    Emax=999999,
    capitals=1,
    clamp=0,
    flags=[],
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

ZERO = Decimal(0)


def parse_amount(raw: str) -> Ok[Decimal] | Err[str]:
    """Parse a finite decimal amount from its text form.

    Signed values are accepted; a negative deposit or withdrawal is left to
    the delta table and the overdraft guard.
    """
    text = raw.strip()
    if not text:
        return Err("amount must be non-empty")
    try:
        with localcontext(TRANSACT_DECIMAL_CONTEXT):
            value = Decimal(text)
    except InvalidOperation:
        return Err(f"amount must be a decimal, got '{text}'")
    if not value.is_finite():
        return Err(f"amount must be finite, got {text}")
    return Ok(value)


def add(a: Decimal, b: Decimal) -> Decimal:
    with localcontext(TRANSACT_DECIMAL_CONTEXT):
        return a + b


def format_amount(value: Decimal) -> str:
    """Render an amount in plain notation with trailing zeros removed."""
    if value == 0:
        return "0"
    return format(value.normalize(TRANSACT_DECIMAL_CONTEXT), "f")
