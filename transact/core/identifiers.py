"""Validated identifier parsing: client ids and transaction ids.

Client ids are unsigned 16-bit, transaction ids unsigned 32-bit. Both
are carried as plain ints once parsed; parse() is the only gate.
"""

from __future__ import annotations

from typing import Final

from transact.core.result import Err, Ok

CLIENT_ID_MAX: Final[int] = 2**16 - 1
TX_ID_MAX: Final[int] = 2**32 - 1


def _parse_unsigned(raw: str, name: str, upper: int) -> Ok[int] | Err[str]:
    text = raw.strip()
    if not text:
        return Err(f"{name} must be non-empty")
    if not text.isdigit():
        return Err(f"{name} must be an unsigned integer, got '{text}'")
    value = int(text)
    if value > upper:
        return Err(f"{name} must be at most {upper}, got {value}")
    return Ok(value)


def parse_client_id(raw: str) -> Ok[int] | Err[str]:
    """Parse a client id (0..65535)."""
    return _parse_unsigned(raw, "client", CLIENT_ID_MAX)


def parse_tx_id(raw: str) -> Ok[int] | Err[str]:
    """Parse a transaction id (0..4294967295)."""
    return _parse_unsigned(raw, "tx", TX_ID_MAX)
