"""pytest configuration for transact: hypothesis profiles and fixtures.

Shared strategies and the sequential reference run live in tests/helpers.py.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from hypothesis import HealthCheck, settings

from transact.infra.logging_config import reset_logging

# ---------------------------------------------------------------------------
# Hypothesis global settings
# ---------------------------------------------------------------------------

settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.register_profile(
    "dev",
    max_examples=50,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.load_profile("dev")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_logging() -> Iterator[None]:
    """Each test starts and ends with an unconfigured transact logger."""
    reset_logging()
    yield
    reset_logging()
