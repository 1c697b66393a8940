"""Hypothesis profiles and pytest fixtures for decimath.

Every test starts from default family contexts and an empty constant
cache, so digit changes made by one test never leak into the next.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from hypothesis import HealthCheck, settings

from decimath.constants import clear_cache
from decimath.core.context import reset_contexts

# ---------------------------------------------------------------------------
# Hypothesis global settings
# ---------------------------------------------------------------------------

settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
    deadline=None,
)
settings.register_profile(
    "dev",
    max_examples=30,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
    deadline=None,
)
settings.load_profile("dev")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def fresh_context() -> Iterator[None]:
    """Default contexts and no cached constants, before and after each test."""
    reset_contexts()
    clear_cache()
    yield
    reset_contexts()
    clear_cache()
