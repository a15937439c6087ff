"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any import that builds settings, so
no developer .env file leaks into the test run.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["TESTING"] = "true"
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("APP_RATE_LIMIT_ENABLED", "true")
os.environ.setdefault("APP_RATE_LIMIT_MAX_REQUESTS", "3")
os.environ.setdefault("APP_RATE_LIMIT_WINDOW_MS", "60000")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest

from salon_api.core.rate_limit import reset_rate_limiter


@pytest.fixture(autouse=True)
def _isolate_rate_limiter():
    """Every test starts with no tracked clients."""
    reset_rate_limiter()
    yield
    reset_rate_limiter()


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: int = 0) -> None:
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(start_ms=1_700_000_000_000)
