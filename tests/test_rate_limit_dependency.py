"""Tests for the FastAPI rate limiting dependency."""

from __future__ import annotations

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from asgi_helpers import client_for

from salon_api.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter
from salon_api.core.config import settings
from salon_api.core.exception_handlers import setup_exception_handlers
from salon_api.core.rate_limit import (
    get_rate_limiter,
    rate_limited,
    reset_rate_limiter,
    set_rate_limiter,
)


@pytest.fixture
def limiter(clock):
    limiter = InMemorySlidingWindowRateLimiter(max_requests=2, window_ms=10_000, clock=clock)
    set_rate_limiter(limiter)
    yield limiter
    set_rate_limiter(None)


@pytest.fixture
def app(limiter) -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.post("/limited", dependencies=[Depends(rate_limited("limited"))])
    def limited() -> dict:
        return {"ok": True}

    @app.post("/strict", dependencies=[Depends(rate_limited("strict", max_requests=1))])
    def strict() -> dict:
        return {"ok": True}

    return app


def _client(app: FastAPI, host: str = "1.2.3.4") -> TestClient:
    return client_for(app, host)


def test_get_rate_limiter_is_a_process_singleton() -> None:
    set_rate_limiter(None)
    try:
        first = get_rate_limiter()
        assert get_rate_limiter() is first
        assert first.max_requests == settings.app.rate_limit_max_requests
        assert first.window_ms == settings.app.rate_limit_window_ms
    finally:
        set_rate_limiter(None)


def test_admits_until_limit_then_returns_429(app: FastAPI) -> None:
    client = _client(app)

    assert client.post("/limited").status_code == 200
    assert client.post("/limited").status_code == 200

    resp = client.post("/limited")
    assert resp.status_code == 429
    error = resp.json()["error"]
    assert error["code"] == "rate_limited"
    assert error["details"]["limit"] == 2
    assert "request_id" in error


def test_429_carries_throttle_headers(app: FastAPI, clock) -> None:
    client = _client(app)
    client.post("/limited")
    clock.advance(2_500)
    client.post("/limited")

    resp = client.post("/limited")

    assert resp.status_code == 429
    assert resp.headers["Retry-After"] == "8"
    assert resp.headers["X-RateLimit-Limit"] == "2"
    assert resp.headers["X-RateLimit-Remaining"] == "0"


def test_headers_can_be_disabled(app: FastAPI, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings.app, "rate_limit_include_headers", False)
    client = _client(app)
    client.post("/limited")
    client.post("/limited")

    resp = client.post("/limited")

    assert resp.status_code == 429
    assert "Retry-After" not in resp.headers


def test_recovers_after_window(app: FastAPI, clock) -> None:
    client = _client(app)
    client.post("/limited")
    client.post("/limited")
    assert client.post("/limited").status_code == 429

    clock.advance(10_000)

    assert client.post("/limited").status_code == 200


def test_clients_are_isolated(app: FastAPI) -> None:
    noisy = _client(app, "1.2.3.4")
    quiet = _client(app, "5.6.7.8")
    for _ in range(3):
        noisy.post("/limited")

    assert noisy.post("/limited").status_code == 429
    assert quiet.post("/limited").status_code == 200


def test_routes_have_separate_budgets(app: FastAPI, limiter) -> None:
    client = _client(app)
    client.post("/limited")
    client.post("/limited")

    assert client.post("/strict").status_code == 200
    assert client.post("/strict").status_code == 429
    assert limiter.count("limited:1.2.3.4") == 2
    assert limiter.count("strict:1.2.3.4") == 1


def test_disabled_rate_limit_is_a_no_op(app: FastAPI, limiter, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings.app, "rate_limit_enabled", False)
    client = _client(app)

    assert all(client.post("/limited").status_code == 200 for _ in range(5))
    assert limiter.tracked_identifiers == 0


def test_reset_rate_limiter_forgives_everyone(app: FastAPI) -> None:
    client = _client(app)
    client.post("/limited")
    client.post("/limited")
    assert client.post("/limited").status_code == 429

    reset_rate_limiter()

    assert client.post("/limited").status_code == 200


def test_exceeded_log_never_contains_raw_address(app: FastAPI, caplog: pytest.LogCaptureFixture) -> None:
    client = _client(app, "203.0.113.9")
    client.post("/limited")
    client.post("/limited")

    with caplog.at_level("WARNING", logger="salon_api.core.rate_limit"):
        client.post("/limited")

    records = [r for r in caplog.records if r.getMessage() == "rate_limit.exceeded"]
    assert len(records) == 1
    assert records[0].scope == "limited"
    assert len(records[0].client_hash) == 16
    assert "203.0.113.9" not in repr(records[0].__dict__)
