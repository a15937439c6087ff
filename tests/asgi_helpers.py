"""Helpers for simulating distinct clients through TestClient."""

from __future__ import annotations

from fastapi.testclient import TestClient


def with_client_host(app, host: str):
    """Wrap an ASGI app so every request appears to come from ``host``."""

    async def wrapped(scope, receive, send):
        if scope["type"] == "http":
            scope = dict(scope, client=(host, 50000))
        await app(scope, receive, send)

    return wrapped


def client_for(app, host: str = "1.2.3.4", **kwargs) -> TestClient:
    return TestClient(with_client_host(app, host), **kwargs)
