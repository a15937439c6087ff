"""Rate limiting dependency for FastAPI routes.

This module wires the rate limiting adapter into the HTTP layer.

Design goals:
- Minimal coupling: routes depend on a dependency built by ``rate_limited``.
- One limiter per process, owned here and handed to every route; routes never
  touch the limiter state directly.
- Each call site picks its own scope and limits; omitted limits fall back to
  the limiter defaults (from settings). Scopes keep one route's traffic from
  consuming another route's budget.

Clients are identified by the socket peer address as reported by the ASGI
server. Proxy headers are not interpreted.
"""

from __future__ import annotations

import logging
import math
import threading
from typing import Callable

from fastapi import Request

from salon_api.adapters.rate_limit.base import AbstractRateLimiter
from salon_api.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter
from salon_api.core.config import settings
from salon_api.core.errors import RateLimitAppError
from salon_api.core.logging import hash_identifier

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"

_limiter: AbstractRateLimiter | None = None
_limiter_lock = threading.Lock()


def get_rate_limiter() -> AbstractRateLimiter:
    """Return the process-wide rate limiter, building it on first use.

    Returns:
        AbstractRateLimiter: Limiter configured from ``settings.app``.
    """

    global _limiter

    if _limiter is None:
        with _limiter_lock:
            if _limiter is None:
                _limiter = InMemorySlidingWindowRateLimiter(
                    max_requests=settings.app.rate_limit_max_requests,
                    window_ms=settings.app.rate_limit_window_ms,
                    sweep_every=settings.app.rate_limit_sweep_every,
                )
    return _limiter


def set_rate_limiter(limiter: AbstractRateLimiter | None) -> None:
    """Install a specific limiter instance (``None`` rebuilds from settings)."""

    global _limiter

    with _limiter_lock:
        _limiter = limiter


def reset_rate_limiter() -> None:
    """Forget all tracked clients. Only tests should call this."""

    if _limiter is not None:
        _limiter.reset()


def client_identifier(request: Request, scope: str) -> str:
    """Return the opaque identifier used to partition rate limits."""

    host = request.client.host if request.client else UNKNOWN_CLIENT
    return f"{scope}:{host}"


def _throttle_headers(limit: int, retry_after_ms: int) -> dict[str, str]:
    return {
        "Retry-After": str(math.ceil(retry_after_ms / 1000)),
        "X-RateLimit-Limit": str(limit),
        "X-RateLimit-Remaining": "0",
    }


def rate_limited(
    scope: str,
    max_requests: int | None = None,
    window_ms: int | None = None,
) -> Callable[[Request], None]:
    """Build a FastAPI dependency enforcing a per-client limit for one call site.

    Args:
        scope: Namespace for the identifier (usually the route name).
        max_requests: Admitted requests per window (None uses the limiter default).
        window_ms: Window length in milliseconds (None uses the limiter default).

    Returns:
        A dependency callable suitable for ``Depends``.

    Example:
        >>> @router.post("/booking", dependencies=[Depends(rate_limited("booking"))])
    """

    def enforce_rate_limit(request: Request) -> None:
        """Admit the request or raise ``RateLimitAppError`` (HTTP 429)."""

        if not settings.app.rate_limit_enabled:
            return

        limiter = get_rate_limiter()
        identifier = client_identifier(request, scope)
        client_hash = hash_identifier(identifier)

        if limiter.admit(identifier, max_requests=max_requests, window_ms=window_ms):
            logger.debug(
                "rate_limit.allowed",
                extra={
                    "client_hash": client_hash,
                    "scope": scope,
                    "route": request.url.path,
                    "count": limiter.count(identifier, window_ms=window_ms),
                },
            )
            return

        limit = max_requests if max_requests is not None else limiter.max_requests
        retry_after_ms = limiter.retry_after_ms(identifier, window_ms=window_ms)

        logger.warning(
            "rate_limit.exceeded",
            extra={
                "client_hash": client_hash,
                "scope": scope,
                "route": request.url.path,
                "limit": limit,
                "retry_after_ms": retry_after_ms,
            },
        )

        headers: dict[str, str] = {}
        if settings.app.rate_limit_include_headers:
            headers = _throttle_headers(limit, retry_after_ms)

        raise RateLimitAppError(
            code="rate_limited",
            message="Too many requests. Please wait a moment and try again.",
            details={"limit": limit, "retry_after": math.ceil(retry_after_ms / 1000)},
            headers=headers,
        )

    return enforce_rate_limit
