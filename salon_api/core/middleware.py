"""HTTP middleware for request ID propagation and timing.

Every request/response pair carries a correlation id: the incoming
``X-Request-ID`` header (name configurable via ``LOG_REQUEST_ID_HEADER``) is
reused when present, otherwise a UUID4 is generated.

The id lives in two places: the logging contextvar for the duration of the
handler, and ``request.state.request_id``. Unhandled exceptions are rendered
by Starlette's outermost error middleware after this one has already
returned, so the 500 handler reads the id from ``request.state``.

Usage:
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request, Response

from salon_api.core.config import settings
from salon_api.core.logging import clear_request_id, set_request_id

logger = logging.getLogger(__name__)


def request_id_for(request: Request) -> str | None:
    """Return the correlation id bound to ``request`` by the middleware, if any."""

    return getattr(request.state, "request_id", None)


async def request_id_middleware(request: Request, call_next) -> Response:
    """Bind a request id, time the handler, and echo both on the response."""

    header_name = settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    request.state.request_id = request_id
    set_request_id(request_id)

    started = time.perf_counter()
    try:
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers[header_name] = request_id
        response.headers.setdefault("X-Request-Duration-ms", f"{elapsed_ms:.2f}")
        logger.debug(
            "request.completed",
            extra={
                "route": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
    finally:
        clear_request_id()
