"""Application factory for the FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers) so
tests can build a fresh instance.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from salon_api.api.routes import (
    booking_router,
    enquiry_router,
    health_router,
    postcode_router,
)
from salon_api.core.config import settings
from salon_api.core.exception_handlers import setup_exception_handlers
from salon_api.core.logging import configure_logging
from salon_api.core.middleware import request_id_middleware
from salon_api.core.rate_limit import get_rate_limiter

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers and routers.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Home Salon Booking API",
        description=(
            "Public endpoints behind the home salon website: service-area "
            "postcode check, booking requests and enquiries. Every endpoint "
            "is rate limited per client with a sliding window."
        ),
        version="0.1.0",
        debug=settings.app.debug,
    )

    app.middleware("http")(request_id_middleware)
    setup_exception_handlers(app)

    app.include_router(postcode_router, prefix="/api")
    app.include_router(booking_router, prefix="/api")
    app.include_router(enquiry_router, prefix="/api")
    app.include_router(health_router)

    limiter = get_rate_limiter()
    logger.info(
        "app.created",
        extra={
            "app_env": settings.app_env,
            "rate_limit_enabled": settings.app.rate_limit_enabled,
            "rate_limit_max_requests": limiter.max_requests,
            "rate_limit_window_ms": limiter.window_ms,
        },
    )

    return app
