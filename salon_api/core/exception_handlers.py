"""Global exception handlers for consistent error responses.

Design:
- AppError subclasses map to an HTTP status (400, 429)
- The request id comes from ``request.state`` first, so it survives into
  the 500 fallback, which runs outside the request-id middleware
- Request body validation failures are reshaped into the same envelope
- Unexpected Exception becomes a generic 500 (safety net)
- All responses include request_id for log correlation
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from salon_api.core.errors import AppError, RateLimitAppError
from salon_api.core.logging import get_request_id
from salon_api.core.middleware import request_id_for

logger = logging.getLogger(__name__)


def _status_for(exc: AppError) -> int:
    if isinstance(exc, RateLimitAppError):
        return 429
    return 400


def _request_id(request: Request) -> str | None:
    return request_id_for(request) or get_request_id()


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render domain errors as ``{"error": {...}}`` with the mapped status code.

    - RateLimitAppError → 429 Too Many Requests (headers forwarded)
    - ValidationAppError, SpamDetectedAppError, OutOfAreaAppError and other
      AppError → 400
    """
    status_code = _status_for(exc)

    logger.warning(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "status_code": status_code,
            "request_path": request.url.path,
            "has_details": bool(exc.details),
        },
    )

    error_content = {
        "code": exc.code,
        "message": exc.message,
        "request_id": _request_id(request),
    }
    if exc.details:
        error_content["details"] = exc.details

    headers = exc.headers if isinstance(exc, RateLimitAppError) else None
    return JSONResponse(
        status_code=status_code,
        content={"error": error_content},
        headers=headers or None,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Flatten pydantic validation errors into per-field messages."""
    fields: dict[str, list[str]] = {}
    for error in exc.errors():
        # loc is ("body", "field", ...); drop the "body" prefix
        loc = [str(part) for part in error.get("loc", ())[1:]] or ["body"]
        fields.setdefault(".".join(loc), []).append(error.get("msg", "Invalid value"))

    logger.info(
        "request_validation_failed",
        extra={"request_path": request.url.path, "fields": sorted(fields)},
    )

    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "code": "invalid_request",
                "message": "Request body failed validation.",
                "request_id": _request_id(request),
                "details": {"fields": fields},
            }
        },
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors.

    Logs the failure for debugging but returns a generic message so no
    implementation details reach the client.
    """
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "request_path": request.url.path,
            "request_method": request.method,
        },
        exc_info=exc,
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": _request_id(request),
            }
        },
    )


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with the FastAPI app.

    Specific handlers are registered before the general fallback.
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(RequestValidationError)(request_validation_handler)
    app.exception_handler(Exception)(general_exception_handler)
