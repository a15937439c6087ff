"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients.

    Fields are optional; populate only what is meaningful for the error.
    """

    code: str
    message: str
    hint: str
    limit: int
    retry_after: int
    fields: dict[str, list[str]]
    postcode: str
    enquiry_only: bool
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when request input fails validation."""


class SpamDetectedAppError(AppError):
    """Raised when a form submission trips the honeypot field."""


class OutOfAreaAppError(AppError):
    """Raised when a booking targets a postcode outside the service area.

    Such visits are arranged through an enquiry instead.
    """


@dataclass
class RateLimitAppError(AppError):
    """Raised when a client exceeds its request budget.

    Attributes:
        headers: Response headers to attach to the 429 (e.g., Retry-After).
    """

    headers: dict[str, str] = field(default_factory=dict)
