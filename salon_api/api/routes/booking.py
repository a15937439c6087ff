from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from salon_api.core.rate_limit import rate_limited
from salon_api.schemas.booking import BookingRequest, BookingResponse
from salon_api.services.submission_service import receive_booking

router = APIRouter(tags=["Booking"])


@router.post(
    "/booking",
    response_model=BookingResponse,
    dependencies=[Depends(rate_limited("booking"))],
)
def create_booking(booking: BookingRequest) -> BookingResponse:
    """Submit a booking request from the booking wizard.

    The request is acknowledged with a ``CHS-`` reference; the appointment is
    confirmed with the client afterwards.

    Raises:
        RateLimitAppError: 429 when the client submits too often.
        SpamDetectedAppError: 400 when the honeypot field is filled.
    """
    return receive_booking(booking)


@router.get("/booking", include_in_schema=False)
def booking_get() -> JSONResponse:
    return JSONResponse(status_code=405, content={"error": "Method not allowed"})
