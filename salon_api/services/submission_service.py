"""Intake of booking requests and enquiries.

Submissions are acknowledged with a human-friendly reference and logged for
the business owner; confirmation is handled manually afterwards.
"""

from __future__ import annotations

import logging
import secrets
import string
from datetime import datetime, timezone
from typing import Callable

from salon_api.core.errors import OutOfAreaAppError, SpamDetectedAppError
from salon_api.schemas.booking import BookingRequest, BookingResponse
from salon_api.schemas.common import FormRequest
from salon_api.schemas.enquiry import EnquiryRequest, EnquiryResponse
from salon_api.services.service_area import check_postcode

logger = logging.getLogger(__name__)

BOOKING_REF_PREFIX = "CHS"
ENQUIRY_REF_PREFIX = "ENQ"

_REF_ALPHABET = string.ascii_uppercase + string.digits


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_reference(
    prefix: str,
    now: Callable[[], datetime] = _utcnow,
) -> str:
    """Build a reference like ``CHS-260118-7QK2`` (prefix, UTC YYMMDD, 4 random chars)."""
    date_part = now().strftime("%y%m%d")
    random_part = "".join(secrets.choice(_REF_ALPHABET) for _ in range(4))
    return f"{prefix}-{date_part}-{random_part}"


def reject_honeypot(form: FormRequest) -> None:
    """Raise when the hidden ``website`` field was filled in.

    Raises:
        SpamDetectedAppError: If the honeypot carries any value.
    """
    if form.website:
        logger.warning("form.honeypot_triggered", extra={"form": type(form).__name__})
        raise SpamDetectedAppError(
            code="spam_detected",
            message="Submission rejected.",
        )


def receive_booking(booking: BookingRequest) -> BookingResponse:
    """Accept a booking request and return its reference.

    Raises:
        SpamDetectedAppError: If the honeypot field is filled.
        OutOfAreaAppError: If the postcode is outside the service area.
    """
    reject_honeypot(booking)

    area = check_postcode(booking.postcode)
    if area.requires_enquiry:
        logger.info("booking.out_of_area", extra={"district": area.district})
        raise OutOfAreaAppError(
            code="enquiry_only",
            message=area.message,
            details={"postcode": area.postcode, "enquiry_only": True},
        )

    booking_ref = generate_reference(BOOKING_REF_PREFIX)

    logger.info(
        "booking.received",
        extra={
            "booking_ref": booking_ref,
            "service_type": booking.service_type,
            "selected_date": booking.selected_date,
            "selected_time": booking.selected_time,
            "is_new_client": booking.is_new_client,
            "deposit_required": booking.deposit_required,
            "client_name": booking.client_name,
            "client_email": booking.client_email,
        },
    )

    return BookingResponse(
        booking_ref=booking_ref,
        message="Booking request received successfully",
    )


def receive_enquiry(enquiry: EnquiryRequest) -> EnquiryResponse:
    """Accept an enquiry and return its reference."""
    reject_honeypot(enquiry)
    enquiry_ref = generate_reference(ENQUIRY_REF_PREFIX)

    logger.info(
        "enquiry.received",
        extra={
            "enquiry_ref": enquiry_ref,
            "enquiry_type": enquiry.enquiry_type,
            "has_postcode": bool(enquiry.postcode),
            "email": enquiry.email,
        },
    )

    return EnquiryResponse(
        enquiry_ref=enquiry_ref,
        message="Enquiry received successfully",
    )
