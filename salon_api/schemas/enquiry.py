"""Pydantic schemas for enquiries."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator

from salon_api.schemas.common import EMAIL_PATTERN, FormRequest, SubmissionResponse

EnquiryType = Literal[
    "out-of-area",
    "service-question",
    "pricing",
    "availability",
    "other",
]


class EnquiryRequest(FormRequest):
    """Free-form enquiry from the contact page."""

    name: str = Field(..., min_length=2)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    phone: str | None = None
    enquiry_type: EnquiryType
    message: str = Field(..., min_length=10, description="Please provide more detail")
    postcode: str | None = Field(
        default=None,
        description="Client postcode, mainly for out-of-area enquiries.",
    )
    service_interest: str | None = None
    consent_contact: bool

    @field_validator("consent_contact")
    @classmethod
    def _contact_consented(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("You must consent to being contacted")
        return value


class EnquiryResponse(SubmissionResponse):
    enquiry_ref: str
