"""Pydantic schemas for booking requests."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from salon_api.schemas.common import EMAIL_PATTERN, FormRequest, SubmissionResponse


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AddOn(_CamelModel):
    id: str
    name: str
    price: float
    duration: int = Field(..., description="Extra minutes added to the appointment.")


class AdditionalClient(_CamelModel):
    service_id: str
    service_name: str
    price: float
    duration: int


class TimeBasedSelection(_CamelModel):
    hours: float
    price: float


class BookingRequest(FormRequest):
    """Booking request submitted by the booking wizard."""

    # Service
    service_type: str
    selected_option: str
    service_name: str
    option_name: str
    add_ons: list[AddOn] = Field(default_factory=list)
    hair_length_surcharge: bool = False
    additional_clients: list[AdditionalClient] = Field(default_factory=list)
    time_based_selection: TimeBasedSelection | None = None

    # Location
    postcode: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    travel_fee: float

    # Date / time, as picked in the wizard (ISO date, HH:MM)
    selected_date: str
    selected_time: str
    is_same_day: bool = False

    # Client
    client_name: str = Field(..., min_length=2)
    client_email: str = Field(..., pattern=EMAIL_PATTERN)
    client_phone: str = Field(..., min_length=10)
    special_requests: str = ""
    is_new_client: bool = True

    # Consents
    consent_boundaries: bool
    consent_cancellation: bool
    consent_women_only: bool

    # Pricing summary shown to the client
    total: float
    deposit_required: bool
    deposit_amount: float
    estimated_duration: int

    @field_validator("consent_boundaries")
    @classmethod
    def _boundaries_acknowledged(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("You must acknowledge the service boundaries")
        return value

    @field_validator("consent_cancellation")
    @classmethod
    def _cancellation_acknowledged(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("You must acknowledge the cancellation policy")
        return value

    @field_validator("consent_women_only")
    @classmethod
    def _women_only_confirmed(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("You must confirm this is a women-only service")
        return value


class BookingResponse(SubmissionResponse):
    booking_ref: str = Field(..., description="Reference quoted in all follow-up contact.")
