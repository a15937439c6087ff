"""Pydantic schemas for the service-area postcode check."""

from __future__ import annotations

from pydantic import BaseModel, Field

from salon_api.schemas.common import CamelResponse


class PostcodeCheckRequest(BaseModel):
    postcode: str = Field(..., min_length=2, description="UK postcode, full or district only.")


class PostcodeCheckResponse(CamelResponse):
    """Outcome of a service-area lookup."""

    success: bool = True
    postcode: str = Field(..., description="Normalized postcode (upper-case, single spaces).")
    district: str = Field(..., description="Outward district, e.g. 'SM1'.")
    served: bool = Field(
        ...,
        description="Whether the district is inside the regular service area.",
    )
    requires_enquiry: bool = Field(
        ...,
        description="True when the visit can only be arranged through an enquiry.",
    )
    message: str = Field(..., description="Friendly explanation shown next to the checker.")
