from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from salon_api.core.rate_limit import rate_limited
from salon_api.schemas.enquiry import EnquiryRequest, EnquiryResponse
from salon_api.services.submission_service import receive_enquiry

router = APIRouter(tags=["Enquiry"])


@router.post(
    "/enquiry",
    response_model=EnquiryResponse,
    dependencies=[Depends(rate_limited("enquiry"))],
)
def create_enquiry(enquiry: EnquiryRequest) -> EnquiryResponse:
    """Submit a contact-page enquiry (out of area, pricing, availability, ...)."""
    return receive_enquiry(enquiry)


@router.get("/enquiry", include_in_schema=False)
def enquiry_get() -> JSONResponse:
    return JSONResponse(status_code=405, content={"error": "Method not allowed"})
