from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from salon_api.core.rate_limit import rate_limited
from salon_api.schemas.postcode import PostcodeCheckRequest, PostcodeCheckResponse
from salon_api.services.service_area import check_postcode as lookup_postcode

router = APIRouter(tags=["Service area"])

# Visitors often retype a postcode, so this check is more lenient than the forms.
POSTCODE_CHECK_MAX_REQUESTS = 10


@router.post(
    "/check-postcode",
    response_model=PostcodeCheckResponse,
    dependencies=[Depends(rate_limited("check-postcode", max_requests=POSTCODE_CHECK_MAX_REQUESTS))],
)
def check_postcode(payload: PostcodeCheckRequest) -> PostcodeCheckResponse:
    """Tell the visitor whether their postcode is inside the service area.

    Raises:
        RateLimitAppError: 429 when the visitor checks too many postcodes.
    """
    return lookup_postcode(payload.postcode)


@router.get("/check-postcode", include_in_schema=False)
def check_postcode_get() -> JSONResponse:
    return JSONResponse(
        status_code=405,
        content={"error": 'Method not allowed. Please POST with { "postcode": "SM1 1AA" }'},
    )
