"""Postcode normalization and service-area lookup.

The business travels to clients in a fixed set of outward postcode districts
(configured via ``APP_SERVED_DISTRICTS``). Anything else is handled through
an enquiry rather than an online booking.
"""

from __future__ import annotations

import re
from collections.abc import Collection

from salon_api.core.config import settings
from salon_api.schemas.postcode import PostcodeCheckResponse

_WHITESPACE = re.compile(r"\s+")
_DISTRICT = re.compile(r"^([A-Z]{1,2}\d{1,2}[A-Z]?)")

SERVED_MESSAGE = "Great news! Your postcode is inside the service area."
ENQUIRY_MESSAGE = (
    "Your area is outside the usual service area. A visit may still be "
    "possible by special arrangement, so please send an enquiry."
)


def normalize_postcode(postcode: str) -> str:
    """Trim, upper-case and collapse inner whitespace.

    Examples: ``"sm1 1aa" -> "SM1 1AA"``, ``"  SW19  " -> "SW19"``.
    """
    return _WHITESPACE.sub(" ", postcode.strip().upper())


def extract_district(postcode: str) -> str:
    """Return the outward district of a postcode (``"SM1 1AA" -> "SM1"``).

    Falls back to the first whitespace-separated token when the input does
    not look like a UK postcode.
    """
    normalized = normalize_postcode(postcode)
    match = _DISTRICT.match(normalized)
    if match:
        return match.group(1)
    return normalized.split(" ")[0]


def check_postcode(
    postcode: str,
    served_districts: Collection[str] | None = None,
) -> PostcodeCheckResponse:
    """Look up whether ``postcode`` falls inside the service area.

    Args:
        postcode: Raw postcode as typed by the visitor.
        served_districts: Override of the configured district list.

    Returns:
        PostcodeCheckResponse with the normalized postcode and served flag.
    """
    districts = (
        settings.app.served_district_set if served_districts is None else served_districts
    )
    district = extract_district(postcode)
    served = district in districts
    return PostcodeCheckResponse(
        postcode=normalize_postcode(postcode),
        district=district,
        served=served,
        requires_enquiry=not served,
        message=SERVED_MESSAGE if served else ENQUIRY_MESSAGE,
    )
