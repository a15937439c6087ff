from __future__ import annotations

from salon_api.api.routes.booking import router as booking_router
from salon_api.api.routes.enquiry import router as enquiry_router
from salon_api.api.routes.health import router as health_router
from salon_api.api.routes.postcode import router as postcode_router

__all__ = ["booking_router", "enquiry_router", "health_router", "postcode_router"]
