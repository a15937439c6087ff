from __future__ import annotations

from fastapi import APIRouter

from salon_api.core.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness check for the hosting platform.

    Not rate limited, so uptime checks never eat into a client's budget.
    """

    return {"status": "ok", "rate_limit_enabled": settings.app.rate_limit_enabled}
