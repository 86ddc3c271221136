from __future__ import annotations

from fastapi import APIRouter

from app.core.config import settings
from app.schemas.visit import HealthResponse
from app.utils.timestamps import to_iso_z, utc_now

router = APIRouter(tags=["Health"])


@router.api_route(settings.app.health_path, methods=["GET", "POST"], response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint.

    Used by load balancers and uptime checks. Never touches storage.

    Returns:
        HealthResponse: ``{"status": "healthy", "timestamp": ...}``.
    """

    return HealthResponse(timestamp=to_iso_z(utc_now()))
