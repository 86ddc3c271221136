from __future__ import annotations

from app.api.routes.health import router as health_router
from app.api.routes.preflight import router as preflight_router
from app.api.routes.visits import router as visits_router

__all__ = ["health_router", "preflight_router", "visits_router"]
