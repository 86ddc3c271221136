"""Application factory for the FastAPI app.

Serves the same contract as the function handler in ``app.handler`` for
deployments that run a long-lived HTTP process instead of a function runtime.
"""

from __future__ import annotations

from fastapi import FastAPI

from app.api.routes import health_router, preflight_router, visits_router
from app.core.config import settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import cors_headers_middleware, request_id_middleware
from app.core.openapi import apply_openapi_customizations


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Visit Counter API",
        description=(
            "Counts visits per allow-listed origin and calendar month. Requests "
            "without an allowed Origin header or coming from automated clients "
            "are rejected before any counter is touched."
        ),
        version="0.1.0",
        debug=settings.app.debug,
    )

    # Middleware (last registered runs first)
    app.middleware("http")(cors_headers_middleware)
    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(visits_router)
    app.include_router(preflight_router)

    apply_openapi_customizations(app)

    return app
