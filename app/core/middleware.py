"""HTTP middleware for request correlation and fixed response headers.

``request_id_middleware``:
- Accepts incoming X-Request-ID header or generates a UUID
- Stores request_id in contextvars for access throughout the request lifecycle
- Injects request_id and total duration into response headers
- Clears context after request completion to prevent context leaks

``cors_headers_middleware`` stamps the fixed CORS headers on every response,
including error responses produced by exception handlers.

Usage:
    app.middleware("http")(cors_headers_middleware)
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import time
import uuid

from fastapi import Request, Response

from app.core.config import settings
from app.core.logging import clear_request_id, set_request_id
from app.core.responses import CORS_HEADERS


async def request_id_middleware(request: Request, call_next) -> Response:
    """Propagate or generate a correlation id for the request.

    If the client provides the configured request id header (default
    X-Request-ID), that value is used; otherwise a new UUID is generated.

    Returns:
        Response: The downstream response with X-Request-ID and
            X-Request-Duration-ms headers added.
    """

    header_name = settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
    finally:
        clear_request_id()

    duration_ms = (time.perf_counter() - start) * 1000
    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response


async def cors_headers_middleware(request: Request, call_next) -> Response:
    response: Response = await call_next(request)
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    return response
