"""Global exception handlers for consistent error responses.

Error bodies always have the shape ``{"error": ..., "message": ...}``:
- RequestRejectedError  -> its own status (400/403), rejection reason
- other ValidationAppError -> 400
- StoreAppError / unexpected Exception -> 500 "Internal server error"
  with the failure detail as message
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.errors import AppError, RequestRejectedError, StoreAppError, ValidationAppError
from app.core.logging import get_request_id
from app.core.responses import internal_error_body, rejection_body, response_headers

logger = logging.getLogger(__name__)


def _json(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=response_headers())


async def request_rejected_handler(request: Request, exc: RequestRejectedError) -> JSONResponse:
    """Return the validation failure verbatim to the caller.

    The validator has already logged origin, user agent and source IP.
    """
    return _json(exc.http_status, rejection_body(exc.message))


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors.

    - ValidationAppError -> 400 Bad Request (client fault)
    - StoreAppError and any other AppError -> 500 Internal Server Error
    """
    status_code = exc.http_status if isinstance(exc, ValidationAppError) else 500

    log = logger.warning if status_code < 500 else logger.error
    log(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_message": exc.message,
            "status_code": status_code,
            "is_store_error": isinstance(exc, StoreAppError),
            "request_path": request.url.path,
            "request_id": get_request_id(),
        },
    )

    if status_code < 500:
        return _json(status_code, rejection_body(exc.message))
    return _json(status_code, internal_error_body(exc.message))


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors (safety net)."""
    logger.error(
        "unhandled_exception",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
            "request_id": get_request_id(),
        },
    )
    return _json(500, internal_error_body(str(exc)))


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with FastAPI app.

    Specific handlers are registered before the general fallback.
    """
    app.exception_handler(RequestRejectedError)(request_rejected_handler)
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(Exception)(general_exception_handler)
