"""Function runtime entry point for API Gateway proxy events.

Configure the runtime handler as ``app.handler.count_visits``. Both REST API
(v1) and HTTP API (v2) event shapes are understood.

Dispatch order:
1. OPTIONS on any path            -> CORS preflight ack
2. health path                    -> liveness body, no storage access
3. validation failure             -> 400/403 with the rejection reason
4. accepted                       -> increment and return the record
5. anything raised in 3-4         -> 500 with the failure detail
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from app.core.config import settings
from app.core.dependencies import get_request_validator, get_visit_counter_service
from app.core.errors import RequestRejectedError
from app.core.logging import clear_request_id, configure_logging, set_request_id
from app.core.responses import (
    PREFLIGHT_METHOD,
    build_response,
    internal_error_body,
    rejection_body,
)
from app.schemas.visit import HealthResponse, VisitCountResponse
from app.utils.timestamps import to_iso_z, utc_now

configure_logging(settings.log)

logger = logging.getLogger(__name__)


def _request_context(event: Mapping[str, Any]) -> Mapping[str, Any]:
    return event.get("requestContext") or {}


def get_method(event: Mapping[str, Any]) -> str:
    """HTTP method from a v1 (``httpMethod``) or v2 (``requestContext.http``) event."""
    if event.get("httpMethod"):
        return str(event["httpMethod"]).upper()
    http = _request_context(event).get("http") or {}
    return str(http.get("method") or "").upper()


def get_path(event: Mapping[str, Any]) -> str:
    return event.get("path") or event.get("rawPath") or ""


def get_source_ip(event: Mapping[str, Any]) -> str | None:
    ctx = _request_context(event)
    identity = ctx.get("identity") or {}
    http = ctx.get("http") or {}
    return identity.get("sourceIp") or http.get("sourceIp")


def _request_id(event: Mapping[str, Any], context: Any) -> str | None:
    return getattr(context, "aws_request_id", None) or _request_context(event).get("requestId")


def health_response() -> dict[str, Any]:
    return build_response(200, HealthResponse(timestamp=to_iso_z(utc_now())))


def count_visits(event: Mapping[str, Any] | None, context: Any = None) -> dict[str, Any]:
    """Handle one proxy event and return ``{statusCode, headers, body}``.

    Never raises: every failure becomes a well-formed 500 response.
    """
    event = event or {}
    set_request_id(_request_id(event, context))
    try:
        return _dispatch(event)
    finally:
        clear_request_id()


def _dispatch(event: Mapping[str, Any]) -> dict[str, Any]:
    if get_method(event) == PREFLIGHT_METHOD:
        return build_response(200, None)

    if get_path(event) == settings.app.health_path:
        return health_response()

    try:
        accepted = get_request_validator().validate(
            event.get("headers") or {},
            get_source_ip(event),
        )
        record = get_visit_counter_service().record_visit(accepted.origin)
        body = VisitCountResponse.from_record(record)
        return build_response(200, body)
    except RequestRejectedError as exc:
        return build_response(exc.http_status, rejection_body(exc.message))
    except Exception as exc:
        logger.exception(
            "visit.failed",
            extra={"error_type": type(exc).__name__, "error_msg": str(exc)},
        )
        return build_response(500, internal_error_body(str(exc)))
