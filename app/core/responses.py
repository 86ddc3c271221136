"""Fixed response shapes shared by the function handler and the HTTP app.

Every response, whatever the outcome, carries the same CORS headers and a
JSON content type.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel

PREFLIGHT_METHOD = "OPTIONS"
VISIT_METHOD = "POST"

BLOCKED_MESSAGE = "Request blocked by security validation"
INTERNAL_ERROR = "Internal server error"

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": f"{VISIT_METHOD}, {PREFLIGHT_METHOD}",
}

RESPONSE_HEADERS: dict[str, str] = {
    **CORS_HEADERS,
    "Content-Type": "application/json",
}


def response_headers() -> dict[str, str]:
    """Fresh copy of the headers every response carries."""
    return dict(RESPONSE_HEADERS)


def build_response(status_code: int, body: BaseModel | dict[str, Any] | None) -> dict[str, Any]:
    """Build a proxy-integration response ``{statusCode, headers, body}``.

    ``body`` is JSON-encoded; ``None`` produces an empty string body.
    """
    if body is None:
        encoded = ""
    elif isinstance(body, BaseModel):
        encoded = body.model_dump_json(by_alias=True)
    else:
        encoded = json.dumps(body)

    return {
        "statusCode": status_code,
        "headers": response_headers(),
        "body": encoded,
    }


def rejection_body(reason: str) -> dict[str, str]:
    return {"error": reason, "message": BLOCKED_MESSAGE}


def internal_error_body(detail: str) -> dict[str, str]:
    return {"error": INTERNAL_ERROR, "message": detail}
