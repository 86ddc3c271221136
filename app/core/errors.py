"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses.

Two families matter to callers:
- ValidationAppError: client-caused (4xx), never retried.
- StoreAppError: backing store failures, surfaced as a generic 500.

A missing record on read is not an error; the store adapter synthesizes an
empty record instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    code: str
    message: str
    hint: str
    http_status: int
    origin: str
    user_agent: str
    source_ip: str
    key: str
    backend: str
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input/config validation fails."""

    @property
    def http_status(self) -> int:
        if self.details and "http_status" in self.details:
            return int(self.details["http_status"])
        return 400


class RequestRejectedError(ValidationAppError):
    """Raised when an incoming visit fails the security checks.

    ``message`` is returned verbatim to the caller; ``code`` is the stable
    reason string (e.g. ``origin_not_allowed``).
    """

    def __init__(
        self,
        code: str,
        message: str,
        http_status: int,
        details: ErrorDetails | None = None,
    ) -> None:
        merged: ErrorDetails = {**(details or {}), "http_status": http_status}
        super().__init__(code=code, message=message, details=merged)


class StoreAppError(AppError):
    """Raised when the backing object store fails (network, permission, corrupt payload)."""
