"""Process-wide wiring of validator, store and counting service.

Instances are cached in-module so the allow-list and compiled bot patterns
are built once per process (one cold start for the function runtime, one
startup for the HTTP app). Tests can inject replacements with
``set_visit_counter_service`` / ``set_request_validator`` or FastAPI's
``dependency_overrides``.
"""

from __future__ import annotations

import logging

from app.adapters.storage.factory import create_blob_store
from app.core.bot_patterns import build_bot_matcher
from app.core.config import settings
from app.services.request_validator import RequestValidator
from app.services.visit_counter import VisitCounterService
from app.services.visit_store import VisitStore

logger = logging.getLogger(__name__)


_validator: RequestValidator | None = None
_service: VisitCounterService | None = None


def build_request_validator() -> RequestValidator:
    """Create a validator from the current settings."""
    matcher = build_bot_matcher(settings.app.extra_bot_pattern_list)
    allowed = settings.app.allowed_origin_list
    if not allowed:
        logger.warning("config.no_allowed_origins", extra={"hint": "Set ALLOWED_ORIGINS"})
    return RequestValidator(
        allowed_origins=allowed,
        bot_matcher=matcher,
        min_user_agent_length=settings.app.min_user_agent_length,
    )


def build_visit_counter_service() -> VisitCounterService:
    """Create the counting service over the configured blob store."""
    store = VisitStore(
        create_blob_store(settings.storage),
        key_prefix=settings.storage.key_prefix,
        encode_origin=settings.storage.encode_origin,
    )
    return VisitCounterService(store)


def get_request_validator() -> RequestValidator:
    global _validator
    if _validator is None:
        _validator = build_request_validator()
    return _validator


def get_visit_counter_service() -> VisitCounterService:
    """Return the process-wide counting service, building it on first use.

    The store is built lazily so preflight and health requests never touch
    storage configuration.
    """
    global _service
    if _service is None:
        _service = build_visit_counter_service()
    return _service


def set_request_validator(validator: RequestValidator | None) -> None:
    global _validator
    _validator = validator


def set_visit_counter_service(service: VisitCounterService | None) -> None:
    global _service
    _service = service
