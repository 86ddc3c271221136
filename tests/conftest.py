"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any import that loads settings, so the
allow-list and storage backend below are what the app sees.
"""

import os

# CRITICAL: Set these before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("ALLOWED_ORIGINS", "https://allowed-site.com,https://example.com")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from datetime import datetime

import pytest

from app.adapters.storage.in_memory import InMemoryBlobStore
from app.core import dependencies
from app.services.visit_counter import VisitCounterService
from app.services.visit_store import VisitStore

BROWSER_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class FrozenClock:
    """Callable clock returning a fixed, adjustable instant."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def browser_ua() -> str:
    return BROWSER_UA


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2025, 3, 14, 9, 26, 53))


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def visit_store(blob_store: InMemoryBlobStore) -> VisitStore:
    return VisitStore(blob_store)


@pytest.fixture
def counter_service(visit_store: VisitStore, clock: FrozenClock) -> VisitCounterService:
    return VisitCounterService(visit_store, clock=clock)


@pytest.fixture(autouse=True)
def installed_service(counter_service: VisitCounterService):
    """Route the process-wide service to the per-test in-memory store."""
    dependencies.set_request_validator(None)
    dependencies.set_visit_counter_service(counter_service)
    yield counter_service
    dependencies.set_request_validator(None)
    dependencies.set_visit_counter_service(None)
