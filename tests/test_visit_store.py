"""Unit tests for the visit record store adapter."""

import json

import pytest

from app.adapters.storage.in_memory import InMemoryBlobStore
from app.core.errors import StoreAppError
from app.schemas.visit import VisitRecord
from app.services.visit_counter import VisitCounterService
from app.services.visit_store import VisitStore


def test_build_key_uses_origin_verbatim(visit_store: VisitStore) -> None:
    assert (
        visit_store.build_key("https://allowed-site.com", "2025-03")
        == "visits/https://allowed-site.com/2025-03.json"
    )


def test_build_key_can_encode_origin(blob_store: InMemoryBlobStore) -> None:
    store = VisitStore(blob_store, key_prefix="counters/", encode_origin=True)

    assert (
        store.build_key("https://allowed-site.com:8443", "2025-03")
        == "counters/https%3A%2F%2Fallowed-site.com%3A8443/2025-03.json"
    )


def test_build_key_without_prefix(blob_store: InMemoryBlobStore) -> None:
    assert VisitStore(blob_store, key_prefix="").build_key("o", "2025-03") == "o/2025-03.json"


def test_get_missing_returns_empty_record(visit_store: VisitStore, blob_store: InMemoryBlobStore) -> None:
    record = visit_store.get("https://allowed-site.com", "2025-03")

    assert record == VisitRecord(
        origin="https://allowed-site.com", period="2025-03", visit_count=0, last_visit_date=None
    )
    # Reads never materialize a record
    assert blob_store.keys() == []


def test_put_writes_full_json_record(visit_store: VisitStore, blob_store: InMemoryBlobStore) -> None:
    record = VisitRecord(
        origin="https://allowed-site.com",
        period="2025-03",
        visit_count=7,
        last_visit_date="2025-03-14T09:26:53.000Z",
    )

    visit_store.put(record)

    key = "visits/https://allowed-site.com/2025-03.json"
    assert json.loads(blob_store.get(key)) == {
        "origin": "https://allowed-site.com",
        "period": "2025-03",
        "visitCount": 7,
        "lastVisitDate": "2025-03-14T09:26:53.000Z",
    }
    assert blob_store.content_type(key) == "application/json"


def test_put_then_get_returns_same_record(visit_store: VisitStore) -> None:
    record = VisitRecord(
        origin="https://example.com",
        period="2024-12",
        visit_count=41,
        last_visit_date="2024-12-31T23:59:59.999Z",
    )

    visit_store.put(record)

    assert visit_store.get("https://example.com", "2024-12") == record


def test_corrupt_payload_raises_store_error(visit_store: VisitStore, blob_store: InMemoryBlobStore) -> None:
    blob_store.put("visits/https://example.com/2025-03.json", b"{not json")

    with pytest.raises(StoreAppError) as exc_info:
        visit_store.get("https://example.com", "2025-03")

    assert exc_info.value.code == "store_corrupt_record"


def test_invalid_record_shape_raises_store_error(visit_store: VisitStore, blob_store: InMemoryBlobStore) -> None:
    blob_store.put(
        "visits/https://example.com/2025-03.json",
        json.dumps({"origin": "https://example.com", "period": "2025-03", "visitCount": -1}).encode(),
    )

    with pytest.raises(StoreAppError):
        visit_store.get("https://example.com", "2025-03")


def test_backend_failure_propagates(blob_store: InMemoryBlobStore) -> None:
    class FailingStore(InMemoryBlobStore):
        def get(self, key: str) -> bytes:
            raise StoreAppError(code="store_read_failed", message="Access Denied")

    with pytest.raises(StoreAppError, match="Access Denied"):
        VisitStore(FailingStore()).get("https://example.com", "2025-03")


def test_reads_record_saved_with_year_month_key(
    visit_store: VisitStore,
    blob_store: InMemoryBlobStore,
    counter_service: VisitCounterService,
) -> None:
    key = "visits/https://allowed-site.com/2025-03.json"
    blob_store.put(
        key,
        json.dumps(
            {
                "origin": "https://allowed-site.com",
                "yearMonth": "2025-03",
                "visitCount": 41,
                "lastVisitDate": "2025-03-13T18:02:11.417Z",
            }
        ).encode(),
    )

    assert visit_store.get("https://allowed-site.com", "2025-03").period == "2025-03"

    record = counter_service.record_visit("https://allowed-site.com")

    assert record.visit_count == 42
    stored = json.loads(blob_store.get(key))
    assert stored["period"] == "2025-03"
    assert "yearMonth" not in stored
    assert stored["visitCount"] == 42
