"""Counter store adapter: visit records on top of a blob store.

One JSON object per (origin, period) at ``<prefix>/<origin>/<period>.json``.
This adapter is the only component that knows how records are keyed.

get-then-put is not atomic. Two concurrent visits for the same origin can
read the same count and the later write wins, losing one increment. The
backing store offers no conditional write here, and that loss is accepted.
"""

from __future__ import annotations

import json
import logging
from urllib.parse import quote

from pydantic import ValidationError

from app.adapters.storage.base import AbstractBlobStore, BlobNotFoundError
from app.core.errors import StoreAppError
from app.schemas.visit import VisitRecord

logger = logging.getLogger(__name__)

CONTENT_TYPE_JSON = "application/json"


class VisitStore:
    """Reads and overwrites whole visit records."""

    def __init__(
        self,
        blob_store: AbstractBlobStore,
        *,
        key_prefix: str = "visits",
        encode_origin: bool = False,
    ) -> None:
        self._blob_store = blob_store
        self._key_prefix = key_prefix.strip("/")
        self._encode_origin = encode_origin

    def build_key(self, origin: str, period: str) -> str:
        """Return the object key for (origin, period).

        The origin is used verbatim unless ``encode_origin`` is set, in which
        case it is percent-encoded so it always forms a single key segment.

        Examples:
            >>> VisitStore(None).build_key("https://a.com", "2025-01")
            'visits/https://a.com/2025-01.json'
            >>> VisitStore(None, encode_origin=True).build_key("https://a.com", "2025-01")
            'visits/https%3A%2F%2Fa.com/2025-01.json'
        """
        segment = quote(origin, safe="") if self._encode_origin else origin
        if self._key_prefix:
            return f"{self._key_prefix}/{segment}/{period}.json"
        return f"{segment}/{period}.json"

    def get(self, origin: str, period: str) -> VisitRecord:
        """Load the record for (origin, period).

        Returns an empty record (count 0, no last visit) when nothing has been
        stored yet; that is the normal state for a new origin or month.

        Raises:
            StoreAppError: On backend failure or an unreadable stored payload.
        """
        key = self.build_key(origin, period)
        try:
            raw = self._blob_store.get(key)
        except BlobNotFoundError:
            logger.debug("visit_store.miss", extra={"key": key})
            return VisitRecord.empty(origin, period)

        try:
            return VisitRecord.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as exc:
            logger.error(
                "visit_store.corrupt_record",
                extra={"key": key, "error_msg": str(exc)},
            )
            raise StoreAppError(
                code="store_corrupt_record",
                message=f"Stored visit record at '{key}' is not valid: {exc}",
                details={"key": key},
            ) from exc

    def put(self, record: VisitRecord) -> None:
        """Serialize ``record`` and overwrite its object. No retries."""
        key = self.build_key(record.origin, record.period)
        body = json.dumps(record.to_storage(), indent=2).encode("utf-8")
        self._blob_store.put(key, body, content_type=CONTENT_TYPE_JSON)
        logger.debug("visit_store.written", extra={"key": key, "visit_count": record.visit_count})
