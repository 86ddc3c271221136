"""In-memory blob store.

Notes:
- Per-process only: nothing survives a restart.
- Thread-safe: uses a lock around shared state.
"""

from __future__ import annotations

import threading

from app.adapters.storage.base import AbstractBlobStore, BlobNotFoundError


class InMemoryBlobStore(AbstractBlobStore):
    """Blob store backed by a dict, for tests and local runs."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._lock = threading.RLock()
        self._objects: dict[str, bytes] = dict(initial or {})
        self._content_types: dict[str, str] = {}

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._objects

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._objects)

    def content_type(self, key: str) -> str | None:
        with self._lock:
            return self._content_types.get(key)

    def get(self, key: str) -> bytes:
        with self._lock:
            try:
                return self._objects[key]
            except KeyError:
                raise BlobNotFoundError(key) from None

    def put(self, key: str, data: bytes, *, content_type: str = "application/json") -> None:
        if not key:
            raise ValueError("key must be a non-empty string")
        with self._lock:
            self._objects[key] = bytes(data)
            self._content_types[key] = content_type
