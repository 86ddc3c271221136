"""Blob store interfaces.

Keys are slash-separated strings; values are opaque bytes. Implementations
must raise BlobNotFoundError for a missing key and StoreAppError for any
other failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from app.core.errors import StoreAppError


class BlobNotFoundError(StoreAppError):
    """Raised by ``get`` when no object exists at the key."""

    def __init__(self, key: str) -> None:
        super().__init__(
            code="blob_not_found",
            message=f"No object stored at key '{key}'",
            details={"key": key},
        )
        self.key = key


class AbstractBlobStore(ABC):
    """Interface for key/value object stores."""

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Fetch the object stored at ``key``.

        Raises:
            BlobNotFoundError: If the key does not exist.
            StoreAppError: On any other backend failure.
        """
        raise NotImplementedError

    @abstractmethod
    def put(self, key: str, data: bytes, *, content_type: str = "application/json") -> None:
        """Create or overwrite the object at ``key``.

        Raises:
            StoreAppError: If the write fails.
        """
        raise NotImplementedError
