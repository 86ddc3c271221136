"""Filesystem blob store.

Each key maps to a file below ``base_dir``; slashes in the key become
directories. Writes go to a uniquely named temp file in the target directory
and are renamed into place.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from app.adapters.storage.base import AbstractBlobStore, BlobNotFoundError
from app.core.errors import StoreAppError

logger = logging.getLogger(__name__)


class FileSystemBlobStore(AbstractBlobStore):
    """Blob store rooted at a local directory."""

    def __init__(self, base_dir: str | os.PathLike[str]) -> None:
        self._base_dir = Path(base_dir).resolve()

    def _path_for(self, key: str) -> Path:
        if not key:
            raise ValueError("key must be a non-empty string")
        path = (self._base_dir / key).resolve()
        if path != self._base_dir and self._base_dir not in path.parents:
            raise StoreAppError(
                code="store_invalid_key",
                message=f"Key '{key}' resolves outside the store directory",
                details={"key": key, "backend": "filesystem"},
            )
        return path

    def get(self, key: str) -> bytes:
        path = self._path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise BlobNotFoundError(key) from None
        except OSError as exc:
            raise StoreAppError(
                code="store_read_failed",
                message=str(exc),
                details={"key": key, "backend": "filesystem"},
            ) from exc

    def put(self, key: str, data: bytes, *, content_type: str = "application/json") -> None:
        path = self._path_for(key)
        tmp_name: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # One temp file per writer; concurrent puts to a key must not share it
            with tempfile.NamedTemporaryFile(
                dir=path.parent, prefix=path.name + ".", suffix=".tmp", delete=False
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(data)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            logger.error(
                "storage.write_failed",
                extra={"key": key, "backend": "filesystem", "error_msg": str(exc)},
            )
            raise StoreAppError(
                code="store_write_failed",
                message=str(exc),
                details={"key": key, "backend": "filesystem"},
            ) from exc
