"""Factory for creating blob store instances from settings."""

from __future__ import annotations

from app.adapters.storage.base import AbstractBlobStore
from app.adapters.storage.filesystem import FileSystemBlobStore
from app.adapters.storage.in_memory import InMemoryBlobStore
from app.core.config import StorageSettings, settings
from app.core.errors import StoreAppError


def create_blob_store(storage_settings: StorageSettings | None = None) -> AbstractBlobStore:
    """Instantiate the configured blob store backend.

    Args:
        storage_settings: Storage settings; defaults to the global settings.

    Returns:
        AbstractBlobStore: Configured store.

    Raises:
        StoreAppError: If the backend is unknown or misconfigured.
    """
    cfg = storage_settings or settings.storage
    backend = cfg.backend.lower()

    if backend == "s3":
        if not cfg.bucket:
            raise StoreAppError(
                code="storage_missing_bucket",
                message="S3 backend requires VISITS_BUCKET (or STORAGE_BUCKET) to be set",
            )
        # Imported lazily so the other backends don't pay for boto3 at startup
        from app.adapters.storage.s3 import S3BlobStore

        return S3BlobStore(
            bucket=cfg.bucket,
            region=cfg.region,
            endpoint_url=cfg.endpoint_url,
        )

    if backend == "filesystem":
        return FileSystemBlobStore(cfg.base_dir)

    if backend == "memory":
        return InMemoryBlobStore()

    raise StoreAppError(
        code="storage_unknown_backend",
        message=(
            f"Unknown storage backend: '{cfg.backend}'. Supported backends: s3, filesystem, memory"
        ),
    )
