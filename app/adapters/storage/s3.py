"""S3 blob store backed by a boto3 client.

The client is created once and reused across invocations while the runtime
stays warm. Retries are left to botocore's own retry configuration.
"""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.adapters.storage.base import AbstractBlobStore, BlobNotFoundError
from app.core.errors import StoreAppError

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


class S3BlobStore(AbstractBlobStore):
    """Blob store for a single S3 bucket."""

    def __init__(
        self,
        *,
        bucket: str,
        region: str | None = None,
        endpoint_url: str | None = None,
        client: Any | None = None,
    ) -> None:
        """Initialize the S3 store.

        Args:
            bucket: Bucket holding the objects.
            region: AWS region used when building the default client.
            endpoint_url: Optional custom endpoint (MinIO, LocalStack).
            client: Pre-built boto3 S3 client; built from region/endpoint when omitted.

        Raises:
            ValueError: If bucket is empty.
        """
        if not bucket:
            raise ValueError("bucket must be a non-empty string")

        self._bucket = bucket
        self._client = client or boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def _store_error(self, action: str, key: str, exc: Exception) -> StoreAppError:
        if isinstance(exc, ClientError):
            code = exc.response.get("Error", {}).get("Code", "Unknown")
            message = exc.response.get("Error", {}).get("Message") or str(exc)
        else:
            code = type(exc).__name__
            message = str(exc)

        logger.error(
            f"storage.{action}_failed",
            extra={
                "bucket": self._bucket,
                "key": key,
                "backend": "s3",
                "error_code": code,
                "error_msg": message,
            },
        )
        return StoreAppError(
            code=f"store_{action}_failed",
            message=message,
            details={"key": key, "backend": "s3", "hint": code},
        )

    def get(self, key: str) -> bytes:
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
            return response["Body"].read()
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in _NOT_FOUND_CODES:
                raise BlobNotFoundError(key) from None
            raise self._store_error("read", key, exc) from exc
        except BotoCoreError as exc:
            raise self._store_error("read", key, exc) from exc

    def put(self, key: str, data: bytes, *, content_type: str = "application/json") -> None:
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as exc:
            raise self._store_error("write", key, exc) from exc
