"""Unit tests for the S3 blob store with a mocked boto3 client."""

import io
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from app.adapters.storage.base import BlobNotFoundError
from app.adapters.storage.s3 import S3BlobStore
from app.core.errors import StoreAppError


def _client_error(code: str, message: str = "boom", operation: str = "GetObject") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


@pytest.fixture
def s3_client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def store(s3_client: MagicMock) -> S3BlobStore:
    return S3BlobStore(bucket="test-visit-count-bucket", client=s3_client)


def test_get_returns_body_bytes(store: S3BlobStore, s3_client: MagicMock) -> None:
    s3_client.get_object.return_value = {"Body": io.BytesIO(b'{"visitCount": 3}')}

    assert store.get("visits/a/2025-01.json") == b'{"visitCount": 3}'
    s3_client.get_object.assert_called_once_with(
        Bucket="test-visit-count-bucket", Key="visits/a/2025-01.json"
    )


@pytest.mark.parametrize("code", ["NoSuchKey", "404"])
def test_get_missing_key_raises_not_found(store: S3BlobStore, s3_client: MagicMock, code: str) -> None:
    s3_client.get_object.side_effect = _client_error(code, "The specified key does not exist.")

    with pytest.raises(BlobNotFoundError):
        store.get("visits/a/2025-01.json")


def test_get_access_denied_is_store_error(store: S3BlobStore, s3_client: MagicMock) -> None:
    s3_client.get_object.side_effect = _client_error("AccessDenied", "Access Denied")

    with pytest.raises(StoreAppError) as exc_info:
        store.get("visits/a/2025-01.json")

    assert not isinstance(exc_info.value, BlobNotFoundError)
    assert exc_info.value.code == "store_read_failed"
    assert exc_info.value.message == "Access Denied"


def test_get_connection_failure_is_store_error(store: S3BlobStore, s3_client: MagicMock) -> None:
    s3_client.get_object.side_effect = EndpointConnectionError(endpoint_url="https://s3.example")

    with pytest.raises(StoreAppError) as exc_info:
        store.get("visits/a/2025-01.json")

    assert "s3.example" in exc_info.value.message


def test_put_sends_full_object(store: S3BlobStore, s3_client: MagicMock) -> None:
    store.put("visits/a/2025-01.json", b"{}", content_type="application/json")

    s3_client.put_object.assert_called_once_with(
        Bucket="test-visit-count-bucket",
        Key="visits/a/2025-01.json",
        Body=b"{}",
        ContentType="application/json",
    )


def test_put_failure_is_store_error_without_retry(store: S3BlobStore, s3_client: MagicMock) -> None:
    s3_client.put_object.side_effect = _client_error("SlowDown", "Please reduce your request rate.", "PutObject")

    with pytest.raises(StoreAppError) as exc_info:
        store.put("visits/a/2025-01.json", b"{}")

    assert exc_info.value.code == "store_write_failed"
    assert s3_client.put_object.call_count == 1


def test_requires_bucket() -> None:
    with pytest.raises(ValueError):
        S3BlobStore(bucket="", client=MagicMock())
