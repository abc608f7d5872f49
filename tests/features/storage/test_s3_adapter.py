"""Tests for the S3 object storage adapter."""

import io
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from permission_gate.core.exceptions import FetchError
from permission_gate.features.storage import (
    ObjectStorageProtocol,
    S3ObjectStorage,
    build_object_key,
    create_object_storage,
)


class FakeS3Client:
    """Minimal boto3 S3 client double."""

    def __init__(self, body=b"[]", error=None):
        self.body = body
        self.error = error
        self.requests = []

    def get_object(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        return {"Body": io.BytesIO(self.body), "ContentLength": len(self.body)}


class TestBuildObjectKey:
    """Test cases for object key construction."""

    @pytest.mark.parametrize("prefix,file_name,expected", [
        ("STAGE", "file.json", "STAGE/file.json"),
        ("STAGE/", "file.json", "STAGE/file.json"),
        ("STAGE/", "/file.json", "STAGE/file.json"),
        ("a//b/", "//c.json", "a/b/c.json"),
    ])
    def test_joins_and_collapses_slashes(self, prefix, file_name, expected):
        assert build_object_key(prefix, file_name) == expected


class TestS3ObjectStorage:
    """Test cases for S3ObjectStorage.fetch."""

    @pytest.mark.asyncio
    async def test_fetches_object_body(self):
        client = FakeS3Client(body=b'[{"permission": {}}]')
        storage = S3ObjectStorage(client=client)

        body = await storage.fetch("bucket", "STAGE/file.json")

        assert body == b'[{"permission": {}}]'
        assert client.requests == [{"Bucket": "bucket", "Key": "STAGE/file.json"}]

    @pytest.mark.asyncio
    async def test_accepts_plain_body(self):
        client = MagicMock()
        client.get_object.return_value = {"Body": "[]"}

        assert await S3ObjectStorage(client=client).fetch("bucket", "key") == b"[]"

    @pytest.mark.asyncio
    async def test_client_error_becomes_fetch_error(self):
        error = ClientError({"Error": {"Code": "AccessDenied", "Message": "Access Denied"}}, "GetObject")
        storage = S3ObjectStorage(client=FakeS3Client(error=error))

        with pytest.raises(FetchError) as exc_info:
            await storage.fetch("bucket", "STAGE/file.json")

        assert exc_info.value.cause is error
        assert exc_info.value.details["bucket"] == "bucket"
        assert exc_info.value.details["key"] == "STAGE/file.json"
        assert "AccessDenied" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_connection_error_becomes_fetch_error(self):
        error = EndpointConnectionError(endpoint_url="https://s3.example.com")
        storage = S3ObjectStorage(client=FakeS3Client(error=error))

        with pytest.raises(FetchError):
            await storage.fetch("bucket", "key")

    def test_default_client_uses_region(self):
        with patch("permission_gate.features.storage.adapters.s3_adapter.boto3.client") as client_factory:
            storage = S3ObjectStorage(region="eu-central-1")

            client = storage._get_client()
            storage._get_client()

        client_factory.assert_called_once()
        assert client_factory.call_args.kwargs["service_name"] == "s3"
        assert client_factory.call_args.kwargs["region_name"] == "eu-central-1"
        assert "endpoint_url" not in client_factory.call_args.kwargs
        assert client is client_factory.return_value

    def test_default_client_uses_endpoint_url(self):
        with patch("permission_gate.features.storage.adapters.s3_adapter.boto3.client") as client_factory:
            S3ObjectStorage(endpoint_url="http://localhost:9000")._get_client()

        assert client_factory.call_args.kwargs["endpoint_url"] == "http://localhost:9000"

    def test_implements_protocol(self):
        assert isinstance(S3ObjectStorage(client=FakeS3Client()), ObjectStorageProtocol)


class TestCreateObjectStorage:
    """Test cases for storage collaborator resolution."""

    def test_builds_default_storage_from_region(self):
        storage = create_object_storage(region="eu-central-1")

        assert isinstance(storage, S3ObjectStorage)
        assert storage.region == "eu-central-1"

    def test_wraps_raw_s3_client(self):
        client = FakeS3Client()

        storage = create_object_storage(client, region="ignored")

        assert isinstance(storage, S3ObjectStorage)
        assert storage._get_client() is client

    def test_uses_object_storage_as_is(self):
        class Storage:
            async def fetch(self, bucket, key):
                return b"[]"

        storage = Storage()

        assert create_object_storage(storage) is storage

    def test_rejects_unknown_client(self):
        with pytest.raises(TypeError):
            create_object_storage(object())
