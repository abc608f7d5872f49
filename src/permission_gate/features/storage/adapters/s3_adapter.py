"""
S3 object storage adapter.

Fetches permission documents from AWS S3 or an S3-compatible service
(MinIO, LocalStack). The boto3 client is synchronous, so each call runs in
a worker thread to keep the event loop free.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ....core.exceptions import FetchError

logger = logging.getLogger(__name__)


class S3ObjectStorage:
    """
    S3-backed object storage.

    Single attempt per fetch from the caller's point of view; retries are
    left to botocore's own retry configuration.
    """

    def __init__(
        self,
        client: Optional[Any] = None,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None
    ):
        """
        Initialize S3 object storage.

        Args:
            client: Pre-built boto3 S3 client (anything exposing get_object)
            region: AWS region used when no client is given
            endpoint_url: Custom endpoint for S3-compatible services
        """
        self._client = client
        self.region = region
        self.endpoint_url = endpoint_url

    def _get_client(self):
        """Get or lazily create the boto3 S3 client."""
        if self._client is not None:
            return self._client

        client_kwargs: Dict[str, Any] = {
            "service_name": "s3",
            "region_name": self.region,
            "config": Config(signature_version="s3v4"),
        }

        if self.endpoint_url:
            client_kwargs["endpoint_url"] = self.endpoint_url
            logger.info(f"Using custom S3 endpoint: {self.endpoint_url}")

        self._client = boto3.client(**client_kwargs)
        logger.debug(f"S3 client initialized for region: {self.region}")
        return self._client

    async def fetch(self, bucket: str, key: str) -> bytes:
        """
        Fetch an object's body.

        Args:
            bucket: Bucket name
            key: Object key

        Returns:
            Raw object bytes

        Raises:
            FetchError: If S3 is unreachable or denies access
        """
        try:
            return await asyncio.to_thread(self._get_object_body, bucket, key)
        except (ClientError, BotoCoreError) as e:
            raise FetchError(
                f"Error from S3.getObject for s3://{bucket}/{key}: {e}",
                bucket=bucket,
                key=key,
                cause=e
            ) from e

    def _get_object_body(self, bucket: str, key: str) -> bytes:
        response = self._get_client().get_object(Bucket=bucket, Key=key)
        body = response["Body"]
        if hasattr(body, "read"):
            body = body.read()
        if isinstance(body, str):
            body = body.encode("utf-8")
        return body


def create_object_storage(
    storage_client: Optional[Any] = None,
    region: Optional[str] = None,
    endpoint_url: Optional[str] = None
) -> Any:
    """
    Resolve the storage collaborator for a permission store.

    An object implementing ObjectStorageProtocol is used as is; a raw
    boto3-style client (exposing get_object) is wrapped; with nothing
    injected a default S3 client is built from the region.
    """
    if storage_client is None:
        return S3ObjectStorage(region=region, endpoint_url=endpoint_url)
    if hasattr(storage_client, "fetch"):
        return storage_client
    if hasattr(storage_client, "get_object"):
        return S3ObjectStorage(client=storage_client)
    raise TypeError(
        f"Storage client {type(storage_client).__name__} implements neither fetch() nor get_object()"
    )
