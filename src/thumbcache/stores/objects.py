"""Object store fingerprint lookups.

Only object metadata is read (S3 HEAD); bodies are never transferred.
"""

import asyncio
import logging
from typing import Any, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from thumbcache.errors import DependencyError

logger = logging.getLogger(__name__)


class ObjectStore(Protocol):
    """Read-only access to object fingerprints."""

    async def head_fingerprint(self, bucket: str, key: str) -> str: ...


class S3ObjectStore:
    """S3-backed object store.

    Args:
        client: boto3 S3 client (created from region_name if omitted)
        region_name: AWS region for the default client
    """

    def __init__(self, client: Any | None = None, region_name: str | None = None) -> None:
        self._client = client or boto3.client("s3", region_name=region_name)

    async def head_fingerprint(self, bucket: str, key: str) -> str:
        """Return the current ETag of bucket/key, quotes included as S3 sends it.

        Raises:
            DependencyError: If the HEAD request fails (including a missing object)
        """

        def _head() -> dict[str, Any]:
            return self._client.head_object(Bucket=bucket, Key=key)

        try:
            response = await asyncio.to_thread(_head)
        except (ClientError, BotoCoreError) as e:
            logger.error("S3 head_object failed for %s/%s: %s", bucket, key, e)
            raise DependencyError(f"Object lookup failed for {bucket}/{key}: {e}") from e

        etag = response.get("ETag")
        if not etag:
            raise DependencyError(f"No ETag returned for {bucket}/{key}")
        return etag
