"""Metadata store for cache records.

The coordinator and generator only see the MetadataStore protocol: a keyed
get and a full-overwrite put. DynamoDBMetadataStore is the production
adapter; the DynamoDB attribute-value encoding stays inside this module.

Item layout (hash key "Index"):
    Index, ImageBucket, ImageKey, ImageETag,
    ThumbBucket, ThumbKey, ThumbContentType   -> {"S": ...}
    Width, Height                             -> {"N": "<int>"}  (optional)
    Crop                                      -> {"S": ...}      (optional)

boto3 calls are blocking, so each runs in asyncio.to_thread.
"""

import asyncio
import logging
from typing import Any, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from thumbcache.errors import DependencyError
from thumbcache.models import CacheRecord, CropMode

logger = logging.getLogger(__name__)


class MetadataStore(Protocol):
    """Keyed lookup and upsert of cache records."""

    async def get(self, key: str) -> CacheRecord | None: ...

    async def put(self, record: CacheRecord) -> None: ...


def record_to_item(record: CacheRecord) -> dict[str, dict[str, str]]:
    """Encode a CacheRecord as a DynamoDB item. Absent options are omitted."""
    item = {
        "Index": {"S": record.index},
        "ImageBucket": {"S": record.image_bucket},
        "ImageKey": {"S": record.image_key},
        "ImageETag": {"S": record.image_etag},
        "ThumbBucket": {"S": record.thumb_bucket},
        "ThumbKey": {"S": record.thumb_key},
        "ThumbContentType": {"S": record.thumb_content_type},
    }
    if record.width is not None:
        item["Width"] = {"N": str(record.width)}
    if record.height is not None:
        item["Height"] = {"N": str(record.height)}
    if record.crop is not None:
        item["Crop"] = {"S": record.crop.value}
    return item


def record_from_item(item: dict[str, dict[str, str]]) -> CacheRecord:
    """Decode a DynamoDB item into a CacheRecord.

    Raises:
        KeyError: If a required attribute is missing
        ValueError: If a numeric or crop attribute is malformed
    """
    width = item.get("Width")
    height = item.get("Height")
    crop = item.get("Crop")
    return CacheRecord(
        index=item["Index"]["S"],
        image_bucket=item["ImageBucket"]["S"],
        image_key=item["ImageKey"]["S"],
        image_etag=item["ImageETag"]["S"],
        thumb_bucket=item["ThumbBucket"]["S"],
        thumb_key=item["ThumbKey"]["S"],
        thumb_content_type=item["ThumbContentType"]["S"],
        width=int(width["N"]) if width else None,
        height=int(height["N"]) if height else None,
        crop=CropMode(crop["S"]) if crop else None,
    )


class DynamoDBMetadataStore:
    """Cache records in a DynamoDB table keyed by "Index".

    Args:
        table_name: DynamoDB table name
        client: boto3 DynamoDB client (created from region_name if omitted)
        region_name: AWS region for the default client
    """

    def __init__(
        self,
        table_name: str,
        client: Any | None = None,
        region_name: str | None = None,
    ) -> None:
        self.table_name = table_name
        self._client = client or boto3.client("dynamodb", region_name=region_name)

    async def get(self, key: str) -> CacheRecord | None:
        """Fetch the record stored under key.

        Args:
            key: Cache key

        Returns:
            CacheRecord if present, None otherwise

        Raises:
            DependencyError: If DynamoDB fails or the stored item is malformed
        """

        def _get() -> dict[str, Any]:
            return self._client.get_item(
                TableName=self.table_name,
                Key={"Index": {"S": key}},
            )

        try:
            response = await asyncio.to_thread(_get)
        except (ClientError, BotoCoreError) as e:
            logger.error("DynamoDB get_item failed for %s: %s", key, e)
            raise DependencyError(f"Metadata lookup failed for {key}: {e}") from e

        item = response.get("Item")
        if not item:
            return None

        try:
            return record_from_item(item)
        except (KeyError, ValueError) as e:
            logger.error("Malformed cache record %s: %s", key, e)
            raise DependencyError(f"Malformed cache record {key}: {e}") from e

    async def put(self, record: CacheRecord) -> None:
        """Write record, replacing whatever is stored under its key.

        Raises:
            DependencyError: If DynamoDB fails
        """
        item = record_to_item(record)

        def _put() -> None:
            self._client.put_item(TableName=self.table_name, Item=item)

        try:
            await asyncio.to_thread(_put)
        except (ClientError, BotoCoreError) as e:
            logger.error("DynamoDB put_item failed for %s: %s", record.index, e)
            raise DependencyError(f"Metadata write failed for {record.index}: {e}") from e
