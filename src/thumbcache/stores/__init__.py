"""Storage adapters for thumbcache.

DynamoDB holds cache records; S3 holds source images and thumbnails.
"""

from thumbcache.stores.metadata import (
    DynamoDBMetadataStore,
    MetadataStore,
    record_from_item,
    record_to_item,
)
from thumbcache.stores.objects import ObjectStore, S3ObjectStore

__all__ = [
    "DynamoDBMetadataStore",
    "MetadataStore",
    "ObjectStore",
    "S3ObjectStore",
    "record_from_item",
    "record_to_item",
]
