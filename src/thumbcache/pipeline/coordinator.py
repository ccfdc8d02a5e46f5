"""CacheCoordinator: lookup, freshness check, create or refresh.

For one (source, options) request exactly one of three things happens:

    no record                      -> render into a new thumbnail key   (created)
    record, source ETag unchanged  -> return the stored record as-is    (unchanged)
    record, source ETag changed    -> re-render into the same thumbnail (refreshed)

Any collaborator failure aborts the call with the first error raised. The
coordinator never writes records itself; the generator's upsert is the only
write path.

Same-key concurrency: with single_flight enabled, lookups for one cache key
are serialized inside this process so a burst of identical requests renders
once. Separate processes are not coordinated; there the last writer wins and
concurrent first-time creates each leave a thumbnail behind.

Usage:
    async with open_coordinator(settings) as coordinator:
        result = await coordinator.lookup_or_populate(
            SourceRef("imgs", "a.png"), ThumbnailOptions(width=100)
        )
        print(result.status, result.record.thumb_key)
"""

import asyncio
import logging
import uuid
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from thumbcache.clients.thumbnail_api import ThumbnailAPIClient
from thumbcache.config import Settings
from thumbcache.keys import derive_cache_key
from thumbcache.models import CacheResult, CacheStatus, SourceRef, ThumbnailOptions
from thumbcache.pipeline.generator import ArtifactGenerator
from thumbcache.stores.metadata import DynamoDBMetadataStore, MetadataStore
from thumbcache.stores.objects import ObjectStore, S3ObjectStore

logger = logging.getLogger(__name__)


def _time_based_key() -> str:
    return str(uuid.uuid1())


class CacheCoordinator:
    """Decides whether a thumbnail is served, created or refreshed.

    Args:
        metadata_store: Cache record store
        object_store: Source fingerprint lookups
        generator: Renders and persists records
        thumb_bucket: Bucket for newly created thumbnails
        new_thumb_key: Factory for new thumbnail object keys (default: uuid1)
        single_flight: Serialize same-key lookups within this process
    """

    def __init__(
        self,
        metadata_store: MetadataStore,
        object_store: ObjectStore,
        generator: ArtifactGenerator,
        thumb_bucket: str,
        new_thumb_key: Callable[[], str] = _time_based_key,
        single_flight: bool = True,
    ) -> None:
        self.metadata_store = metadata_store
        self.object_store = object_store
        self.generator = generator
        self.thumb_bucket = thumb_bucket
        self.new_thumb_key = new_thumb_key
        self.single_flight = single_flight
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, key: str) -> asyncio.Lock:
        # The caller's reference keeps the lock alive while it is held.
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    async def lookup_or_populate(
        self,
        source: SourceRef,
        options: ThumbnailOptions | None = None,
    ) -> CacheResult:
        """Return a fresh cache record for source + options, rendering if needed.

        Args:
            source: Source image reference
            options: Rendering options (None means no options)

        Returns:
            CacheResult with the record and its CacheStatus

        Raises:
            DependencyError: Metadata store, object store or transport failure
            ExternalAPIError: Rendering API returned a non-200 status
            BadResponseError: Rendering API body was unusable
        """
        options = options or ThumbnailOptions()
        key = derive_cache_key(source, options)

        if not self.single_flight:
            return await self._resolve(key, source, options)

        lock = self._lock_for(key)
        async with lock:
            return await self._resolve(key, source, options)

    async def _resolve(
        self,
        key: str,
        source: SourceRef,
        options: ThumbnailOptions,
    ) -> CacheResult:
        cached = await self.metadata_store.get(key)

        if cached is None:
            destination = SourceRef(bucket=self.thumb_bucket, key=self.new_thumb_key())
            logger.info("%s: no record, creating %s/%s", key, destination.bucket, destination.key)
            record = await self.generator.generate(source, destination, options)
            return CacheResult(record=record, status=CacheStatus.CREATED)

        # The request's source is authoritative, not the one on the record.
        current_etag = await self.object_store.head_fingerprint(source.bucket, source.key)

        if current_etag == cached.image_etag:
            logger.info("%s: unchanged (etag=%s)", key, current_etag)
            return CacheResult(record=cached, status=CacheStatus.UNCHANGED)

        logger.info(
            "%s: source changed (%s -> %s), refreshing %s/%s",
            key, cached.image_etag, current_etag, cached.thumb_bucket, cached.thumb_key,
        )
        record = await self.generator.generate(source, cached.destination, options)
        return CacheResult(record=record, status=CacheStatus.REFRESHED)


@asynccontextmanager
async def open_coordinator(config: Settings) -> AsyncIterator[CacheCoordinator]:
    """Wire a CacheCoordinator to DynamoDB, S3 and the rendering API.

    The rendering client's connection pool is closed on exit.
    """
    metadata_store = DynamoDBMetadataStore(
        table_name=config.thumb_table,
        region_name=config.aws_region,
    )
    object_store = S3ObjectStore(region_name=config.aws_region)

    async with ThumbnailAPIClient(
        api_url=config.thumbnail_api_url,
        timeout=config.request_timeout,
    ) as api:
        generator = ArtifactGenerator(renderer=api, metadata_store=metadata_store)
        yield CacheCoordinator(
            metadata_store=metadata_store,
            object_store=object_store,
            generator=generator,
            thumb_bucket=config.thumb_bucket,
            single_flight=config.single_flight,
        )
