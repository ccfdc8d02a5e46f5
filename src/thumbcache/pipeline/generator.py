"""ArtifactGenerator: render a thumbnail and persist its cache record.

Render first, then write the record. If the write fails the thumbnail already
sits in the object store with nothing pointing at it; that artifact is not
cleaned up.
"""

import logging
from typing import Protocol

from thumbcache.clients.thumbnail_api import RenderResult
from thumbcache.keys import derive_cache_key
from thumbcache.models import CacheRecord, SourceRef, ThumbnailOptions
from thumbcache.stores.metadata import MetadataStore

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    """Anything that can render source into destination (ThumbnailAPIClient)."""

    async def render(
        self,
        source: SourceRef,
        destination: SourceRef,
        options: ThumbnailOptions | None = None,
    ) -> RenderResult: ...


class ArtifactGenerator:
    """Renders thumbnails and upserts the matching cache record.

    Usage:
        async with ThumbnailAPIClient(api_url=url) as api:
            generator = ArtifactGenerator(renderer=api, metadata_store=store)
            record = await generator.generate(source, destination, options)
    """

    def __init__(self, renderer: Renderer, metadata_store: MetadataStore) -> None:
        self.renderer = renderer
        self.metadata_store = metadata_store

    async def generate(
        self,
        source: SourceRef,
        destination: SourceRef,
        options: ThumbnailOptions | None = None,
    ) -> CacheRecord:
        """Render source into destination and persist the resulting record.

        Args:
            source: Source image reference
            destination: Thumbnail location (new on create, reused on refresh)
            options: Rendering options

        Returns:
            The persisted CacheRecord

        Raises:
            DependencyError: Transport or metadata write failure
            ExternalAPIError: Rendering API returned a non-200 status
            BadResponseError: Rendering API body was unusable
        """
        options = options or ThumbnailOptions()
        rendered = await self.renderer.render(source, destination, options)

        record = CacheRecord(
            index=derive_cache_key(source, options),
            image_bucket=source.bucket,
            image_key=source.key,
            image_etag=rendered.image_etag,
            thumb_bucket=destination.bucket,
            thumb_key=destination.key,
            thumb_content_type=rendered.thumb_type,
            width=options.width,
            height=options.height,
            crop=options.crop,
        )

        await self.metadata_store.put(record)
        logger.info(
            "Stored %s -> %s/%s (etag=%s, type=%s)",
            record.index, record.thumb_bucket, record.thumb_key,
            record.image_etag, record.thumb_content_type,
        )
        return record
