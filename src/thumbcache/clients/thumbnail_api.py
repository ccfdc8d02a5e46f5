"""Thumbnail rendering API client.

The rendering API reads a source image from S3, writes the thumbnail to the
requested destination and answers with the source ETag it rendered from and
the thumbnail content type.

Request:
    GET <api_url>?imagebucket=&imagekey=&thumbbucket=&thumbkey=[&width=][&height=][&crop=]

Response (200):
    {"imageETag": "\"9b2cf535f27731c974343645a3985328\"", "thumbType": "image/png"}

Usage:
    from thumbcache.clients.thumbnail_api import ThumbnailAPIClient

    async with ThumbnailAPIClient(api_url="https://thumbs.example.com/thumbnail") as api:
        result = await api.render(source, destination, options)
"""

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

from thumbcache.clients.base import BaseAsyncClient
from thumbcache.errors import BadResponseError
from thumbcache.models import SourceRef, ThumbnailOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    """What the rendering API observed while producing a thumbnail."""

    image_etag: str
    thumb_type: str


class ThumbnailAPIClient(BaseAsyncClient):
    """Async client for the thumbnail rendering API.

    Args:
        api_url: Full endpoint URL (scheme, host and path)
        timeout: Request timeout in seconds (default: 30)
    """

    def __init__(self, api_url: str, timeout: float = 30.0) -> None:
        parts = urlsplit(api_url)
        super().__init__(
            base_url=f"{parts.scheme}://{parts.netloc}",
            timeout=timeout,
        )
        self.endpoint = parts.path or "/"

    @staticmethod
    def build_params(
        source: SourceRef,
        destination: SourceRef,
        options: ThumbnailOptions | None = None,
    ) -> dict[str, Any]:
        """Build render query parameters. Absent options are left out entirely."""
        params: dict[str, Any] = {
            "imagebucket": source.bucket,
            "imagekey": source.key,
            "thumbbucket": destination.bucket,
            "thumbkey": destination.key,
        }
        if options is not None:
            params.update(options.present())
        return params

    async def render(
        self,
        source: SourceRef,
        destination: SourceRef,
        options: ThumbnailOptions | None = None,
    ) -> RenderResult:
        """Render a thumbnail of source into destination.

        Args:
            source: Source image reference
            destination: Where the thumbnail is written
            options: Rendering options

        Returns:
            RenderResult with the source ETag and the thumbnail content type

        Raises:
            DependencyError: If the API could not be reached
            ExternalAPIError: If the API answered with a non-200 status
            BadResponseError: If imageETag or thumbType is missing
        """
        params = self.build_params(source, destination, options)
        logger.info("Render request %s%s params=%s", self.base_url, self.endpoint, params)

        data = await self.get(self.endpoint, params=params)
        logger.debug("Render response: %s", data)

        image_etag = data.get("imageETag")
        thumb_type = data.get("thumbType")
        missing = [
            name
            for name, value in (("imageETag", image_etag), ("thumbType", thumb_type))
            if not isinstance(value, str) or not value
        ]
        if missing:
            raise BadResponseError(
                f"Render response missing {', '.join(missing)}",
                response_body=str(data)[:500],
            )

        return RenderResult(image_etag=image_etag, thumb_type=thumb_type)
