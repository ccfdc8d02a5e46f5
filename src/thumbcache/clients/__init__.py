"""HTTP client layer for thumbcache.

Async clients for the external thumbnail rendering API.
"""

from thumbcache.clients.base import BaseAsyncClient
from thumbcache.clients.thumbnail_api import RenderResult, ThumbnailAPIClient

__all__ = [
    "BaseAsyncClient",
    "RenderResult",
    "ThumbnailAPIClient",
]
