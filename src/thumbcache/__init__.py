"""thumbcache: memoized S3 thumbnails with source change detection."""

from thumbcache.errors import (
    BadResponseError,
    DependencyError,
    ExternalAPIError,
    ThumbCacheError,
)
from thumbcache.keys import derive_cache_key
from thumbcache.models import (
    CacheRecord,
    CacheResult,
    CacheStatus,
    CropMode,
    SourceRef,
    ThumbnailOptions,
)

__version__ = "0.1.0"

__all__ = [
    "BadResponseError",
    "CacheRecord",
    "CacheResult",
    "CacheStatus",
    "CropMode",
    "DependencyError",
    "ExternalAPIError",
    "SourceRef",
    "ThumbCacheError",
    "ThumbnailOptions",
    "derive_cache_key",
]
