"""Data model for thumbcache.

SourceRef and ThumbnailOptions are supplied by the caller. CacheRecord is the
persisted metadata for one cache key; CacheResult pairs a record with the
outcome of the lookup that produced it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class CropMode(str, Enum):
    """Crop methods understood by the rendering API."""

    CENTER = "Center"
    NORTH = "North"


class CacheStatus(str, Enum):
    """Outcome of a lookup. Attached to results, never persisted."""

    CREATED = "created"
    REFRESHED = "refreshed"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class SourceRef:
    """An object in the object store (bucket + key)."""

    bucket: str
    key: str


@dataclass(frozen=True)
class ThumbnailOptions:
    """Optional rendering parameters.

    Absent options are None. They never reach the cache key, the render
    request or the persisted record.

    Raises:
        ValueError: If width/height is not a positive integer or crop is
            not a known CropMode.
    """

    width: int | None = None
    height: int | None = None
    crop: CropMode | None = None

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

        if self.crop is not None and not isinstance(self.crop, CropMode):
            try:
                object.__setattr__(self, "crop", CropMode(self.crop))
            except ValueError:
                valid = ", ".join(c.value for c in CropMode)
                raise ValueError(f"crop must be one of {valid}, got {self.crop!r}") from None

    def present(self) -> list[tuple[str, int | str]]:
        """Present options as (name, value) pairs in width, height, crop order."""
        pairs: list[tuple[str, int | str]] = []
        if self.width is not None:
            pairs.append(("width", self.width))
        if self.height is not None:
            pairs.append(("height", self.height))
        if self.crop is not None:
            pairs.append(("crop", self.crop.value))
        return pairs


@dataclass(frozen=True)
class CacheRecord:
    """Metadata describing a generated thumbnail and the source state behind it."""

    index: str
    image_bucket: str
    image_key: str
    image_etag: str
    thumb_bucket: str
    thumb_key: str
    thumb_content_type: str
    width: int | None = None
    height: int | None = None
    crop: CropMode | None = None

    @property
    def source(self) -> SourceRef:
        return SourceRef(bucket=self.image_bucket, key=self.image_key)

    @property
    def destination(self) -> SourceRef:
        return SourceRef(bucket=self.thumb_bucket, key=self.thumb_key)

    @property
    def options(self) -> ThumbnailOptions:
        return ThumbnailOptions(width=self.width, height=self.height, crop=self.crop)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the caller-facing field layout. Absent options are omitted."""
        data: dict[str, Any] = {
            "Index": self.index,
            "ImageBucket": self.image_bucket,
            "ImageKey": self.image_key,
            "ImageETag": self.image_etag,
            "ThumbBucket": self.thumb_bucket,
            "ThumbKey": self.thumb_key,
            "ThumbContentType": self.thumb_content_type,
        }
        if self.width is not None:
            data["Width"] = self.width
        if self.height is not None:
            data["Height"] = self.height
        if self.crop is not None:
            data["Crop"] = self.crop.value
        return data


@dataclass(frozen=True)
class CacheResult:
    """A cache record plus how the lookup obtained it."""

    record: CacheRecord
    status: CacheStatus

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = self.record.to_dict()
        data["Status"] = self.status.value
        return data
