"""In-memory collaborators for coordinator and generator tests."""

import asyncio
import itertools

import pytest

from thumbcache.clients.thumbnail_api import RenderResult
from thumbcache.errors import DependencyError
from thumbcache.models import CacheRecord, SourceRef, ThumbnailOptions
from thumbcache.pipeline.coordinator import CacheCoordinator
from thumbcache.pipeline.generator import ArtifactGenerator

THUMB_BUCKET = "thumbs"


class FakeMetadataStore:
    def __init__(self) -> None:
        self.records: dict[str, CacheRecord] = {}
        self.get_calls: list[str] = []
        self.put_calls: list[CacheRecord] = []
        self.fail_get = False
        self.fail_put = False

    async def get(self, key: str) -> CacheRecord | None:
        self.get_calls.append(key)
        if self.fail_get:
            raise DependencyError("metadata store unavailable")
        return self.records.get(key)

    async def put(self, record: CacheRecord) -> None:
        self.put_calls.append(record)
        if self.fail_put:
            raise DependencyError("metadata store unavailable")
        self.records[record.index] = record


class FakeObjectStore:
    def __init__(self) -> None:
        self.etags: dict[tuple[str, str], str] = {}
        self.head_calls: list[tuple[str, str]] = []
        self.fail = False

    async def head_fingerprint(self, bucket: str, key: str) -> str:
        self.head_calls.append((bucket, key))
        if self.fail:
            raise DependencyError(f"Object lookup failed for {bucket}/{key}")
        return self.etags[(bucket, key)]


class FakeRenderer:
    """Renders by reporting whatever ETag the fake object store holds."""

    def __init__(self, object_store: FakeObjectStore) -> None:
        self.object_store = object_store
        self.thumb_type = "image/png"
        self.calls: list[tuple[SourceRef, SourceRef, ThumbnailOptions | None]] = []
        self.error: Exception | None = None
        self.delay = 0.0

    async def render(self, source, destination, options=None) -> RenderResult:
        self.calls.append((source, destination, options))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        etag = self.object_store.etags[(source.bucket, source.key)]
        return RenderResult(image_etag=etag, thumb_type=self.thumb_type)


@pytest.fixture
def metadata_store() -> FakeMetadataStore:
    return FakeMetadataStore()


@pytest.fixture
def object_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def renderer(object_store) -> FakeRenderer:
    return FakeRenderer(object_store)


@pytest.fixture
def generator(renderer, metadata_store) -> ArtifactGenerator:
    return ArtifactGenerator(renderer=renderer, metadata_store=metadata_store)


@pytest.fixture
def thumb_keys():
    """Deterministic thumbnail key factory: thumb-1, thumb-2, ..."""
    counter = itertools.count(1)
    return lambda: f"thumb-{next(counter)}"


@pytest.fixture
def coordinator(metadata_store, object_store, generator, thumb_keys) -> CacheCoordinator:
    return CacheCoordinator(
        metadata_store=metadata_store,
        object_store=object_store,
        generator=generator,
        thumb_bucket=THUMB_BUCKET,
        new_thumb_key=thumb_keys,
    )
