"""Cache pipeline: Coordinator → Generator → metadata store.

Components:
- CacheCoordinator: key derivation, lookup, freshness check
- ArtifactGenerator: render via the thumbnail API, upsert the record
"""

from thumbcache.pipeline.coordinator import CacheCoordinator, open_coordinator
from thumbcache.pipeline.generator import ArtifactGenerator

__all__ = ["ArtifactGenerator", "CacheCoordinator", "open_coordinator"]
