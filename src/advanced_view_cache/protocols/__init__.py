"""Protocol definitions for advanced-view-cache's pluggable collaborators."""

from .cache import TaggedCacheBackend
from .contributor import MetadataContributor
from .transform import TokenTransform

__all__ = [
    "MetadataContributor",
    "TaggedCacheBackend",
    "TokenTransform",
]
