"""Protocol definition for tag-aware cache backends."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from advanced_view_cache.models.metadata import CacheDescriptor


@runtime_checkable
class TaggedCacheBackend(Protocol):
    """Store for cached view results or output.

    The cache policy never performs storage I/O itself; a backend consumes
    the ``CacheDescriptor`` it produces to decide how long an entry stays
    valid and which tags invalidate it.
    """

    def get(self, key: str, cutoff: int | None = None) -> Any | None:
        """Retrieve a cached value, or None if missing or stale.

        Parameters:
            key: The cache key.
            cutoff: Entries created at or before this timestamp are stale.
                None means entries never expire by age.

        Returns:
            The cached value, or None.
        """
        ...

    def set(self, key: str, value: Any, descriptor: CacheDescriptor, created: int) -> None:
        """Store a value together with its cache metadata.

        Parameters:
            key: The cache key.
            value: The value to cache.
            descriptor: The computed cache descriptor for the value.
            created: Creation timestamp in seconds.
        """
        ...

    def invalidate_tags(self, tags: set[str] | frozenset[str]) -> int:
        """Remove every entry carrying any of ``tags``.

        Parameters:
            tags: Cache tags that were invalidated.

        Returns:
            Number of entries removed.
        """
        ...

    def clear(self) -> None:
        """Remove all entries from the cache."""
        ...
