"""In-memory tag-aware cache backend implementation."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any

from advanced_view_cache.lifetime import is_fresh
from advanced_view_cache.models.metadata import CacheDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Entry:
    value: Any
    tags: frozenset[str]
    created: int


class InMemoryTaggedCache:
    """In-memory cache of view results or output keyed by string.

    Entries remember the tags of the descriptor they were stored with, so
    invalidating any of those tags drops them. Age-based staleness is
    decided by the caller-supplied cutoff on ``get``.

    Implements the ``TaggedCacheBackend`` protocol.

    Parameters:
        max_size: Maximum number of entries. When exceeded, the oldest
            entries by creation time are evicted. Default 1000.
    """

    __slots__ = ("_data", "_lock", "_max_size")

    def __init__(self, max_size: int = 1000) -> None:
        if max_size <= 0:
            msg = "max_size must be positive"
            raise ValueError(msg)
        self._max_size = max_size
        self._data: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def get(self, key: str, cutoff: int | None = None) -> Any | None:
        """Retrieve a cached value, or None if not found or stale.

        Parameters:
            key: The cache key.
            cutoff: Entries created at or before this timestamp are stale.

        Returns:
            The cached value, or None.
        """
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            if not is_fresh(entry.created, cutoff):
                # Lazy cleanup of stale entry
                del self._data[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, descriptor: CacheDescriptor, created: int) -> None:
        """Store a value with the tags of its descriptor.

        The value is always stored; whether it is still usable is decided by
        the cutoff passed to ``get``. A slot lifetime of 0 yields a cutoff
        equal to the current time, so such entries are never returned.

        Parameters:
            key: The cache key.
            value: The value to cache.
            descriptor: The cache descriptor computed for the value.
            created: Creation timestamp in seconds.
        """
        with self._lock:
            if key not in self._data:
                while len(self._data) >= self._max_size:
                    self._evict_oldest()
            self._data[key] = _Entry(value=value, tags=descriptor.tags, created=created)

    def invalidate_tags(self, tags: set[str] | frozenset[str]) -> int:
        """Remove every entry carrying any of ``tags``.

        Parameters:
            tags: The invalidated cache tags.

        Returns:
            Number of entries removed.
        """
        invalidated = frozenset(tags)
        with self._lock:
            doomed = [key for key, entry in self._data.items() if entry.tags & invalidated]
            for key in doomed:
                del self._data[key]
        if doomed:
            logger.debug(
                "Invalidated %d cache entries for tags %s", len(doomed), sorted(invalidated)
            )
        return len(doomed)

    def clear(self) -> None:
        """Remove all entries from the cache."""
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def _evict_oldest(self) -> None:
        if not self._data:
            return
        oldest_key = min(self._data, key=lambda k: self._data[k].created)
        del self._data[oldest_key]

    def __repr__(self) -> str:
        return f"InMemoryTaggedCache(max_size={self._max_size}, entries={len(self)})"
