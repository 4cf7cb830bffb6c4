"""Protocol definition for cache metadata contributors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from advanced_view_cache.models.metadata import ContributedMetadata


@runtime_checkable
class MetadataContributor(Protocol):
    """A view sub-plugin that declares the cache tags and contexts it depends on.

    Arguments, filters, sort handlers and display plugins all implement
    this. Contributors with no cache dependencies return an empty
    ``ContributedMetadata`` rather than opting out.
    """

    def cache_metadata(self) -> ContributedMetadata:
        """Return the tags and contexts this contributor depends on."""
        ...
