"""Shared fixtures for advanced-view-cache tests."""

from __future__ import annotations

import pytest

from advanced_view_cache.models.lifetime import LifetimeSpec
from advanced_view_cache.models.metadata import ContributedMetadata
from advanced_view_cache.models.policy import PolicyConfig

NOW = 1_700_000_000


class FakeContributor:
    """A view sub-plugin stand-in that declares fixed cache metadata.

    Satisfies the MetadataContributor protocol.
    """

    def __init__(self, tags: set[str] | None = None, contexts: set[str] | None = None) -> None:
        self._metadata = ContributedMetadata(tags=tags or set(), contexts=contexts or set())

    def cache_metadata(self) -> ContributedMetadata:
        return self._metadata


@pytest.fixture
def now() -> int:
    """Return a fixed evaluation timestamp."""
    return NOW


@pytest.fixture
def node_list_config() -> PolicyConfig:
    """Config that adds a custom tag and excludes the node_list tag."""
    return PolicyConfig(
        cache_tags={"vact:node_list:test"},
        cache_tags_exclude={"node_list"},
    )


@pytest.fixture
def view_contributors() -> list[ContributedMetadata]:
    """Metadata contributed by a typical node listing view."""
    return [
        ContributedMetadata(tags={"node_list"}),
        ContributedMetadata(tags={"config:views.view.x"}, contexts={"languages:language_content"}),
        ContributedMetadata.empty(),
    ]


@pytest.fixture
def timed_config() -> PolicyConfig:
    """Config caching results for an hour and output for five minutes."""
    return PolicyConfig(
        results_lifetime=LifetimeSpec.preset(3600),
        output_lifetime=LifetimeSpec.preset(300),
    )
