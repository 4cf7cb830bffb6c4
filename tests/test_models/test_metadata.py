"""Tests for advanced_view_cache.models.metadata."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from advanced_view_cache.models.lifetime import PERMANENT
from advanced_view_cache.models.metadata import (
    CacheDescriptor,
    ContributedMetadata,
    merge_max_age,
)


class TestContributedMetadata:
    def test_empty(self) -> None:
        metadata = ContributedMetadata.empty()
        assert metadata.tags == frozenset()
        assert metadata.contexts == frozenset()

    def test_coerces_lists(self) -> None:
        metadata = ContributedMetadata(tags=["node_list", "node_list"])
        assert metadata.tags == frozenset({"node_list"})

    def test_rejects_single_string(self) -> None:
        with pytest.raises(ValidationError):
            ContributedMetadata(tags="node_list")


class TestCacheDescriptor:
    """CacheDescriptor properties and render output."""

    def test_defaults_are_permanent(self) -> None:
        descriptor = CacheDescriptor()
        assert descriptor.is_permanent
        assert descriptor.is_cacheable
        assert descriptor.results_expire_at is None

    def test_zero_max_age_not_cacheable(self) -> None:
        assert not CacheDescriptor(max_age=0).is_cacheable

    def test_max_age_below_permanent_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CacheDescriptor(max_age=-2)

    def test_to_render_array_is_sorted(self) -> None:
        descriptor = CacheDescriptor(
            tags={"node_list", "config:views.view.x"},
            contexts={"user", "languages"},
            max_age=600,
        )
        assert descriptor.to_render_array() == {
            "tags": ["config:views.view.x", "node_list"],
            "contexts": ["languages", "user"],
            "max-age": 600,
        }


class TestCacheDescriptorMerge:
    """Bubbling two descriptors together."""

    def test_unions_tags_and_contexts(self) -> None:
        merged = CacheDescriptor(tags={"a"}, contexts={"x"}).merge(
            CacheDescriptor(tags={"b"}, contexts={"y"})
        )
        assert merged.tags == {"a", "b"}
        assert merged.contexts == {"x", "y"}

    def test_finite_max_age_beats_permanent(self) -> None:
        merged = CacheDescriptor(max_age=PERMANENT).merge(CacheDescriptor(max_age=300))
        assert merged.max_age == 300

    def test_smaller_max_age_wins(self) -> None:
        merged = CacheDescriptor(max_age=60).merge(CacheDescriptor(max_age=0))
        assert merged.max_age == 0

    def test_later_cutoff_wins(self) -> None:
        merged = CacheDescriptor(results_expire_at=100, output_expire_at=None).merge(
            CacheDescriptor(results_expire_at=200, output_expire_at=150)
        )
        assert merged.results_expire_at == 200
        assert merged.output_expire_at == 150

    def test_merge_max_age_both_permanent(self) -> None:
        assert merge_max_age(PERMANENT, PERMANENT) == PERMANENT
