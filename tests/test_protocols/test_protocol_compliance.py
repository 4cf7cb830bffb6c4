"""Structural protocol compliance for built-in implementations."""

from __future__ import annotations

from advanced_view_cache.cache import InMemoryTaggedCache
from advanced_view_cache.protocols import MetadataContributor, TaggedCacheBackend, TokenTransform
from advanced_view_cache.tokens import ReplacementTransform, chain


class TestProtocolCompliance:
    def test_tagged_cache(self) -> None:
        assert isinstance(InMemoryTaggedCache(), TaggedCacheBackend)

    def test_transforms(self) -> None:
        assert isinstance(ReplacementTransform({}), TokenTransform)
        assert isinstance(chain(), TokenTransform)

    def test_plain_function_is_transform(self) -> None:
        def upper(tag: str) -> str:
            return tag.upper()

        assert isinstance(upper, TokenTransform)

    def test_object_without_method_is_not_contributor(self) -> None:
        assert not isinstance(object(), MetadataContributor)
