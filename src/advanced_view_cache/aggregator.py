"""Cache metadata aggregation for a single view display.

Collects the cache tags and contexts contributed by a view's sub-plugins,
applies the configured additions and exclusions, and resolves the
configured lifetimes into one :class:`CacheDescriptor`.

Every computation is a pure function of its arguments. ``now`` is always
passed in explicitly, so concurrent evaluations against the same
``PolicyConfig`` never share mutable state.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from advanced_view_cache import lifetime
from advanced_view_cache.models.metadata import CacheDescriptor, ContributedMetadata
from advanced_view_cache.models.policy import PolicyConfig
from advanced_view_cache.protocols.contributor import MetadataContributor
from advanced_view_cache.protocols.transform import TokenTransform
from advanced_view_cache.tags import OnTransformError, merge, substitute, union_all

logger = logging.getLogger(__name__)


def collect_metadata(contributors: Iterable[MetadataContributor]) -> list[ContributedMetadata]:
    """Gather the declared cache metadata of every contributor."""
    collected: list[ContributedMetadata] = []
    for contributor in contributors:
        metadata = contributor.cache_metadata()
        if not isinstance(metadata, ContributedMetadata):
            msg = (
                f"{type(contributor).__name__}.cache_metadata() must return "
                f"ContributedMetadata, got {type(metadata).__name__}"
            )
            raise TypeError(msg)
        collected.append(metadata)
    return collected


class CacheMetadataAggregator:
    """Computes cache descriptors for one view display's cache policy.

    Parameters:
        config: The display's normalized cache policy.
        transform: Optional token transform applied to tags before exclusion.
        on_transform_error: ``"keep"`` (default) leaves a tag unsubstituted
            when the transform fails; ``"raise"`` raises
            ``TokenSubstitutionError``.
        base_tags_excludable: When False (default) the view's own base tags
            are re-added after exclusions are applied, so configuring
            ``-<base tag>`` has no effect on them. When True, configured
            exclusions also remove base tags.
    """

    __slots__ = ("_base_tags_excludable", "_config", "_on_transform_error", "_transform")

    def __init__(
        self,
        config: PolicyConfig,
        transform: TokenTransform | None = None,
        *,
        on_transform_error: OnTransformError = "keep",
        base_tags_excludable: bool = False,
    ) -> None:
        if on_transform_error not in ("keep", "raise"):
            msg = f"on_transform_error must be 'keep' or 'raise', got {on_transform_error!r}"
            raise ValueError(msg)
        self._config = config
        self._transform = transform
        self._on_transform_error: OnTransformError = on_transform_error
        self._base_tags_excludable = base_tags_excludable

    @property
    def config(self) -> PolicyConfig:
        return self._config

    def compute_tags(
        self,
        contributors: Iterable[ContributedMetadata],
        base_tags: Iterable[str] = (),
    ) -> frozenset[str]:
        """Compute the final cache tags.

        When at least one tag is configured, contributed and configured tags
        are token-substituted, configured exclusions are removed and the
        view's base tags are added back. With no configured tags the
        contributed tags are returned untouched and exclusions are ignored.

        Parameters:
            contributors: Metadata declared by the view's sub-plugins.
            base_tags: The view's own identity tags.

        Returns:
            The final set of cache tags.
        """
        config = self._config
        contributed = union_all(c.tags for c in contributors)
        if not config.cache_tags:
            return contributed

        candidates = substitute(
            contributed | config.cache_tags,
            self._transform,
            on_error=self._on_transform_error,
        )
        tags = merge([candidates], exclude=config.cache_tags_exclude) | frozenset(base_tags)
        if self._base_tags_excludable:
            tags -= config.cache_tags_exclude
        return tags

    def compute_contexts(self, base_contexts: Iterable[str] = ()) -> frozenset[str]:
        """Compute the final cache contexts.

        Exclusions always apply to contexts, including the base contexts.
        """
        config = self._config
        return merge([base_contexts], config.cache_contexts, config.cache_contexts_exclude)

    def compute_descriptor(
        self,
        now: int,
        contributors: Iterable[ContributedMetadata] = (),
        base_tags: Iterable[str] = (),
        base_contexts: Iterable[str] = (),
    ) -> CacheDescriptor:
        """Compute the complete cache descriptor for one view execution.

        The externally visible max-age comes from the output lifetime; the
        results lifetime only governs the results expiry cutoff.

        Parameters:
            now: Current timestamp in seconds.
            contributors: Metadata declared by the view's sub-plugins.
            base_tags: The view's own identity tags.
            base_contexts: The view's own default cache contexts.

        Returns:
            A new ``CacheDescriptor``.
        """
        config = self._config
        contributors = list(contributors)
        descriptor = CacheDescriptor(
            tags=self.compute_tags(contributors, base_tags),
            contexts=self.compute_contexts(base_contexts),
            max_age=lifetime.max_age(config.output_lifetime),
            results_expire_at=lifetime.expiry_cutoff(config.results_lifetime, now),
            output_expire_at=lifetime.expiry_cutoff(config.output_lifetime, now),
        )
        logger.debug(
            "Computed cache descriptor: %d tag(s), %d context(s), max-age %d",
            len(descriptor.tags),
            len(descriptor.contexts),
            descriptor.max_age,
        )
        return descriptor

    def __repr__(self) -> str:
        return (
            f"CacheMetadataAggregator(tags={len(self._config.cache_tags)}, "
            f"contexts={len(self._config.cache_contexts)}, "
            f"base_tags_excludable={self._base_tags_excludable})"
        )


def compute_tags(
    config: PolicyConfig,
    contributors: Iterable[ContributedMetadata],
    base_tags: Iterable[str] = (),
    transform: TokenTransform | None = None,
) -> frozenset[str]:
    """Functional form of :meth:`CacheMetadataAggregator.compute_tags`."""
    return CacheMetadataAggregator(config, transform).compute_tags(contributors, base_tags)


def compute_contexts(config: PolicyConfig, base_contexts: Iterable[str] = ()) -> frozenset[str]:
    """Functional form of :meth:`CacheMetadataAggregator.compute_contexts`."""
    return CacheMetadataAggregator(config).compute_contexts(base_contexts)


def compute_descriptor(
    config: PolicyConfig,
    now: int,
    contributors: Iterable[ContributedMetadata] = (),
    base_tags: Iterable[str] = (),
    base_contexts: Iterable[str] = (),
    transform: TokenTransform | None = None,
) -> CacheDescriptor:
    """Compute a cache descriptor with the default aggregation policy."""
    return CacheMetadataAggregator(config, transform).compute_descriptor(
        now, contributors, base_tags, base_contexts
    )
