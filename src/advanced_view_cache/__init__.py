"""advanced-view-cache: Cache tag, context and max-age policy for query/render views.

Aggregation:
    CacheMetadataAggregator, compute_descriptor, compute_tags,
    compute_contexts, collect_metadata

Lifetimes:
    resolve, expiry_cutoff, max_age, is_fresh, format_interval,
    lifespan_options, PERMANENT, PRESET_LIFESPANS

Set algebra:
    merge, substitute, union_all

Configuration:
    normalize, normalize_or_raise, parse_entries, render_entries,
    summary_title

Tokens:
    ReplacementTransform, chain, argument_replacements, available_tokens

Protocols (extension points):
    MetadataContributor, TokenTransform, TaggedCacheBackend

Cache:
    InMemoryTaggedCache

Models & Types:
    PolicyConfig, LifetimeSpec, LifetimeKind, ContributedMetadata,
    CacheDescriptor, PolicyValidationError

Exceptions:
    AdvancedViewCacheError, PolicyConfigError, TokenSubstitutionError
"""

from importlib.metadata import PackageNotFoundError, version

from advanced_view_cache.aggregator import (
    CacheMetadataAggregator,
    collect_metadata,
    compute_contexts,
    compute_descriptor,
    compute_tags,
)
from advanced_view_cache.cache import InMemoryTaggedCache
from advanced_view_cache.exceptions import (
    AdvancedViewCacheError,
    PolicyConfigError,
    TokenSubstitutionError,
)
from advanced_view_cache.lifetime import (
    expiry_cutoff,
    format_interval,
    is_fresh,
    lifespan_options,
    max_age,
    resolve,
)
from advanced_view_cache.models import (
    PERMANENT,
    PRESET_LIFESPANS,
    CacheDescriptor,
    ContributedMetadata,
    LifetimeKind,
    LifetimeSpec,
    PolicyConfig,
    PolicyValidationError,
)
from advanced_view_cache.normalize import (
    normalize,
    normalize_or_raise,
    parse_entries,
    render_entries,
    summary_title,
)
from advanced_view_cache.protocols import (
    MetadataContributor,
    TaggedCacheBackend,
    TokenTransform,
)
from advanced_view_cache.tags import merge, substitute, union_all
from advanced_view_cache.tokens import (
    ReplacementTransform,
    argument_replacements,
    available_tokens,
    chain,
)

try:
    __version__ = version("advanced-view-cache")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "PERMANENT",
    "PRESET_LIFESPANS",
    "AdvancedViewCacheError",
    "CacheDescriptor",
    "CacheMetadataAggregator",
    "ContributedMetadata",
    "InMemoryTaggedCache",
    "LifetimeKind",
    "LifetimeSpec",
    "MetadataContributor",
    "PolicyConfig",
    "PolicyConfigError",
    "PolicyValidationError",
    "ReplacementTransform",
    "TaggedCacheBackend",
    "TokenSubstitutionError",
    "TokenTransform",
    "__version__",
    "argument_replacements",
    "available_tokens",
    "chain",
    "collect_metadata",
    "compute_contexts",
    "compute_descriptor",
    "compute_tags",
    "expiry_cutoff",
    "format_interval",
    "is_fresh",
    "lifespan_options",
    "max_age",
    "merge",
    "normalize",
    "normalize_or_raise",
    "parse_entries",
    "render_entries",
    "resolve",
    "substitute",
    "summary_title",
    "union_all",
]
