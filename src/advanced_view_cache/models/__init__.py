"""Data models for advanced-view-cache."""

from .lifetime import (
    NEVER,
    PERMANENT,
    PRESET_CATALOG,
    PRESET_LIFESPANS,
    LifetimeKind,
    LifetimeSpec,
)
from .metadata import CacheDescriptor, ContributedMetadata, merge_max_age
from .policy import CUSTOM_OPTION, LifetimeSlot, PolicyConfig
from .validation import PolicyValidationError

__all__ = [
    "CUSTOM_OPTION",
    "NEVER",
    "PERMANENT",
    "PRESET_CATALOG",
    "PRESET_LIFESPANS",
    "CacheDescriptor",
    "ContributedMetadata",
    "LifetimeKind",
    "LifetimeSlot",
    "LifetimeSpec",
    "PolicyConfig",
    "PolicyValidationError",
    "merge_max_age",
]
