"""Cache policy configuration model."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .lifetime import PERMANENT, LifetimeKind, LifetimeSpec

LifetimeSlot: TypeAlias = Literal["results", "output"]

CUSTOM_OPTION = "custom"


class PolicyConfig(BaseModel):
    """Validated, normalized cache policy for a single view display.

    Instances are immutable. When a view's configuration changes a new
    ``PolicyConfig`` replaces the old one wholesale.
    """

    cache_tags: frozenset[str] = Field(default_factory=frozenset)
    cache_tags_exclude: frozenset[str] = Field(default_factory=frozenset)
    cache_contexts: frozenset[str] = Field(default_factory=frozenset)
    cache_contexts_exclude: frozenset[str] = Field(default_factory=frozenset)
    results_lifetime: LifetimeSpec = Field(default_factory=LifetimeSpec.permanent)
    output_lifetime: LifetimeSpec = Field(default_factory=LifetimeSpec.permanent)

    model_config = ConfigDict(frozen=True)

    @field_validator(
        "cache_tags",
        "cache_tags_exclude",
        "cache_contexts",
        "cache_contexts_exclude",
        mode="before",
    )
    @classmethod
    def drop_blank_entries(cls, value: Any) -> Any:
        if isinstance(value, str):
            msg = "expected a collection of strings, not a single string"
            raise ValueError(msg)
        if value is None:
            return frozenset()
        entries: set[str] = set()
        for v in value:
            if not isinstance(v, str):
                msg = f"expected string entries, got {type(v).__name__}"
                raise ValueError(msg)
            if v.strip():
                entries.add(v.strip())
        return frozenset(entries)

    def lifetime(self, slot: LifetimeSlot) -> LifetimeSpec:
        """Return the lifetime spec for ``"results"`` or ``"output"``."""
        if slot == "results":
            return self.results_lifetime
        if slot == "output":
            return self.output_lifetime
        msg = f"Unknown lifetime slot: {slot!r}"
        raise ValueError(msg)

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> PolicyConfig:
        """Build a config from the flat stored-options mapping.

        Missing keys take the stored defaults: no tags or contexts and a
        permanent lifetime for both slots.
        """
        return cls(
            cache_tags=options.get("cache_tags") or (),
            cache_tags_exclude=options.get("cache_tags_exclude") or (),
            cache_contexts=options.get("cache_contexts") or (),
            cache_contexts_exclude=options.get("cache_contexts_exclude") or (),
            results_lifetime=_lifetime_from_options(options, "results"),
            output_lifetime=_lifetime_from_options(options, "output"),
        )

    def to_options(self) -> dict[str, Any]:
        """Flatten the config into the stored-options mapping."""
        options: dict[str, Any] = {
            "cache_tags": sorted(self.cache_tags),
            "cache_tags_exclude": sorted(self.cache_tags_exclude),
            "cache_contexts": sorted(self.cache_contexts),
            "cache_contexts_exclude": sorted(self.cache_contexts_exclude),
        }
        for slot in ("results", "output"):
            spec = self.lifetime(slot)
            if spec.kind is LifetimeKind.CUSTOM:
                options[f"{slot}_lifespan"] = CUSTOM_OPTION
                options[f"{slot}_lifespan_custom"] = spec.seconds
            else:
                options[f"{slot}_lifespan"] = spec.seconds
                options[f"{slot}_lifespan_custom"] = None
        return options


def _lifetime_from_options(options: Mapping[str, Any], slot: LifetimeSlot) -> LifetimeSpec:
    selected = options.get(f"{slot}_lifespan", PERMANENT)
    if selected is None:
        selected = PERMANENT
    if selected == CUSTOM_OPTION:
        return LifetimeSpec.custom(int(options[f"{slot}_lifespan_custom"]))
    return LifetimeSpec.preset(int(selected))
