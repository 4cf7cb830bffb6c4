"""Cache metadata models produced and consumed during a single evaluation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .lifetime import PERMANENT


def _as_frozenset(value: Any) -> Any:
    if isinstance(value, str):
        msg = "expected a collection of strings, not a single string"
        raise ValueError(msg)
    if value is None:
        return frozenset()
    return frozenset(value)


class ContributedMetadata(BaseModel):
    """Cache tags and contexts declared by one view sub-plugin.

    Every contributor returns one of these, possibly empty.
    """

    tags: frozenset[str] = Field(default_factory=frozenset)
    contexts: frozenset[str] = Field(default_factory=frozenset)

    model_config = ConfigDict(frozen=True)

    @field_validator("tags", "contexts", mode="before")
    @classmethod
    def coerce_sets(cls, value: Any) -> Any:
        return _as_frozenset(value)

    @classmethod
    def empty(cls) -> ContributedMetadata:
        return cls()


class CacheDescriptor(BaseModel):
    """Final cache metadata for one evaluation of a view's cache policy.

    ``max_age`` is a non-negative number of seconds or ``PERMANENT``.
    ``results_expire_at`` and ``output_expire_at`` are cutoff timestamps:
    cached data created at or before the cutoff is stale. ``None`` means
    the data never expires by age.
    """

    tags: frozenset[str] = Field(default_factory=frozenset)
    contexts: frozenset[str] = Field(default_factory=frozenset)
    max_age: int = Field(default=PERMANENT, ge=PERMANENT)
    results_expire_at: int | None = None
    output_expire_at: int | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("tags", "contexts", mode="before")
    @classmethod
    def coerce_sets(cls, value: Any) -> Any:
        return _as_frozenset(value)

    @property
    def is_permanent(self) -> bool:
        return self.max_age == PERMANENT

    @property
    def is_cacheable(self) -> bool:
        """False when the output must never be cached (max-age 0)."""
        return self.max_age != 0

    def merge(self, other: CacheDescriptor) -> CacheDescriptor:
        """Combine two descriptors the way nested render metadata bubbles up.

        Tags and contexts are unioned, the smaller max-age wins (``PERMANENT``
        never wins over a finite value) and the later, stricter expiry cutoff
        is kept.
        """
        return CacheDescriptor(
            tags=self.tags | other.tags,
            contexts=self.contexts | other.contexts,
            max_age=merge_max_age(self.max_age, other.max_age),
            results_expire_at=_later(self.results_expire_at, other.results_expire_at),
            output_expire_at=_later(self.output_expire_at, other.output_expire_at),
        )

    def to_render_array(self) -> dict[str, Any]:
        """Render as a plain ``{"tags", "contexts", "max-age"}`` mapping.

        Lists are sorted so the output is stable for serialization.
        """
        return {
            "tags": sorted(self.tags),
            "contexts": sorted(self.contexts),
            "max-age": self.max_age,
        }


def merge_max_age(a: int, b: int) -> int:
    """Return the stricter of two max-age values."""
    if a == PERMANENT:
        return b
    if b == PERMANENT:
        return a
    return min(a, b)


def _later(a: int | None, b: int | None) -> int | None:
    if a is None:
        return b
    if b is None:
        return a
    return max(a, b)
