"""Cache lifetime models for the results and output slots."""

from __future__ import annotations

from enum import StrEnum
from typing import Final, Self

from pydantic import BaseModel, ConfigDict, model_validator

PERMANENT: Final = -1
"""Lifetime/max-age sentinel: valid until invalidated by tag, never by elapsed time."""

NEVER: Final = 0

PRESET_LIFESPANS: Final[tuple[int, ...]] = (
    60,
    300,
    900,
    1800,
    3600,
    21600,
    43200,
    86400,
    604800,
)

PRESET_CATALOG: Final[frozenset[int]] = frozenset({PERMANENT, NEVER, *PRESET_LIFESPANS})


class LifetimeKind(StrEnum):
    """How a lifetime slot was configured."""

    PRESET = "preset"
    CUSTOM = "custom"


class LifetimeSpec(BaseModel):
    """A configured cache lifetime for the ``results`` or ``output`` slot.

    ``seconds`` is ``-1`` for permanent, ``0`` for never cache, or a
    positive number of seconds. Preset values must come from the preset
    catalog; custom values may be any non-negative integer or ``-1``.
    """

    kind: LifetimeKind = LifetimeKind.PRESET
    seconds: int = PERMANENT

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_seconds(self) -> Self:
        if self.kind is LifetimeKind.PRESET and self.seconds not in PRESET_CATALOG:
            msg = f"{self.seconds} is not a preset lifespan"
            raise ValueError(msg)
        if self.kind is LifetimeKind.CUSTOM and self.seconds < PERMANENT:
            msg = f"Custom lifespan must be -1 or a non-negative number, got {self.seconds}"
            raise ValueError(msg)
        return self

    @classmethod
    def preset(cls, seconds: int) -> LifetimeSpec:
        return cls(kind=LifetimeKind.PRESET, seconds=seconds)

    @classmethod
    def custom(cls, seconds: int) -> LifetimeSpec:
        return cls(kind=LifetimeKind.CUSTOM, seconds=seconds)

    @classmethod
    def permanent(cls) -> LifetimeSpec:
        return cls(kind=LifetimeKind.PRESET, seconds=PERMANENT)

    @property
    def is_permanent(self) -> bool:
        return self.seconds == PERMANENT
