"""Tests for advanced_view_cache.models.lifetime."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from advanced_view_cache.models.lifetime import (
    PERMANENT,
    PRESET_CATALOG,
    PRESET_LIFESPANS,
    LifetimeKind,
    LifetimeSpec,
)


class TestLifetimeSpecCreation:
    """LifetimeSpec constructors and defaults."""

    def test_default_is_permanent_preset(self) -> None:
        spec = LifetimeSpec()
        assert spec.kind is LifetimeKind.PRESET
        assert spec.seconds == PERMANENT
        assert spec.is_permanent

    def test_preset_constructor(self) -> None:
        spec = LifetimeSpec.preset(3600)
        assert spec.kind is LifetimeKind.PRESET
        assert spec.seconds == 3600

    def test_custom_constructor(self) -> None:
        spec = LifetimeSpec.custom(45)
        assert spec.kind is LifetimeKind.CUSTOM
        assert spec.seconds == 45
        assert not spec.is_permanent

    def test_kind_accepts_string(self) -> None:
        spec = LifetimeSpec(kind="custom", seconds=10)
        assert spec.kind is LifetimeKind.CUSTOM

    def test_catalog_contains_always_and_never(self) -> None:
        assert PERMANENT in PRESET_CATALOG
        assert 0 in PRESET_CATALOG
        assert set(PRESET_LIFESPANS) <= PRESET_CATALOG

    def test_frozen(self) -> None:
        spec = LifetimeSpec.preset(60)
        with pytest.raises(ValidationError):
            spec.seconds = 300  # type: ignore[misc]


class TestLifetimeSpecValidation:
    """Invalid lifetimes are configuration errors."""

    def test_preset_outside_catalog_rejected(self) -> None:
        with pytest.raises(ValidationError, match="not a preset lifespan"):
            LifetimeSpec.preset(45)

    def test_custom_below_permanent_rejected(self) -> None:
        with pytest.raises(ValidationError, match="non-negative"):
            LifetimeSpec.custom(-5)

    def test_custom_permanent_allowed(self) -> None:
        assert LifetimeSpec.custom(-1).is_permanent

    def test_custom_zero_allowed(self) -> None:
        assert LifetimeSpec.custom(0).seconds == 0

    def test_custom_non_numeric_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LifetimeSpec(kind="custom", seconds="abc")  # type: ignore[arg-type]
