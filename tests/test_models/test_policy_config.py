"""Tests for advanced_view_cache.models.policy."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from advanced_view_cache.models.lifetime import PERMANENT, LifetimeKind, LifetimeSpec
from advanced_view_cache.models.policy import PolicyConfig


class TestPolicyConfigDefaults:
    """A fresh PolicyConfig matches the stored option defaults."""

    def test_empty_sets(self) -> None:
        config = PolicyConfig()
        assert config.cache_tags == frozenset()
        assert config.cache_tags_exclude == frozenset()
        assert config.cache_contexts == frozenset()
        assert config.cache_contexts_exclude == frozenset()

    def test_lifetimes_permanent(self) -> None:
        config = PolicyConfig()
        assert config.results_lifetime.seconds == PERMANENT
        assert config.output_lifetime.seconds == PERMANENT


class TestPolicyConfigFields:
    """Field coercion and immutability."""

    def test_lists_become_frozensets(self) -> None:
        config = PolicyConfig(cache_tags=["a", "b", "a"])
        assert config.cache_tags == frozenset({"a", "b"})

    def test_blank_entries_dropped_and_trimmed(self) -> None:
        config = PolicyConfig(cache_contexts=["  user ", "", "   "])
        assert config.cache_contexts == frozenset({"user"})

    def test_single_string_rejected(self) -> None:
        with pytest.raises(ValidationError, match="single string"):
            PolicyConfig(cache_tags="node_list")

    def test_non_string_entry_rejected(self) -> None:
        with pytest.raises(ValidationError, match="expected string entries"):
            PolicyConfig(cache_tags={"a", 42})

    def test_frozen(self) -> None:
        config = PolicyConfig()
        with pytest.raises(ValidationError):
            config.cache_tags = frozenset({"x"})  # type: ignore[misc]

    def test_lifetime_lookup(self, timed_config: PolicyConfig) -> None:
        assert timed_config.lifetime("results").seconds == 3600
        assert timed_config.lifetime("output").seconds == 300

    def test_lifetime_unknown_slot(self) -> None:
        with pytest.raises(ValueError, match="Unknown lifetime slot"):
            PolicyConfig().lifetime("page")  # type: ignore[arg-type]


class TestPolicyConfigOptions:
    """Conversion to and from the flat stored-options mapping."""

    def test_from_empty_options(self) -> None:
        assert PolicyConfig.from_options({}) == PolicyConfig()

    def test_from_options_presets(self) -> None:
        config = PolicyConfig.from_options(
            {
                "cache_tags": ["vact:node_list:test"],
                "cache_tags_exclude": ["node_list"],
                "cache_contexts": ["url.query_args:test"],
                "cache_contexts_exclude": None,
                "results_lifespan": "900",
                "output_lifespan": 300,
            }
        )
        assert config.cache_tags == {"vact:node_list:test"}
        assert config.cache_tags_exclude == {"node_list"}
        assert config.cache_contexts_exclude == frozenset()
        assert config.results_lifetime == LifetimeSpec.preset(900)
        assert config.output_lifetime == LifetimeSpec.preset(300)

    def test_from_options_custom(self) -> None:
        config = PolicyConfig.from_options(
            {"results_lifespan": "custom", "results_lifespan_custom": "120"}
        )
        assert config.results_lifetime.kind is LifetimeKind.CUSTOM
        assert config.results_lifetime.seconds == 120

    def test_from_options_custom_missing_value(self) -> None:
        with pytest.raises(KeyError):
            PolicyConfig.from_options({"output_lifespan": "custom"})

    def test_to_options(self) -> None:
        config = PolicyConfig(
            cache_tags={"b", "a"},
            results_lifetime=LifetimeSpec.custom(90),
            output_lifetime=LifetimeSpec.preset(60),
        )
        options = config.to_options()
        assert options["cache_tags"] == ["a", "b"]
        assert options["results_lifespan"] == "custom"
        assert options["results_lifespan_custom"] == 90
        assert options["output_lifespan"] == 60
        assert options["output_lifespan_custom"] is None

    def test_options_survive_reload(self, node_list_config: PolicyConfig) -> None:
        assert PolicyConfig.from_options(node_list_config.to_options()) == node_list_config
