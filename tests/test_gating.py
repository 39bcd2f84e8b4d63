"""Tests for feature-gated dependencies."""

import pytest

from featuregate.config.settings import DependencySpec
from featuregate.declaration import parse
from featuregate.errors import InvalidOnlyFeaturesError
from featuregate.gating import filter_dependencies, should_include, validate_only_features


def dep(name: str, only_features: tuple[str, ...] | None = None) -> DependencySpec:
    return DependencySpec(name=name, only_features=only_features)


class TestValidateOnlyFeatures:
    """Tests for only_features validation."""

    def test_absent_option(self) -> None:
        """Test that a missing option means no gate."""
        assert validate_only_features("plain_dep", {"name": "plain_dep"}) is None

    def test_valid_option(self) -> None:
        """Test a well-formed option."""
        options = {"only_features": ["metrics", "json"]}
        assert validate_only_features("multi_dep", options) == ("metrics", "json")

    @pytest.mark.parametrize(
        "value",
        ["not_a_list", [], ["not an identifier"], [42], None, ["json", 1]],
    )
    def test_invalid_option(self, value: object) -> None:
        """Test that malformed options name the dependency and the value."""
        with pytest.raises(
            InvalidOnlyFeaturesError, match="Expected only_features in dependency 'bad_dep'"
        ) as exc:
            validate_only_features("bad_dep", {"only_features": value})
        assert exc.value.dependency == "bad_dep"
        assert exc.value.value == value


class TestShouldInclude:
    """Tests for the single-edge gate."""

    def test_no_gate(self) -> None:
        """Test that ungated edges are always included."""
        assert should_include([], None) is True
        assert should_include(["json"], None) is True

    def test_matching_feature(self) -> None:
        """Test that an enabled required feature passes."""
        assert should_include({"json"}, ("json",)) is True

    def test_or_semantics(self) -> None:
        """Test that any one matching feature is enough."""
        assert should_include({"json"}, ("metrics", "json")) is True

    def test_no_matching_feature(self) -> None:
        """Test that an edge is dropped when no required feature is enabled."""
        assert should_include({"json"}, ("metrics",)) is False
        assert should_include(set(), ("json",)) is False


class TestFilterDependencies:
    """Tests for gating a consumer's dependency list."""

    def test_enabled_feature_includes(self) -> None:
        """Test that a dep gated on an enabled feature is kept."""
        state = parse({"default": ["json"], "optional": ["metrics"]})
        kept = filter_dependencies(state, [dep("json_dep", ("json",))])
        assert [d.name for d in kept] == ["json_dep"]

    def test_disabled_feature_excludes(self) -> None:
        """Test that a dep gated on a disabled feature is dropped."""
        state = parse({"default": ["json"], "optional": ["metrics"]})
        assert filter_dependencies(state, [dep("metrics_dep", ("metrics",))]) == []

    def test_undeclared_gate_excludes(self) -> None:
        """Test that a dep gated on an unknown feature is dropped."""
        state = parse({"default": ["json"], "optional": ["metrics"]})
        assert filter_dependencies(state, [dep("absent", ("nonexistent",))]) == []

    def test_empty_defaults_exclude(self) -> None:
        """Test that gated deps are dropped when nothing is enabled."""
        state = parse({"default": [], "optional": ["json"]})
        assert filter_dependencies(state, [dep("json_dep", ("json",))]) == []

    @pytest.mark.parametrize("raw", [None, {}])
    def test_no_features_configured(self, raw: object) -> None:
        """Test that every edge passes when the consumer declares no features."""
        state = parse(raw)
        deps = [dep("gated_dep", ("json",)), dep("regular_dep")]
        kept = filter_dependencies(state, deps)
        assert [d.name for d in kept] == ["gated_dep", "regular_dep"]

    def test_no_consumer_state(self) -> None:
        """Test that a missing consumer state passes everything through."""
        kept = filter_dependencies(None, [dep("gated_dep", ("json",))])
        assert [d.name for d in kept] == ["gated_dep"]

    def test_mixed_deps(self) -> None:
        """Test a mix of gated and ungated edges keeps order."""
        state = parse(
            {"default": ["json", "logging"], "optional": ["metrics", "debug"]}
        )
        deps = [
            dep("always_dep"),
            dep("json_dep", ("json",)),
            dep("metrics_dep", ("metrics",)),
            dep("multi_dep", ("metrics", "logging")),
        ]
        kept = filter_dependencies(state, deps)
        assert [d.name for d in kept] == ["always_dep", "json_dep", "multi_dep"]
