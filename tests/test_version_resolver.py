"""Tests for semantic-version requirement resolution."""

import pytest

from crate_graph.errors import InvalidRequirementError, NoAvailableVersionError, RegistryError
from crate_graph.version_resolver import VersionResolver, normalize_requirement


@pytest.fixture
def resolver(client):
    return VersionResolver(client)


class TestResolve:
    def test_caret_picks_highest_non_yanked_match(self, registry, resolver):
        registry.add_crate("dep", ["1.2.0", "1.2.5", "1.3.0", "2.0.0"], yanked={"1.3.0"})
        assert resolver.resolve("dep", "^1.2.0") == "1.2.5"

    def test_empty_requirement_means_any(self, registry, resolver):
        registry.add_crate("dep", ["1.0.0", "2.0.0"])
        assert resolver.resolve("dep", "") == "2.0.0"

    def test_whitespace_requirement_means_any(self, registry, resolver):
        registry.add_crate("dep", ["2.0.0", "1.0.0"])
        assert resolver.resolve("dep", "   ") == "2.0.0"

    def test_max_is_by_version_not_catalog_order(self, registry, resolver):
        registry.add_crate("dep", ["1.10.0", "1.9.0", "1.2.0"])
        assert resolver.resolve("dep", "^1") == "1.10.0"

    def test_tilde(self, registry, resolver):
        registry.add_crate("dep", ["1.2.0", "1.2.9", "1.3.0"])
        assert resolver.resolve("dep", "~1.2") == "1.2.9"

    def test_comparison_clauses_with_spaces(self, registry, resolver):
        registry.add_crate("dep", ["0.9.0", "1.0.0", "1.4.2", "1.5.0"])
        assert resolver.resolve("dep", ">= 1.0, < 1.5") == "1.4.2"

    def test_prerelease_not_matched_by_release_range(self, registry, resolver):
        registry.add_crate("dep", ["1.0.0", "1.1.0-beta.1"])
        assert resolver.resolve("dep", "^1.0.0") == "1.0.0"

    def test_unparseable_catalog_entries_ignored(self, registry, resolver):
        registry.add_crate("dep", ["not-a-version", "1.0.0"])
        assert resolver.resolve("dep", "^1") == "1.0.0"

    def test_no_match_falls_back_to_first_non_yanked_in_catalog_order(self, registry, resolver):
        registry.add_crate("dep", ["0.1.0", "0.3.0", "0.2.0"], yanked={"0.1.0"})
        assert resolver.resolve("dep", "^5") == "0.3.0"

    def test_exact_literal_is_matched_as_a_range(self, registry, resolver):
        # A bare version parses as "==version", so yanked filtering still applies
        registry.add_crate("dep", ["0.1.0", "1.2.3+build"], yanked={"1.2.3+build"})
        assert resolver.resolve("dep", "1.2.3+build") == "0.1.0"

    def test_exact_literal_picks_that_version(self, registry, resolver):
        registry.add_crate("dep", ["1.2.3", "1.3.0"])
        assert resolver.resolve("dep", "1.2.3") == "1.2.3"

    def test_only_yanked_versions_raises(self, registry, resolver):
        registry.add_crate("dep", ["1.0.0", "1.1.0"], yanked={"1.0.0", "1.1.0"})
        with pytest.raises(NoAvailableVersionError):
            resolver.resolve("dep", "^1")

    def test_empty_catalog_raises(self, registry, resolver):
        registry.add_crate("dep", [])
        with pytest.raises(NoAvailableVersionError):
            resolver.resolve("dep", "")

    def test_invalid_requirement_raises_without_fetching(self, registry, resolver):
        with pytest.raises(InvalidRequirementError):
            resolver.resolve("dep", "not a requirement!")
        assert registry.calls == []

    def test_catalog_errors_propagate(self, resolver):
        with pytest.raises(RegistryError):
            resolver.resolve("missing", "^1")

    def test_catalog_fetched_once_per_name(self, registry, resolver):
        registry.add_crate("dep", ["1.0.0"])
        resolver.resolve("dep", "^1")
        resolver.resolve("dep", "=1.0.0")
        assert registry.count("/crates/dep/versions") == 1


class TestNormalizeRequirement:
    def test_strips_operator_spacing(self):
        assert normalize_requirement(">= 1.2, < 2") == ">=1.2,<2"

    def test_leaves_compact_requirement_alone(self):
        assert normalize_requirement("^0.4.1") == "^0.4.1"
