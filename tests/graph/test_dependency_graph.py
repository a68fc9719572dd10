"""Unit tests for graph/builder.py."""

import pytest

from monorepo_health.exceptions import (
    DuplicatePackageError,
    MalformedInputError,
    MissingDescriptorFieldError,
)
from monorepo_health.graph import build_dependency_graph, validate_descriptors
from monorepo_health.models import PackageDescriptor


def _pkg(name: str, deps=None, dev=None, peer=None) -> PackageDescriptor:
    """Shortcut to build a minimal PackageDescriptor."""
    return PackageDescriptor(
        name=name,
        path=f"packages/{name.split('/')[-1]}",
        dependencies=dict(deps or {}),
        dev_dependencies=dict(dev or {}),
        peer_dependencies=dict(peer or {}),
        manifest={"name": name},
    )


# ── build_dependency_graph ────────────────────────────────────────


class TestBuildDependencyGraph:
    def test_empty_input(self):
        graph, cycles = build_dependency_graph([])
        assert graph.nodes == ()
        assert graph.edge_count == 0
        assert len(cycles) == 0
        assert cycles.issues() == []

    def test_single_package_no_dependencies(self):
        graph, cycles = build_dependency_graph([_pkg("@x/a")])
        assert graph.nodes == ("@x/a",)
        assert graph.adjacency == {"@x/a": ()}
        assert len(cycles) == 0

    def test_mutual_dependency_is_one_cycle(self):
        graph, cycles = build_dependency_graph(
            [
                _pkg("@x/a", deps={"@x/b": "1.0.0"}),
                _pkg("@x/b", deps={"@x/a": "1.0.0"}),
            ]
        )
        assert graph.has_edge("@x/a", "@x/b")
        assert graph.has_edge("@x/b", "@x/a")
        assert len(cycles) == 1
        assert cycles.involves("@x/a", "@x/b")
        assert cycles.issues() == ["Circular dependency: @x/a <-> @x/b"]

    def test_external_dependencies_are_filtered(self):
        graph, _ = build_dependency_graph(
            [
                _pkg("@x/a", deps={"react": "^18.2.0", "@x/b": "workspace:*"}),
                _pkg("@x/b", dev={"typescript": "^5.0.0"}),
            ]
        )
        assert graph.nodes == ("@x/a", "@x/b")
        assert graph.adjacency["@x/a"] == ("@x/b",)
        assert graph.adjacency["@x/b"] == ()
        assert "react" not in graph.adjacency
        assert graph.edge_count == 1

    def test_self_reference_is_not_an_edge(self):
        graph, cycles = build_dependency_graph([_pkg("@x/a", dev={"@x/a": "*"})])
        assert graph.adjacency["@x/a"] == ()
        assert len(cycles) == 0

    def test_all_dependency_maps_produce_edges(self):
        graph, _ = build_dependency_graph(
            [
                _pkg("a", deps={"b": "1"}, dev={"c": "1"}, peer={"d": "1"}),
                _pkg("b"),
                _pkg("c"),
                _pkg("d"),
            ]
        )
        assert graph.adjacency["a"] == ("b", "c", "d")

    def test_duplicate_edge_across_maps_counted_once(self):
        graph, _ = build_dependency_graph(
            [_pkg("a", deps={"b": "1"}, dev={"b": "1"}, peer={"b": "1"}), _pkg("b")]
        )
        assert graph.adjacency["a"] == ("b",)
        assert graph.edge_count == 1

    def test_cycle_through_dev_and_peer_dependencies(self):
        _, cycles = build_dependency_graph(
            [_pkg("a", dev={"b": "1"}), _pkg("b", peer={"a": "1"})]
        )
        assert cycles.involves("a", "b")

    def test_reverse_edges(self):
        graph, _ = build_dependency_graph(
            [_pkg("app", deps={"core": "1"}), _pkg("cli", deps={"core": "1"}), _pkg("core")]
        )
        assert graph.dependents_of("core") == ("app", "cli")
        assert graph.dependents_of("app") == ()

    def test_nodes_keep_input_order(self):
        graph, _ = build_dependency_graph([_pkg("zeta"), _pkg("alpha"), _pkg("mid")])
        assert graph.nodes == ("zeta", "alpha", "mid")
        assert list(graph.to_dict()) == ["zeta", "alpha", "mid"]

    def test_three_package_cycle(self):
        _, cycles = build_dependency_graph(
            [
                _pkg("a", deps={"b": "1"}),
                _pkg("b", deps={"c": "1"}),
                _pkg("c", deps={"a": "1"}),
            ]
        )
        assert len(cycles) == 1
        assert cycles.cycles[0].nodes == ("a", "b", "c")
        assert cycles.issues() == ["Circular dependency: a -> b -> c -> a"]

    def test_pair_and_triangle_sharing_nodes(self):
        _, cycles = build_dependency_graph(
            [
                _pkg("a", deps={"b": "1"}),
                _pkg("b", deps={"c": "1"}),
                _pkg("c", deps={"a": "1", "b": "1"}),
            ]
        )
        assert [c.nodes for c in cycles] == [("b", "c"), ("a", "b", "c")]
        assert len(cycles.groups) == 1
        assert cycles.groups[0].nodes == frozenset({"a", "b", "c"})
        assert cycles.groups[0].internal_edge_count == 4

    def test_loops_sharing_a_closing_edge(self):
        _, cycles = build_dependency_graph(
            [
                _pkg("a", deps={"b": "1", "d": "1"}),
                _pkg("b", deps={"c": "1"}),
                _pkg("c", deps={"a": "1"}),
                _pkg("d", deps={"c": "1"}),
            ]
        )
        assert [c.nodes for c in cycles] == [("a", "b", "c"), ("a", "d", "c")]
        assert cycles.involves("a", "d", "c")
        assert cycles.issues() == [
            "Circular dependency: a -> b -> c -> a",
            "Circular dependency: a -> d -> c -> a",
        ]
        assert cycles.groups[0].nodes == frozenset({"a", "b", "c", "d"})

    def test_acyclic_graph_has_no_groups(self):
        _, cycles = build_dependency_graph(
            [_pkg("a", deps={"b": "1", "c": "1"}), _pkg("b", deps={"c": "1"}), _pkg("c")]
        )
        assert len(cycles) == 0
        assert cycles.groups == ()

    def test_deep_chain_does_not_recurse(self):
        n = 3000
        packages = [_pkg(f"p{i:04d}", deps={f"p{i + 1:04d}": "1"}) for i in range(n - 1)]
        packages.append(_pkg(f"p{n - 1:04d}", deps={"p0000": "1"}))
        graph, cycles = build_dependency_graph(packages)
        assert graph.edge_count == n
        assert len(cycles) == 1
        assert len(cycles.cycles[0].nodes) == n
        assert cycles.cycles[0].nodes[0] == "p0000"


# ── validate_descriptors ──────────────────────────────────────────


class TestValidateDescriptors:
    def test_duplicate_names_rejected(self):
        with pytest.raises(DuplicatePackageError) as exc_info:
            build_dependency_graph([_pkg("@x/a"), _pkg("@x/a")])
        assert exc_info.value.name == "@x/a"

    def test_empty_name_rejected(self):
        with pytest.raises(MissingDescriptorFieldError) as exc_info:
            validate_descriptors([PackageDescriptor(name="", path="packages/nameless")])
        assert exc_info.value.field_name == "name"
        assert exc_info.value.path == "packages/nameless"

    def test_errors_are_malformed_input(self):
        with pytest.raises(MalformedInputError):
            validate_descriptors([_pkg("a"), _pkg("b"), _pkg("a")])

    def test_unique_names_pass(self):
        validate_descriptors([_pkg("a"), _pkg("b")])
