"""Data models for the internal package dependency graph.

  Nodes: workspace package names (internal packages only)
  Edges: "depends on", drawn from dependencies, devDependencies and
         peerDependencies alike
  Derived: cycles (ordered paths) and cycle groups (strongly connected
           components with more than one member)
"""

from dataclasses import dataclass, field
from typing import Any, Iterator

# ── Graph ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class DependencyGraph:
    """Directed graph of internal dependencies.

    Edges are directed: adjacency[A] contains B means package A depends on B.
    ``nodes`` keeps the order packages were loaded in.
    """

    nodes: tuple[str, ...] = ()
    adjacency: dict[str, tuple[str, ...]] = field(default_factory=dict)
    reverse: dict[str, tuple[str, ...]] = field(default_factory=dict)
    edge_count: int = 0

    def has_edge(self, source: str, target: str) -> bool:
        return target in self.adjacency.get(source, ())

    def dependents_of(self, name: str) -> tuple[str, ...]:
        return self.reverse.get(name, ())

    def to_dict(self) -> dict[str, list[str]]:
        return {node: list(self.adjacency.get(node, ())) for node in self.nodes}


# ── Cycles ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Cycle:
    """A closed dependency loop, as the ordered path of packages on it.

    The path is rotated to start at its smallest name; the closing edge back
    to ``nodes[0]`` is implied.
    """

    nodes: tuple[str, ...]

    @property
    def is_pair(self) -> bool:
        return len(self.nodes) == 2

    @property
    def members(self) -> frozenset[str]:
        return frozenset(self.nodes)

    def describe(self) -> str:
        if self.is_pair:
            return f"{self.nodes[0]} <-> {self.nodes[1]}"
        return " -> ".join(self.nodes + self.nodes[:1])

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.nodes[0],
            "to": self.nodes[1] if len(self.nodes) > 1 else self.nodes[0],
            "path": list(self.nodes),
        }


@dataclass(frozen=True)
class CycleGroup:
    """A strongly connected component with more than one node."""

    nodes: frozenset[str]
    internal_edge_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"nodes": sorted(self.nodes), "internal_edges": self.internal_edge_count}


@dataclass(frozen=True)
class CycleReport:
    """Cycles found in a dependency graph. Empty means acyclic."""

    cycles: tuple[Cycle, ...] = ()
    groups: tuple[CycleGroup, ...] = ()

    def __len__(self) -> int:
        return len(self.cycles)

    def __iter__(self) -> Iterator[Cycle]:
        return iter(self.cycles)

    def involves(self, *names: str) -> bool:
        """True if some cycle contains every one of ``names``."""
        wanted = set(names)
        return any(wanted <= cycle.members for cycle in self.cycles)

    def issues(self) -> list[str]:
        return [f"Circular dependency: {cycle.describe()}" for cycle in self.cycles]

    def to_dict(self) -> dict[str, Any]:
        return {
            "cycles": [c.to_dict() for c in self.cycles],
            "groups": [g.to_dict() for g in self.groups],
        }


# ── Version consistency ────────────────────────────────────────────


@dataclass(frozen=True)
class VersionMismatch:
    """A dependency declared with different specifiers across packages."""

    dependency: str
    versions: dict[str, str] = field(default_factory=dict)  # package -> specifier

    def describe(self) -> str:
        listed = ", ".join(f"{pkg}@{spec}" for pkg, spec in self.versions.items())
        return f"Inconsistent versions of {self.dependency}: {listed}"

    def to_dict(self) -> dict[str, Any]:
        return {"dependency": self.dependency, "versions": dict(self.versions)}
