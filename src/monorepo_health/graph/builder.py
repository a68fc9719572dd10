"""Internal dependency graph construction from package descriptors."""

from collections.abc import Sequence

from ..exceptions import DuplicatePackageError, MissingDescriptorFieldError
from ..logging_config import get_logger
from ..models import PackageDescriptor
from .algorithms import cycle_groups, find_cycles, find_mutual_pairs, merge_cycles
from .models import CycleReport, DependencyGraph

logger = get_logger(__name__)


def build_dependency_graph(
    descriptors: Sequence[PackageDescriptor],
) -> tuple[DependencyGraph, CycleReport]:
    """Build the internal dependency graph and detect cycles.

    Only dependencies naming another loaded package become edges; external
    (third-party) names and self references are dropped. Cycles are data,
    never errors.

    Raises:
        DuplicatePackageError: Two descriptors share a name
        MissingDescriptorFieldError: A descriptor has an empty name
    """
    validate_descriptors(descriptors)

    nodes = tuple(d.name for d in descriptors)
    internal = set(nodes)
    adjacency: dict[str, tuple[str, ...]] = {}
    reverse: dict[str, list[str]] = {name: [] for name in nodes}
    edge_count = 0

    for descriptor in descriptors:
        edges = tuple(
            dep
            for dep in descriptor.all_dependency_names()
            if dep in internal and dep != descriptor.name
        )
        adjacency[descriptor.name] = edges
        for dep in edges:
            reverse[dep].append(descriptor.name)
        edge_count += len(edges)

    graph = DependencyGraph(
        nodes=nodes,
        adjacency=adjacency,
        reverse={name: tuple(sources) for name, sources in reverse.items()},
        edge_count=edge_count,
    )

    cycles = merge_cycles(find_cycles(adjacency, nodes), find_mutual_pairs(adjacency))
    report = CycleReport(cycles=tuple(cycles), groups=tuple(cycle_groups(adjacency, nodes)))

    logger.debug(
        f"Dependency graph: {len(nodes)} packages, {edge_count} internal edges, "
        f"{len(report)} cycles"
    )
    return graph, report


def validate_descriptors(descriptors: Sequence[PackageDescriptor]) -> None:
    """Fail fast on descriptor sets the graph cannot key by name."""
    seen: dict[str, str] = {}
    for descriptor in descriptors:
        if not descriptor.name:
            raise MissingDescriptorFieldError("name", descriptor.path)
        if descriptor.name in seen:
            raise DuplicatePackageError(descriptor.name, [seen[descriptor.name], descriptor.path])
        seen[descriptor.name] = descriptor.path
