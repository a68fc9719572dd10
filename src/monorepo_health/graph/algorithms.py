"""Graph algorithms: strongly connected components and elementary cycles."""

from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence

from ..logging_config import get_logger
from .models import Cycle, CycleGroup

logger = get_logger(__name__)

# Dense tangles have exponentially many loops; enumeration stops here.
MAX_CYCLES = 1000


def strongly_connected_components(
    adjacency: Mapping[str, Sequence[str]], nodes: Sequence[str]
) -> list[set[str]]:
    """Kosaraju's two-pass algorithm, restricted to ``nodes``.

    Both passes run on explicit stacks, so long dependency chains never
    touch Python's recursion limit. Edges leaving ``nodes`` are ignored.
    """
    members = set(nodes)

    def successors(node: str) -> list[str]:
        return [w for w in adjacency.get(node, ()) if w in members]

    # Pass 1: order nodes by DFS finish time
    finished: list[str] = []
    seen: set[str] = set()
    for root in nodes:
        if root in seen:
            continue
        seen.add(root)
        stack = [(root, iter(successors(root)))]
        while stack:
            node, pending = stack[-1]
            child = next((w for w in pending if w not in seen), None)
            if child is None:
                stack.pop()
                finished.append(node)
            else:
                seen.add(child)
                stack.append((child, iter(successors(child))))

    # Pass 2: flood the transposed graph in reverse finish order
    incoming: dict[str, list[str]] = {node: [] for node in nodes}
    for node in nodes:
        for w in successors(node):
            incoming[w].append(node)

    components: list[set[str]] = []
    assigned: set[str] = set()
    for root in reversed(finished):
        if root in assigned:
            continue
        assigned.add(root)
        component = {root}
        frontier = [root]
        while frontier:
            for w in incoming[frontier.pop()]:
                if w not in assigned:
                    assigned.add(w)
                    component.add(w)
                    frontier.append(w)
        components.append(component)
    return components


def find_cycles(
    adjacency: Mapping[str, Sequence[str]],
    nodes: Iterable[str],
    limit: int = MAX_CYCLES,
) -> list[Cycle]:
    """Every elementary cycle, via Johnson's algorithm on each tangled region.

    Each SCC with more than one member is searched for loops through its
    smallest node; that node is then removed and the SCCs of the remainder
    are searched in turn. Rotations and reversals of the same loop are
    reported once. Stops after ``limit`` distinct cycles.
    """
    found: dict[tuple[str, ...], Cycle] = {}
    pending = [c for c in strongly_connected_components(adjacency, list(nodes)) if len(c) > 1]

    while pending:
        component = pending.pop()
        start = min(component)
        for path in _circuits_through(start, adjacency, component):
            _record(found, path)
            if len(found) >= limit:
                logger.warning(
                    f"Stopped after {limit} cycles; cycle groups list the full membership"
                )
                return list(found.values())

        rest = sorted(component - {start})
        pending.extend(
            c for c in strongly_connected_components(adjacency, rest) if len(c) > 1
        )

    return list(found.values())


def _circuits_through(
    start: str, adjacency: Mapping[str, Sequence[str]], members: set[str]
) -> Iterable[tuple[str, ...]]:
    """Johnson's circuit search: loops from ``start`` back to itself.

    A node stays blocked until some loop through it is closed; ``waiting``
    records which blocked nodes to release when that happens.
    """

    def successors(node: str) -> list[str]:
        return [w for w in adjacency.get(node, ()) if w in members]

    path = [start]
    blocked = {start}
    closed: set[str] = set()
    waiting: dict[str, set[str]] = defaultdict(set)
    stack = [(start, successors(start))]

    while stack:
        node, remaining = stack[-1]
        if remaining:
            nxt = remaining.pop()
            if nxt == start:
                yield tuple(path)
                closed.update(path)
            elif nxt not in blocked:
                path.append(nxt)
                blocked.add(nxt)
                closed.discard(nxt)
                stack.append((nxt, successors(nxt)))
                continue

        if not remaining:
            if node in closed:
                _unblock(node, blocked, waiting)
            else:
                for w in successors(node):
                    waiting[w].add(node)
            stack.pop()
            path.pop()


def _unblock(node: str, blocked: set[str], waiting: dict[str, set[str]]) -> None:
    release = [node]
    while release:
        current = release.pop()
        if current in blocked:
            blocked.discard(current)
            release.extend(waiting[current])
            waiting[current].clear()


def find_mutual_pairs(adjacency: Mapping[str, Sequence[str]]) -> list[Cycle]:
    """Direct two-party cycles: A depends on B and B depends on A."""
    found: dict[tuple[str, ...], Cycle] = {}
    for source, targets in adjacency.items():
        for target in targets:
            if target != source and source in adjacency.get(target, ()):
                _record(found, (source, target))
    return list(found.values())


def merge_cycles(*groups: Iterable[Cycle]) -> list[Cycle]:
    """Union of cycle lists, de-duplicated, shortest first then by name."""
    merged: dict[tuple[str, ...], Cycle] = {}
    for group in groups:
        for cycle in group:
            merged.setdefault(cycle_key(cycle.nodes), cycle)
    return sorted(merged.values(), key=lambda c: (len(c.nodes), c.nodes))


def cycle_key(path: Sequence[str]) -> tuple[str, ...]:
    """Canonical identity of a loop, independent of start node and direction."""
    forward = _rotate_to_min(tuple(path))
    backward = _rotate_to_min(tuple(reversed(path)))
    return min(forward, backward)


def _rotate_to_min(path: tuple[str, ...]) -> tuple[str, ...]:
    start = path.index(min(path))
    return path[start:] + path[:start]


def _record(found: dict[tuple[str, ...], Cycle], path: tuple[str, ...]) -> None:
    key = cycle_key(path)
    if key not in found:
        found[key] = Cycle(nodes=_rotate_to_min(path))


def cycle_groups(adjacency: Mapping[str, Sequence[str]], nodes: Sequence[str]) -> list[CycleGroup]:
    """SCCs with more than one member, with their internal edge counts."""
    groups: list[CycleGroup] = []
    for scc in strongly_connected_components(adjacency, nodes):
        if len(scc) > 1:
            internal_edges = sum(
                1 for n in scc for neighbor in adjacency.get(n, ()) if neighbor in scc
            )
            groups.append(CycleGroup(nodes=frozenset(scc), internal_edge_count=internal_edges))
    return sorted(groups, key=lambda g: sorted(g.nodes))
