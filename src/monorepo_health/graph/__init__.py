"""Internal dependency graph: construction, cycles, version consistency."""

from .builder import build_dependency_graph, validate_descriptors
from .models import Cycle, CycleGroup, CycleReport, DependencyGraph, VersionMismatch
from .versions import find_version_mismatches

__all__ = [
    "build_dependency_graph",
    "validate_descriptors",
    "find_version_mismatches",
    "Cycle",
    "CycleGroup",
    "CycleReport",
    "DependencyGraph",
    "VersionMismatch",
]
