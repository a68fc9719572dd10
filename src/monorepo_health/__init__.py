"""
Monorepo Health - dependency graph and package health checks for JS/TS workspaces

Loads every workspace package manifest, builds the internal dependency
graph, detects circular dependencies, scores each package against a fixed
checklist and turns the findings into prioritised recommendations.
"""

__version__ = "0.1.0"

from .api import analyze, run_health_check
from .graph import CycleReport, DependencyGraph, build_dependency_graph
from .models import HealthRecord, PackageDescriptor, Recommendation
from .recommendations import aggregate
from .report import HealthReport, build_report
from .scoring import health_status, score_package
from .signals import ExternalSignals

__all__ = [
    "analyze",  # Main entry point
    "run_health_check",
    "build_dependency_graph",
    "score_package",
    "health_status",
    "aggregate",
    "build_report",
    "CycleReport",
    "DependencyGraph",
    "ExternalSignals",
    "HealthRecord",
    "HealthReport",
    "PackageDescriptor",
    "Recommendation",
]
