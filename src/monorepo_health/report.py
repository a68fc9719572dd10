"""Assemble the health report from the pure pipeline stages."""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from .config import HealthConfig
from .graph import (
    CycleReport,
    DependencyGraph,
    VersionMismatch,
    build_dependency_graph,
    find_version_mismatches,
)
from .logging_config import get_logger
from .models import (
    HealthRecord,
    HealthStatus,
    PackageDescriptor,
    Recommendation,
    WorkspaceConfigRecord,
)
from .performance import PerformanceSummary, performance_findings
from .recommendations import aggregate
from .scoring import MAX_SCORE, health_status, round_half_up, score_package
from .signals.base import ExternalSignals

logger = get_logger(__name__)


@dataclass(frozen=True)
class DependencySummary:
    """Dependency section of the report."""

    graph: DependencyGraph = field(default_factory=DependencyGraph)
    cycles: CycleReport = field(default_factory=CycleReport)
    version_mismatches: tuple[VersionMismatch, ...] = ()

    @property
    def issues(self) -> list[str]:
        return self.cycles.issues() + [m.describe() for m in self.version_mismatches]

    def to_dict(self) -> dict[str, Any]:
        return {
            "graph": self.graph.to_dict(),
            "cycles": [c.to_dict() for c in self.cycles],
            "cycleGroups": [g.to_dict() for g in self.cycles.groups],
            "versionMismatches": [m.to_dict() for m in self.version_mismatches],
            "issues": self.issues,
        }


@dataclass(frozen=True)
class HealthReport:
    """Everything one health-check run produced."""

    timestamp: str
    overall_score: int
    overall_status: HealthStatus
    packages: dict[str, HealthRecord] = field(default_factory=dict)
    dependencies: DependencySummary = field(default_factory=DependencySummary)
    performance: PerformanceSummary = field(default_factory=PerformanceSummary)
    config: Optional[WorkspaceConfigRecord] = None
    recommendations: tuple[Recommendation, ...] = ()

    @property
    def overall(self) -> dict[str, Any]:
        return {"score": self.overall_score, "status": self.overall_status}

    def to_dict(self) -> dict[str, Any]:
        """Stable JSON shape consumed by the JSON and HTML renderers."""
        return {
            "timestamp": self.timestamp,
            "overall": self.overall,
            "packages": {name: record.to_dict() for name, record in self.packages.items()},
            "dependencies": self.dependencies.to_dict(),
            "performance": self.performance.to_dict(),
            "config": self.config.to_dict() if self.config is not None else None,
            "recommendations": [r.to_dict() for r in self.recommendations],
        }


def overall_score(package_scores: Iterable[int], config_score: Optional[int] = None) -> int:
    """Rounded mean of package scores and the workspace config score."""
    scores = list(package_scores)
    if config_score is not None:
        scores.append(config_score)
    if not scores:
        return MAX_SCORE
    return round_half_up(sum(scores) / len(scores))


def build_report(
    descriptors: Sequence[PackageDescriptor],
    signals_by_package: Optional[Mapping[str, ExternalSignals]] = None,
    workspace_record: Optional[WorkspaceConfigRecord] = None,
    config: Optional[HealthConfig] = None,
    now: Optional[datetime] = None,
) -> HealthReport:
    """Run graph building, scoring and aggregation over loaded data.

    Pure apart from reading the clock when ``now`` is not given.

    Raises:
        MalformedInputError: Duplicate or nameless descriptors
    """
    config = config or HealthConfig()
    signals_by_package = signals_by_package or {}

    graph, cycles = build_dependency_graph(descriptors)
    dependencies = DependencySummary(
        graph=graph,
        cycles=cycles,
        version_mismatches=tuple(find_version_mismatches(descriptors)),
    )

    packages = {
        d.name: score_package(d, signals_by_package.get(d.name), config.scoring, config.thresholds)
        for d in descriptors
    }

    ordered_signals = {
        d.name: signals_by_package[d.name] for d in descriptors if d.name in signals_by_package
    }
    performance = performance_findings(ordered_signals, config.slow_build_ms)

    recommendations = aggregate(
        packages.values(),
        cycles,
        performance.issues,
        attention_below=config.recommend_below,
        high_priority_below=config.high_priority_below,
    )

    score = overall_score(
        (r.score for r in packages.values()),
        workspace_record.score if workspace_record is not None else None,
    )
    timestamp = (now or datetime.now(timezone.utc)).isoformat(timespec="milliseconds")

    logger.info(
        f"Health report: {len(packages)} packages, overall {score}, "
        f"{len(cycles)} cycles, {len(recommendations)} recommendations"
    )
    return HealthReport(
        timestamp=timestamp,
        overall_score=score,
        overall_status=health_status(score, config.thresholds),
        packages=packages,
        dependencies=dependencies,
        performance=performance,
        config=workspace_record,
        recommendations=tuple(recommendations),
    )
