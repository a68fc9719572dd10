"""Data models shared across the health-check pipeline."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

HealthStatus = Literal["excellent", "good", "fair", "poor", "critical"]
RecommendationType = Literal["package", "architecture", "performance"]
Priority = Literal["high", "medium"]

# Metric keys as they appear in the JSON report
METRIC_TEST_COVERAGE = "testCoverage"
METRIC_BUNDLE_SIZE = "bundleSize"
METRIC_OUTDATED_DEPS = "outdatedDeps"
METRIC_VULNERABILITIES = "vulnerabilities"
METRIC_BUILD_TIME = "buildTime"


@dataclass(frozen=True)
class PackageDescriptor:
    """One workspace member, as declared by its manifest.

    ``name`` is the graph node identity and must be unique within a run.
    ``manifest`` is the raw package.json mapping, or None when the file is
    missing on disk.
    """

    name: str
    path: str = ""
    dependencies: Dict[str, str] = field(default_factory=dict)
    dev_dependencies: Dict[str, str] = field(default_factory=dict)
    peer_dependencies: Dict[str, str] = field(default_factory=dict)
    manifest: Optional[Dict[str, Any]] = None

    @property
    def version(self) -> Optional[str]:
        if self.manifest is None:
            return None
        value = self.manifest.get("version")
        return str(value) if value is not None else None

    def all_dependency_names(self) -> List[str]:
        """Union of dependency names in declaration order, each name once."""
        seen: Dict[str, None] = {}
        for deps in (self.dependencies, self.dev_dependencies, self.peer_dependencies):
            for dep_name in deps:
                seen.setdefault(dep_name, None)
        return list(seen)

    @classmethod
    def from_manifest(
        cls, manifest: Mapping[str, Any], path: str = "", name: Optional[str] = None
    ) -> "PackageDescriptor":
        """Build a descriptor from a parsed package.json mapping.

        An explicit ``name`` wins over the manifest's own name field.
        """
        return cls(
            name=name or str(manifest.get("name") or ""),
            path=path,
            dependencies=_as_dep_map(manifest.get("dependencies")),
            dev_dependencies=_as_dep_map(manifest.get("devDependencies")),
            peer_dependencies=_as_dep_map(manifest.get("peerDependencies")),
            manifest=dict(manifest),
        )


def _as_dep_map(value: Any) -> Dict[str, str]:
    if not isinstance(value, Mapping):
        return {}
    return {str(k): str(v) for k, v in value.items()}


@dataclass(frozen=True)
class HealthRecord:
    """Health score for a single package in a single run."""

    package: str
    score: int
    status: HealthStatus
    issues: Tuple[str, ...] = ()
    metrics: Dict[str, float] = field(default_factory=dict)
    deductions: Tuple[Tuple[str, int], ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "status": self.status,
            "issues": list(self.issues),
            "metrics": dict(self.metrics),
            "deductions": [{"reason": r, "points": p} for r, p in self.deductions],
        }


@dataclass(frozen=True)
class Recommendation:
    """An action item produced by the aggregator."""

    type: RecommendationType
    priority: Priority
    message: str
    actions: Tuple[str, ...] = ()
    package: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type,
            "priority": self.priority,
            "message": self.message,
            "actions": list(self.actions),
        }
        if self.package is not None:
            data["package"] = self.package
        return data


@dataclass(frozen=True)
class WorkspaceConfigRecord:
    """Score for root-level workspace configuration files."""

    score: int
    status: HealthStatus
    issues: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "status": self.status, "issues": list(self.issues)}
