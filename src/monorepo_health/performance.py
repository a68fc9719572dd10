"""Build performance findings from gathered signals."""

from dataclasses import dataclass, field
from typing import Any, Mapping

from .signals.base import ExternalSignals

DEFAULT_SLOW_BUILD_MS = 30000


@dataclass(frozen=True)
class PerformanceSummary:
    """Build timings per package plus the findings they triggered."""

    build_time: dict[str, float] = field(default_factory=dict)
    issues: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"buildTime": dict(self.build_time), "issues": list(self.issues)}


def performance_findings(
    signals_by_package: Mapping[str, ExternalSignals],
    slow_build_ms: float = DEFAULT_SLOW_BUILD_MS,
) -> PerformanceSummary:
    """Flag failed and slow builds, in package order."""
    build_time: dict[str, float] = {}
    issues: list[str] = []

    for name, signals in signals_by_package.items():
        if signals.build_passed is False:
            issues.append(f"Build failed for {name}")
            continue
        if signals.build_time_ms is None:
            continue
        build_time[name] = signals.build_time_ms
        if signals.build_time_ms > slow_build_ms:
            issues.append(f"Slow build time for {name}: {signals.build_time_ms:g}ms")

    return PerformanceSummary(build_time=build_time, issues=tuple(issues))
