"""Package health scoring against the unified checklist.

A package starts at 100 points. Each failed check takes off a fixed number
of points (see ``ScoringWeights``); the final score is clamped at 0. Checks
whose signal is absent are skipped entirely. A missing package.json is
terminal: nothing else can be judged, so the score goes straight to 0.
"""

import math
from typing import Optional

from .config import ScoringWeights, StatusThresholds
from .logging_config import get_logger
from .models import (
    METRIC_BUILD_TIME,
    METRIC_BUNDLE_SIZE,
    METRIC_OUTDATED_DEPS,
    METRIC_TEST_COVERAGE,
    METRIC_VULNERABILITIES,
    HealthRecord,
    HealthStatus,
    PackageDescriptor,
)
from .signals.base import ExternalSignals

logger = get_logger(__name__)

MAX_SCORE = 100
MISSING_MANIFEST_ISSUE = "Missing package.json"


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's)."""
    return math.floor(value + 0.5)


def health_status(score: int, thresholds: Optional[StatusThresholds] = None) -> HealthStatus:
    """Map a 0-100 score to its status tier."""
    t = thresholds or StatusThresholds()
    if score >= t.excellent:
        return "excellent"
    if score >= t.good:
        return "good"
    if score >= t.fair:
        return "fair"
    if score >= t.poor:
        return "poor"
    return "critical"


class _Checklist:
    """Accumulates issues and deductions for one package."""

    def __init__(self) -> None:
        self.issues: list[str] = []
        self.deductions: list[tuple[str, int]] = []
        self.metrics: dict[str, float] = {}

    def fail(self, issue: str, points: int) -> None:
        self.issues.append(issue)
        if points > 0:
            self.deductions.append((issue, points))

    @property
    def score(self) -> int:
        return max(0, MAX_SCORE - sum(points for _, points in self.deductions))


def score_package(
    descriptor: PackageDescriptor,
    signals: Optional[ExternalSignals] = None,
    weights: Optional[ScoringWeights] = None,
    thresholds: Optional[StatusThresholds] = None,
) -> HealthRecord:
    """Score one package from its gathered signals.

    Signal-gathering errors are listed as issues after the checklist
    findings and never cost points.
    """
    signals = signals or ExternalSignals()
    w = weights or ScoringWeights()
    checks = _Checklist()

    if signals.manifest_found is False:
        checks.fail(MISSING_MANIFEST_ISSUE, MAX_SCORE)
    else:
        _check_manifest(checks, signals, w)
        _check_layout(checks, signals, w)
        _check_measurements(checks, signals, w)

    checks.issues.extend(signals.errors)

    score = checks.score
    record = HealthRecord(
        package=descriptor.name,
        score=score,
        status=health_status(score, thresholds),
        issues=tuple(checks.issues),
        metrics=checks.metrics,
        deductions=tuple(checks.deductions),
    )
    logger.debug(f"{descriptor.name}: score {record.score} ({record.status})")
    return record


def _check_manifest(checks: _Checklist, signals: ExternalSignals, w: ScoringWeights) -> None:
    for field_name in signals.missing_fields or ():
        checks.fail(f"Missing {field_name} in package.json", w.missing_field)
    for script in signals.missing_scripts or ():
        checks.fail(f"Missing {script} script", w.missing_script)


def _check_layout(checks: _Checklist, signals: ExternalSignals, w: ScoringWeights) -> None:
    if signals.has_tsconfig is False:
        checks.fail("Missing tsconfig.json", w.missing_tsconfig)
    if signals.has_src is False:
        checks.fail("Missing src directory", w.missing_src)
    if signals.has_tests is False:
        checks.fail("Missing tests directory", w.missing_tests)
    if signals.has_readme is False:
        checks.fail("Missing README.md", w.missing_readme)


def _check_measurements(checks: _Checklist, signals: ExternalSignals, w: ScoringWeights) -> None:
    if signals.tests_passed is False:
        checks.fail("Tests failed", w.tests_failed)

    if signals.coverage is not None:
        coverage = signals.coverage
        checks.metrics[METRIC_TEST_COVERAGE] = coverage
        if coverage < w.coverage_target:
            checks.fail(
                f"Low test coverage: {coverage:g}%",
                round_half_up((w.coverage_target - coverage) / 2),
            )

    if signals.bundle_size_kb is not None:
        size = signals.bundle_size_kb
        checks.metrics[METRIC_BUNDLE_SIZE] = size
        if size > w.bundle_size_limit_kb:
            checks.fail(f"Large bundle size: {size:g}KB", w.large_bundle)

    if signals.outdated_count is not None:
        count = signals.outdated_count
        checks.metrics[METRIC_OUTDATED_DEPS] = count
        if count > 0:
            checks.fail(
                f"{count} outdated dependencies", min(count * w.outdated_per_dep, w.outdated_cap)
            )

    if signals.vulnerability_count is not None:
        count = signals.vulnerability_count
        checks.metrics[METRIC_VULNERABILITIES] = count
        if count > 0:
            checks.fail(
                f"{count} security vulnerabilities",
                min(count * w.vulnerability_per_issue, w.vulnerability_cap),
            )

    if signals.build_time_ms is not None:
        checks.metrics[METRIC_BUILD_TIME] = signals.build_time_ms
