"""Tests for report.py - assembling the full health report."""

import json
from datetime import datetime, timezone

import pytest

from monorepo_health.config import HealthConfig
from monorepo_health.exceptions import DuplicatePackageError
from monorepo_health.models import PackageDescriptor, WorkspaceConfigRecord
from monorepo_health.report import build_report, overall_score
from monorepo_health.signals import ExternalSignals

NOW = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def _pkg(name, deps=None, dev=None, manifest=True):
    return PackageDescriptor(
        name=name,
        path=f"packages/{name.split('/')[-1]}",
        dependencies=dict(deps or {}),
        dev_dependencies=dict(dev or {}),
        manifest={"name": name} if manifest else None,
    )


class TestOverallScore:
    def test_no_scores(self):
        assert overall_score([]) == 100

    def test_mean_rounds_half_up(self):
        assert overall_score([95, 90]) == 93

    def test_config_score_counts_as_one_entry(self):
        assert overall_score([100, 100], config_score=40) == 80

    def test_config_score_alone(self):
        assert overall_score([], config_score=70) == 70


class TestBuildReport:
    def test_empty_workspace(self):
        report = build_report([], now=NOW)
        assert report.overall == {"score": 100, "status": "excellent"}
        assert report.packages == {}
        assert report.recommendations == ()

    def test_timestamp_iso_format(self):
        report = build_report([_pkg("a")], now=NOW)
        assert report.timestamp == "2024-01-02T03:04:05.000+00:00"

    def test_cycle_reported_in_dependencies_and_recommendations(self):
        report = build_report(
            [_pkg("@x/a", deps={"@x/b": "1.0.0"}), _pkg("@x/b", deps={"@x/a": "1.0.0"})],
            now=NOW,
        )
        assert report.dependencies.graph.to_dict() == {"@x/a": ["@x/b"], "@x/b": ["@x/a"]}
        assert report.dependencies.issues == ["Circular dependency: @x/a <-> @x/b"]
        assert [r.type for r in report.recommendations] == ["architecture"]

    def test_version_mismatches_are_dependency_issues(self):
        report = build_report(
            [_pkg("a", deps={"react": "^18.2.0"}), _pkg("b", dev={"react": "^17.0.0"})], now=NOW
        )
        assert report.dependencies.issues == [
            "Inconsistent versions of react: a@^18.2.0, b@^17.0.0"
        ]
        assert report.recommendations == ()

    def test_packages_scored_from_signals(self):
        signals = {
            "good": ExternalSignals(manifest_found=True, has_src=True),
            "bad": ExternalSignals(manifest_found=False),
        }
        report = build_report([_pkg("good"), _pkg("bad", manifest=False)], signals, now=NOW)
        assert report.packages["good"].score == 100
        assert report.packages["bad"].score == 0
        assert report.packages["bad"].status == "critical"
        assert report.overall_score == 50
        assert report.overall_status == "critical"
        assert report.recommendations[0].package == "bad"
        assert report.recommendations[0].priority == "high"

    def test_packages_keep_descriptor_order(self):
        report = build_report([_pkg("zeta"), _pkg("alpha")], now=NOW)
        assert list(report.packages) == ["zeta", "alpha"]

    def test_workspace_config_included_in_overall(self):
        record = WorkspaceConfigRecord(score=40, status="critical", issues=("Missing nx.json",))
        report = build_report([_pkg("a"), _pkg("b")], workspace_record=record, now=NOW)
        assert report.overall_score == 80
        assert report.config == record

    def test_performance_findings_feed_recommendations(self):
        signals = {"a": ExternalSignals(build_passed=True, build_time_ms=60000)}
        report = build_report([_pkg("a")], signals, now=NOW)
        assert report.performance.issues == ("Slow build time for a: 60000ms",)
        assert report.recommendations[-1].type == "performance"

    def test_config_thresholds_applied(self):
        config = HealthConfig(recommend_below=100, high_priority_below=50)
        signals = {"a": ExternalSignals(has_readme=False)}
        report = build_report([_pkg("a")], signals, config=config, now=NOW)
        assert [(r.message, r.priority) for r in report.recommendations] == [
            ("Package a needs attention (score: 95)", "medium")
        ]

    def test_duplicate_names_rejected(self):
        with pytest.raises(DuplicatePackageError):
            build_report([_pkg("a"), _pkg("a")], now=NOW)


class TestReportToDict:
    def test_shape(self):
        report = build_report(
            [_pkg("@x/a", deps={"@x/b": "1"}), _pkg("@x/b", deps={"@x/a": "1"})],
            workspace_record=WorkspaceConfigRecord(score=100, status="excellent"),
            now=NOW,
        )
        data = report.to_dict()
        assert set(data) == {
            "timestamp",
            "overall",
            "packages",
            "dependencies",
            "performance",
            "config",
            "recommendations",
        }
        assert set(data["dependencies"]) == {
            "graph",
            "cycles",
            "cycleGroups",
            "versionMismatches",
            "issues",
        }
        assert data["dependencies"]["cycles"] == [
            {"from": "@x/a", "to": "@x/b", "path": ["@x/a", "@x/b"]}
        ]
        assert data["config"] == {"score": 100, "status": "excellent", "issues": []}

    def test_json_serializable(self):
        signals = {"a": ExternalSignals(coverage=72.5, build_time_ms=1500)}
        report = build_report([_pkg("a")], signals, now=NOW)
        data = json.loads(json.dumps(report.to_dict()))
        assert data["packages"]["a"]["metrics"] == {"testCoverage": 72.5, "buildTime": 1500}
        assert data["config"] is None
