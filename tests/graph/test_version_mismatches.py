"""Tests for graph/versions.py - shared dependency version drift."""

from monorepo_health.graph import VersionMismatch, find_version_mismatches
from monorepo_health.models import PackageDescriptor


def _pkg(name, deps=None, dev=None, peer=None):
    return PackageDescriptor(
        name=name,
        dependencies=dict(deps or {}),
        dev_dependencies=dict(dev or {}),
        peer_dependencies=dict(peer or {}),
        manifest={"name": name},
    )


class TestFindVersionMismatches:
    def test_no_shared_dependencies(self):
        assert find_version_mismatches([_pkg("a", deps={"react": "^18"}), _pkg("b")]) == []

    def test_matching_versions_are_in_sync(self):
        packages = [_pkg("a", deps={"lodash": "4.17.21"}), _pkg("b", deps={"lodash": "4.17.21"})]
        assert find_version_mismatches(packages) == []

    def test_runtime_and_dev_compared_together(self):
        mismatches = find_version_mismatches(
            [_pkg("a", deps={"react": "^18.2.0"}), _pkg("b", dev={"react": "^18.3.0"})]
        )
        assert mismatches == [
            VersionMismatch(dependency="react", versions={"a": "^18.2.0", "b": "^18.3.0"})
        ]

    def test_peer_ranges_ignored(self):
        packages = [_pkg("a", deps={"react": "^18.2.0"}), _pkg("b", peer={"react": ">=17"})]
        assert find_version_mismatches(packages) == []

    def test_dev_entry_wins_within_a_package(self):
        packages = [_pkg("a", deps={"x": "1.0.0"}, dev={"x": "2.0.0"}), _pkg("b", deps={"x": "2.0.0"})]
        assert find_version_mismatches(packages) == []

    def test_sorted_by_dependency_name(self):
        mismatches = find_version_mismatches(
            [
                _pkg("a", deps={"zod": "3.0.0", "axios": "1.0.0"}),
                _pkg("b", deps={"zod": "3.1.0", "axios": "1.1.0"}),
            ]
        )
        assert [m.dependency for m in mismatches] == ["axios", "zod"]

    def test_describe(self):
        mismatch = VersionMismatch(dependency="react", versions={"a": "^18.2.0", "b": "^18.3.0"})
        assert mismatch.describe() == "Inconsistent versions of react: a@^18.2.0, b@^18.3.0"
