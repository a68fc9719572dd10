"""Tests for the shared data models."""

from monorepo_health.models import HealthRecord, PackageDescriptor, WorkspaceConfigRecord


class TestPackageDescriptor:
    def test_from_manifest(self):
        descriptor = PackageDescriptor.from_manifest(
            {
                "name": "@x/a",
                "version": "2.1.0",
                "dependencies": {"@x/b": "workspace:*"},
                "devDependencies": {"vitest": "^1.0.0"},
                "peerDependencies": {"react": ">=18"},
            },
            path="packages/a",
        )
        assert descriptor.name == "@x/a"
        assert descriptor.path == "packages/a"
        assert descriptor.version == "2.1.0"
        assert descriptor.dependencies == {"@x/b": "workspace:*"}
        assert descriptor.dev_dependencies == {"vitest": "^1.0.0"}
        assert descriptor.peer_dependencies == {"react": ">=18"}

    def test_malformed_dependency_maps_are_empty(self):
        descriptor = PackageDescriptor.from_manifest(
            {"name": "a", "dependencies": ["oops"], "devDependencies": None}
        )
        assert descriptor.dependencies == {}
        assert descriptor.dev_dependencies == {}

    def test_explicit_name_wins(self):
        descriptor = PackageDescriptor.from_manifest({"name": "a"}, name="b")
        assert descriptor.name == "b"

    def test_all_dependency_names_ordered_and_unique(self):
        descriptor = PackageDescriptor(
            name="a",
            dependencies={"b": "1", "c": "1"},
            dev_dependencies={"c": "1", "d": "1"},
            peer_dependencies={"b": "1", "e": "1"},
        )
        assert descriptor.all_dependency_names() == ["b", "c", "d", "e"]

    def test_no_manifest_has_no_version(self):
        assert PackageDescriptor(name="a").version is None


class TestRecords:
    def test_health_record_to_dict(self):
        record = HealthRecord(
            package="a",
            score=90,
            status="excellent",
            issues=("Missing README.md", "3 outdated dependencies"),
            metrics={"outdatedDeps": 3},
            deductions=(("Missing README.md", 5), ("3 outdated dependencies", 6)),
        )
        assert record.to_dict() == {
            "score": 90,
            "status": "excellent",
            "issues": ["Missing README.md", "3 outdated dependencies"],
            "metrics": {"outdatedDeps": 3},
            "deductions": [
                {"reason": "Missing README.md", "points": 5},
                {"reason": "3 outdated dependencies", "points": 6},
            ],
        }

    def test_workspace_config_record_to_dict(self):
        record = WorkspaceConfigRecord(score=80, status="good", issues=("Missing nx.json",))
        assert record.to_dict() == {"score": 80, "status": "good", "issues": ["Missing nx.json"]}
