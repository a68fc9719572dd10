"""Shared test fixtures for monorepo-health tests."""

import json
import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path_factory):
    """Keep a developer's ~/.monorepo-health.toml and env vars out of tests."""
    monkeypatch.setenv("HOME", str(tmp_path_factory.mktemp("home")))
    for key in list(os.environ):
        if key.startswith("MONOREPO_HEALTH_"):
            monkeypatch.delenv(key)


COMPLETE_MANIFEST = {
    "version": "1.0.0",
    "description": "A package",
    "main": "dist/index.js",
    "types": "dist/index.d.ts",
    "scripts": {
        "build": "tsup",
        "test": "vitest run",
        "lint": "eslint src",
        "typecheck": "tsc --noEmit",
    },
}


class WorkspaceBuilder:
    """Writes a throwaway monorepo layout under a temporary directory."""

    def __init__(self, root: Path):
        self.root = root

    def add_package(
        self,
        name,
        dir_name=None,
        dependencies=None,
        dev_dependencies=None,
        peer_dependencies=None,
        complete=True,
        layout=True,
        **manifest_fields,
    ) -> Path:
        package_dir = self.root / "packages" / (dir_name or name.split("/")[-1])
        package_dir.mkdir(parents=True, exist_ok=True)
        manifest = {"name": name}
        if complete:
            manifest.update(json.loads(json.dumps(COMPLETE_MANIFEST)))
        if dependencies:
            manifest["dependencies"] = dependencies
        if dev_dependencies:
            manifest["devDependencies"] = dev_dependencies
        if peer_dependencies:
            manifest["peerDependencies"] = peer_dependencies
        manifest.update(manifest_fields)
        (package_dir / "package.json").write_text(json.dumps(manifest), encoding="utf-8")
        if layout:
            (package_dir / "src").mkdir(exist_ok=True)
            (package_dir / "tests").mkdir(exist_ok=True)
            (package_dir / "tsconfig.json").write_text("{}", encoding="utf-8")
            (package_dir / "README.md").write_text(f"# {name}\n", encoding="utf-8")
        return package_dir

    def add_root_files(self, *paths: str) -> None:
        for rel in paths:
            target = self.root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text("", encoding="utf-8")

    def write(self, rel: str, content: str) -> Path:
        target = self.root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target


@pytest.fixture
def workspace(tmp_path):
    """Empty workspace root with a builder for packages and root files."""
    return WorkspaceBuilder(tmp_path)
