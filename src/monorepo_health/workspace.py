"""Workspace loading: package manifests and root-level configuration checks."""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Optional

from .config import HealthConfig, StatusThresholds, WorkspaceCheck
from .exceptions import ManifestError
from .logging_config import get_logger
from .models import PackageDescriptor, WorkspaceConfigRecord
from .scoring import MAX_SCORE, health_status

logger = get_logger(__name__)

MANIFEST_NAME = "package.json"
_SKIP_PARTS = {"node_modules", ".git"}


def load_workspace(root: Path, config: Optional[HealthConfig] = None) -> list[PackageDescriptor]:
    """Load one descriptor per workspace package, in a stable order.

    An explicit ``packages`` list in the config is used as-is, and a listed
    package without a package.json gets a descriptor with ``manifest=None``.
    Otherwise packages are discovered from ``package_globs`` plus the root
    manifest's ``workspaces`` field.

    Raises:
        ManifestError: A package.json exists but is unreadable or not an object
    """
    config = config or HealthConfig()
    root = root.resolve()

    if config.packages:
        descriptors = [_load_listed(root, entry.name, entry.path) for entry in config.packages]
    else:
        patterns = list(config.package_globs)
        if config.use_workspaces_field:
            patterns.extend(p for p in workspace_patterns(root) if p not in patterns)
        descriptors = [_load_discovered(root, d) for d in discover_package_dirs(root, patterns)]

    logger.info(f"Loaded {len(descriptors)} workspace packages from {root}")
    return descriptors


def workspace_patterns(root: Path) -> list[str]:
    """Glob patterns from the root package.json ``workspaces`` field."""
    manifest_path = root / MANIFEST_NAME
    if not manifest_path.is_file():
        return []
    manifest = read_manifest(manifest_path)
    workspaces: Any = manifest.get("workspaces")
    if isinstance(workspaces, dict):
        workspaces = workspaces.get("packages")
    if not isinstance(workspaces, list):
        return []
    return [str(p) for p in workspaces if isinstance(p, str)]


def discover_package_dirs(root: Path, patterns: Sequence[str]) -> list[Path]:
    """Directories matching the patterns that contain a package.json.

    Patterns starting with ``!`` exclude matches of the rest of the pattern.
    """
    excluded: set[Path] = set()
    for pattern in patterns:
        if pattern.startswith("!"):
            excluded.update(p.resolve() for p in root.glob(pattern[1:].rstrip("/")))

    found: dict[Path, None] = {}
    for pattern in patterns:
        if pattern.startswith("!"):
            continue
        for candidate in sorted(root.glob(pattern.rstrip("/"))):
            resolved = candidate.resolve()
            if (
                resolved == root
                or resolved in excluded
                or _SKIP_PARTS & set(candidate.relative_to(root).parts)
                or not (candidate / MANIFEST_NAME).is_file()
            ):
                continue
            found.setdefault(resolved, None)
    return list(found)


def read_manifest(manifest_path: Path) -> dict[str, Any]:
    """Parse a package.json file into a dict."""
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ManifestError(manifest_path, str(e))
    except json.JSONDecodeError as e:
        raise ManifestError(manifest_path, f"invalid JSON: {e.msg} (line {e.lineno})")
    if not isinstance(data, dict):
        raise ManifestError(manifest_path, "top-level value must be an object")
    return data


def _load_listed(root: Path, name: str, rel_path: str) -> PackageDescriptor:
    manifest_path = root / rel_path / MANIFEST_NAME
    if not manifest_path.is_file():
        logger.warning(f"{name}: {MANIFEST_NAME} not found at {manifest_path}")
        return PackageDescriptor(name=name, path=rel_path)
    return PackageDescriptor.from_manifest(read_manifest(manifest_path), path=rel_path, name=name)


def _load_discovered(root: Path, package_dir: Path) -> PackageDescriptor:
    rel_path = package_dir.relative_to(root).as_posix()
    manifest = read_manifest(package_dir / MANIFEST_NAME)
    name = manifest.get("name")
    if not name:
        logger.warning(f"{rel_path}/{MANIFEST_NAME} has no name, using its path")
        name = rel_path
    return PackageDescriptor.from_manifest(manifest, path=rel_path, name=str(name))


def check_workspace_config(
    root: Path,
    checks: Sequence[WorkspaceCheck],
    thresholds: Optional[StatusThresholds] = None,
) -> WorkspaceConfigRecord:
    """Score the presence of root-level workspace configuration files."""
    issues: list[str] = []
    score = MAX_SCORE
    for check in checks:
        if not (root / check.path).exists():
            issues.append(check.issue)
            score -= check.points
    score = max(0, score)
    return WorkspaceConfigRecord(
        score=score, status=health_status(score, thresholds), issues=tuple(issues)
    )
