"""Workspace input errors: malformed descriptors and unreadable manifests."""

from pathlib import Path
from typing import List

from .base import MonorepoHealthError


class MalformedInputError(MonorepoHealthError):
    """Base class for caller errors in the package descriptor set."""


class DuplicatePackageError(MalformedInputError):
    """Two descriptors share the same package name."""

    hint = "Rename one of the packages, or list packages explicitly in monorepo-health.toml"

    def __init__(self, name: str, paths: List[str]):
        super().__init__(
            f"Duplicate package name: {name}",
            details={"name": name, "paths": ", ".join(paths)},
        )
        self.name = name
        self.paths = paths


class MissingDescriptorFieldError(MalformedInputError):
    """A descriptor lacks a field the graph depends on."""

    def __init__(self, field_name: str, path: str):
        super().__init__(
            f"Package descriptor is missing '{field_name}'",
            details={"field": field_name, "path": path or "<unknown>"},
        )
        self.field_name = field_name
        self.path = path


class ManifestError(MonorepoHealthError):
    """A package.json exists but cannot be read or parsed."""

    hint = "Fix the file, or exclude its directory with a '!' pattern in package_globs"

    def __init__(self, manifest_path: Path, reason: str):
        super().__init__(
            f"Cannot read manifest: {manifest_path}",
            details={"path": str(manifest_path), "reason": reason},
        )
        self.manifest_path = manifest_path
        self.reason = reason
