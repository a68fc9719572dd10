"""Cross-package version consistency for shared dependencies."""

from collections.abc import Sequence

from ..models import PackageDescriptor
from .models import VersionMismatch


def find_version_mismatches(descriptors: Sequence[PackageDescriptor]) -> list[VersionMismatch]:
    """Dependencies declared by several packages with differing specifiers.

    Runtime and dev dependencies are compared together; peer ranges are not.
    When a package lists the same name in both maps, the dev entry wins.
    """
    declared: dict[str, dict[str, str]] = {}
    for descriptor in descriptors:
        merged = {**descriptor.dependencies, **descriptor.dev_dependencies}
        for dep_name, spec in merged.items():
            declared.setdefault(dep_name, {})[descriptor.name] = spec

    mismatches = [
        VersionMismatch(dependency=dep_name, versions=versions)
        for dep_name, versions in declared.items()
        if len(set(versions.values())) > 1
    ]
    return sorted(mismatches, key=lambda m: m.dependency)
