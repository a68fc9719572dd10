"""Signals read straight from a package directory: manifest and layout."""

from pathlib import Path
from typing import Sequence

from ..logging_config import get_logger
from ..models import PackageDescriptor
from .base import ExternalSignals

logger = get_logger(__name__)

_TEST_DIRS = ("tests", "test")


class FilesystemSignalProvider:
    """Manifest completeness and presence of expected files and directories."""

    name = "filesystem"

    def __init__(self, required_fields: Sequence[str], required_scripts: Sequence[str]):
        self.required_fields = tuple(required_fields)
        self.required_scripts = tuple(required_scripts)

    def collect(self, descriptor: PackageDescriptor, root: Path) -> ExternalSignals:
        package_dir = root / descriptor.path
        layout = dict(
            has_tsconfig=(package_dir / "tsconfig.json").is_file(),
            has_src=(package_dir / "src").is_dir(),
            has_tests=any((package_dir / d).is_dir() for d in _TEST_DIRS),
            has_readme=(package_dir / "README.md").is_file(),
        )

        manifest = descriptor.manifest
        if manifest is None:
            logger.debug(f"{descriptor.name}: no package.json at {package_dir}")
            return ExternalSignals(manifest_found=False, **layout)

        scripts = manifest.get("scripts")
        if not isinstance(scripts, dict):
            scripts = {}

        return ExternalSignals(
            manifest_found=True,
            missing_fields=tuple(f for f in self.required_fields if not manifest.get(f)),
            missing_scripts=tuple(s for s in self.required_scripts if not scripts.get(s)),
            **layout,
        )
