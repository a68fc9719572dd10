"""External signal bundle and the provider interface that produces it."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Protocol, Tuple

from ..models import PackageDescriptor


@dataclass(frozen=True)
class ExternalSignals:
    """Best-effort measurements about one package.

    Every field is optional: None means the signal is absent and the
    corresponding check is skipped. ``errors`` carries human-readable notes
    about signals that could not be gathered.
    """

    manifest_found: Optional[bool] = None
    missing_fields: Optional[Tuple[str, ...]] = None
    missing_scripts: Optional[Tuple[str, ...]] = None

    has_tsconfig: Optional[bool] = None
    has_src: Optional[bool] = None
    has_tests: Optional[bool] = None
    has_readme: Optional[bool] = None

    tests_passed: Optional[bool] = None
    coverage: Optional[float] = None
    bundle_size_kb: Optional[float] = None
    outdated_count: Optional[int] = None
    vulnerability_count: Optional[int] = None

    build_passed: Optional[bool] = None
    build_time_ms: Optional[float] = None

    errors: Tuple[str, ...] = ()

    def merge(self, other: "ExternalSignals") -> "ExternalSignals":
        """Overlay ``other``'s present signals on this bundle."""
        values = {}
        for f in fields(self):
            if f.name == "errors":
                continue
            theirs = getattr(other, f.name)
            values[f.name] = theirs if theirs is not None else getattr(self, f.name)
        return ExternalSignals(errors=self.errors + other.errors, **values)

    @classmethod
    def failed(cls, message: str) -> "ExternalSignals":
        return cls(errors=(message,))


class SignalProvider(Protocol):
    """Collects signals for one package; must never raise for bad packages."""

    name: str

    def collect(self, descriptor: PackageDescriptor, root: Path) -> ExternalSignals: ...
