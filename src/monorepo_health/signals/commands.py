"""Signals from package-manager commands: tests, bundle size, audits, builds.

Each command is run per package with a timeout. Anything that goes wrong
(non-zero exit where a result was expected, unparseable output, timeout)
turns into an ``errors`` note on the returned signals; the check is then
skipped by the scorer.
"""

import json
import re
import shutil
import subprocess
import threading
import time
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

from ..logging_config import get_logger
from ..models import PackageDescriptor
from .base import ExternalSignals

logger = get_logger(__name__)

_COVERAGE_RE = re.compile(r"Statements\s+:\s+([\d.]+)%")
_SIZE_RE = re.compile(r"([\d.]+)\s*KB")

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


class CommandError(Exception):
    """A package-manager command could not produce a result."""


class CommandSignalProvider:
    """Run package-manager scripts and parse their output into signals."""

    name = "commands"

    def __init__(
        self,
        package_manager: str = "pnpm",
        commands: Sequence[str] = ("test:coverage", "size", "outdated", "audit", "build"),
        timeout: float = 300.0,
        runner: Runner = subprocess.run,
    ):
        self.package_manager = package_manager
        self.commands = tuple(commands)
        self.timeout = timeout
        self._runner = runner
        self._cancelled = threading.Event()
        self._handlers = {
            "test:coverage": self._coverage,
            "size": self._bundle_size,
            "outdated": self._outdated,
            "audit": self._audit,
            "build": self._build,
        }

    def available(self) -> bool:
        return shutil.which(self.package_manager) is not None

    def cancel(self) -> None:
        """Start no further commands; one already running ends at its timeout."""
        self._cancelled.set()

    def collect(self, descriptor: PackageDescriptor, root: Path) -> ExternalSignals:
        if descriptor.manifest is None:
            return ExternalSignals()

        signals = ExternalSignals()
        for command in self.commands:
            if self._cancelled.is_set():
                return signals.merge(ExternalSignals.failed("remaining checks cancelled"))
            handler = self._handlers[command]
            try:
                signals = signals.merge(handler(descriptor, root))
            except CommandError as e:
                logger.debug(f"{descriptor.name}: {command} unavailable: {e}")
                signals = signals.merge(ExternalSignals.failed(f"{command} check failed: {e}"))
        return signals

    # ------------------------------------------------------------------
    # Individual checks
    # ------------------------------------------------------------------

    def _coverage(self, descriptor: PackageDescriptor, root: Path) -> ExternalSignals:
        if not _has_script(descriptor, "test:coverage"):
            return ExternalSignals()

        result = self._run(descriptor, root, "test:coverage")
        if result.returncode != 0:
            return ExternalSignals(tests_passed=False)
        return ExternalSignals(tests_passed=True, coverage=parse_coverage(result.stdout))

    def _bundle_size(self, descriptor: PackageDescriptor, root: Path) -> ExternalSignals:
        if not _has_script(descriptor, "size"):
            return ExternalSignals()

        result = self._run(descriptor, root, "size")
        if result.returncode != 0:
            raise CommandError(_first_line(result.stderr) or f"exit code {result.returncode}")
        return ExternalSignals(bundle_size_kb=parse_bundle_size(result.stdout))

    def _outdated(self, descriptor: PackageDescriptor, root: Path) -> ExternalSignals:
        # Exits non-zero when something is outdated, so only the output matters
        result = self._run(descriptor, root, "outdated", "--format", "json")
        return ExternalSignals(outdated_count=parse_outdated(result.stdout))

    def _audit(self, descriptor: PackageDescriptor, root: Path) -> ExternalSignals:
        result = self._run(descriptor, root, "audit", "--json")
        return ExternalSignals(vulnerability_count=parse_audit(result.stdout))

    def _build(self, descriptor: PackageDescriptor, root: Path) -> ExternalSignals:
        if not _has_script(descriptor, "build"):
            return ExternalSignals()

        start = time.monotonic()
        result = self._run(descriptor, root, "build")
        elapsed_ms = round((time.monotonic() - start) * 1000)
        if result.returncode != 0:
            return ExternalSignals(build_passed=False)
        return ExternalSignals(build_passed=True, build_time_ms=elapsed_ms)

    def _run(
        self, descriptor: PackageDescriptor, root: Path, *args: str
    ) -> "subprocess.CompletedProcess[str]":
        cmd = [self.package_manager, "--filter", descriptor.name, *args]
        try:
            return self._runner(
                cmd,
                cwd=str(root),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise CommandError(f"{self.package_manager} not found")
        except subprocess.TimeoutExpired:
            raise CommandError(f"timed out after {self.timeout:g}s")


# ----------------------------------------------------------------------
# Output parsers
# ----------------------------------------------------------------------


def parse_coverage(output: str) -> Optional[float]:
    """Statement coverage percentage from a coverage summary, if printed."""
    match = _COVERAGE_RE.search(output or "")
    return float(match.group(1)) if match else None


def parse_bundle_size(output: str) -> Optional[float]:
    """First ``<number> KB`` figure in size-limit style output."""
    match = _SIZE_RE.search(output or "")
    return float(match.group(1)) if match else None


def parse_outdated(output: str) -> int:
    """Number of outdated packages in ``outdated --format json`` output.

    Raises:
        CommandError: Output is not JSON
    """
    data = _load_json(output, default=[])
    if isinstance(data, (list, dict)):
        return len(data)
    raise CommandError("unexpected outdated report format")


def parse_audit(output: str) -> int:
    """Vulnerability count from ``audit --json`` output.

    npm-style reports list advisories under ``vulnerabilities.<name>.via``;
    pnpm-style reports carry per-severity counts in
    ``metadata.vulnerabilities``.

    Raises:
        CommandError: Output is not JSON
    """
    data = _load_json(output, default={})
    if not isinstance(data, dict):
        raise CommandError("unexpected audit report format")

    vulnerabilities = data.get("vulnerabilities")
    if isinstance(vulnerabilities, dict):
        return sum(
            len(entry.get("via") or [])
            for entry in vulnerabilities.values()
            if isinstance(entry, dict)
        )

    counts = (data.get("metadata") or {}).get("vulnerabilities")
    if isinstance(counts, dict):
        return sum(int(v) for v in counts.values() if isinstance(v, (int, float)))

    return 0


def _load_json(output: str, default: Any) -> Any:
    text = (output or "").strip()
    if not text:
        return default
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise CommandError(f"unparseable JSON output: {e.msg}")


def _has_script(descriptor: PackageDescriptor, script: str) -> bool:
    scripts = (descriptor.manifest or {}).get("scripts")
    return isinstance(scripts, dict) and bool(scripts.get(script))


def _first_line(text: str) -> str:
    for line in (text or "").splitlines():
        if line.strip():
            return line.strip()
    return ""
