"""Configuration loading and management for monorepo-health.

Configuration sources are merged in priority order:
    1. Defaults (defined in HealthConfig)
    2. Global config (~/.monorepo-health.toml)
    3. Project config (<workspace>/monorepo-health.toml)
    4. Explicit config file
    5. Environment variables (MONOREPO_HEALTH_* prefix)
    6. Keyword overrides (typically CLI flags)

Example:
    >>> config = load_config(verbose=True, workers=4)
    >>> config.verbosity
    'verbose'
    >>> config.workers
    4

Example TOML:

    package_globs = ["packages/*", "apps/*"]
    slow_build_ms = 45000

    [[packages]]
    name = "@acme/storage"
    path = "packages/storage"

    [scoring]
    missing_script = 3
    required_scripts = ["build", "test", "lint"]

    [thresholds]
    excellent = 95
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

CONFIG_FILENAME = "monorepo-health.toml"
ENV_PREFIX = "MONOREPO_HEALTH_"


@dataclass(frozen=True)
class ScoringWeights:
    """Point deductions for the unified package health checklist.

    Every deduction is a fixed, non-negative number of points taken off a
    starting score of 100. A missing manifest is terminal (score 0) and has
    no weight here.

    Attributes:
        Manifest:
            required_fields: package.json fields every package must declare
            missing_field: Points per missing field
            required_scripts: npm scripts every package must define
            missing_script: Points per missing script

        Layout:
            missing_tsconfig, missing_src, missing_tests, missing_readme

        Signals:
            tests_failed: Test command ran and failed
            coverage_target: Coverage (percent) below which points are lost,
                at one point per two percent of shortfall
            bundle_size_limit_kb / large_bundle: Flat penalty above the limit
            outdated_per_dep / outdated_cap: Per outdated dependency, capped
            vulnerability_per_issue / vulnerability_cap: Per advisory, capped
    """

    required_fields: tuple[str, ...] = ("name", "version", "description", "main", "types")
    missing_field: int = 5
    required_scripts: tuple[str, ...] = ("build", "test", "lint", "typecheck")
    missing_script: int = 5

    missing_tsconfig: int = 10
    missing_src: int = 15
    missing_tests: int = 10
    missing_readme: int = 5

    tests_failed: int = 15
    coverage_target: float = 80.0
    bundle_size_limit_kb: float = 50.0
    large_bundle: int = 5
    outdated_per_dep: int = 2
    outdated_cap: int = 10
    vulnerability_per_issue: int = 5
    vulnerability_cap: int = 20

    def __post_init__(self) -> None:
        """Validate scoring weights."""
        point_fields = [
            "missing_field",
            "missing_script",
            "missing_tsconfig",
            "missing_src",
            "missing_tests",
            "missing_readme",
            "tests_failed",
            "large_bundle",
            "outdated_per_dep",
            "outdated_cap",
            "vulnerability_per_issue",
            "vulnerability_cap",
        ]
        for field_name in point_fields:
            if getattr(self, field_name) < 0:
                raise ValueError(f"{field_name} must be non-negative")

        if not 0.0 <= self.coverage_target <= 100.0:
            raise ValueError("coverage_target must be between 0 and 100")
        if self.bundle_size_limit_kb <= 0:
            raise ValueError("bundle_size_limit_kb must be positive")


@dataclass(frozen=True)
class StatusThresholds:
    """Minimum score for each status tier; anything lower is critical."""

    excellent: int = 90
    good: int = 80
    fair: int = 70
    poor: int = 60

    def __post_init__(self) -> None:
        if not 100 >= self.excellent >= self.good >= self.fair >= self.poor >= 0:
            raise ValueError("Status thresholds must descend within 0..100")


@dataclass(frozen=True)
class PackageEntry:
    """Explicitly listed workspace package."""

    name: str
    path: str


@dataclass(frozen=True)
class WorkspaceCheck:
    """A root-level file the workspace is expected to contain."""

    path: str
    points: int
    issue: str


DEFAULT_WORKSPACE_CHECKS: tuple[WorkspaceCheck, ...] = (
    WorkspaceCheck("pnpm-workspace.yaml", 20, "Missing pnpm-workspace.yaml"),
    WorkspaceCheck("nx.json", 10, "Missing nx.json"),
    WorkspaceCheck(".github/workflows/ci.yml", 15, "Missing CI workflow"),
    WorkspaceCheck(".changeset/config.json", 10, "Changesets not configured"),
    WorkspaceCheck(".eslintrc.cjs", 10, "ESLint not configured"),
    WorkspaceCheck("tsconfig.json", 10, "Root TypeScript config missing"),
)

DEFAULT_COMMANDS: tuple[str, ...] = ("test:coverage", "size", "outdated", "audit", "build")


@dataclass(frozen=True)
class HealthConfig:
    """Configuration for a health-check run.

    Attributes:
        Workspace discovery:
            packages: Explicit package list; disables glob discovery when set
            package_globs: Directory globs holding one package each
            use_workspaces_field: Also read globs from root package.json

        Signal gathering:
            workers: Parallel workers (None = auto-detect)
            run_commands: Run package-manager commands for test/size/audit data
            package_manager: Executable used for commands
            commands: Which commands to run
            command_timeout_seconds: Per-command timeout

        Reporting:
            slow_build_ms: Build time above which a performance finding is raised
            check_workspace_config: Score root-level configuration files
            workspace_checks: The root-level files to look for
            recommend_below: Package score below which a recommendation is made
            high_priority_below: Package score below which it is high priority
            output_dir: Where report files are written
            html_report: Write health-report.html next to the JSON report
            verbosity: Logging verbosity level
    """

    packages: tuple[PackageEntry, ...] = ()
    package_globs: tuple[str, ...] = ("packages/*",)
    use_workspaces_field: bool = True

    workers: Optional[int] = None
    run_commands: bool = True
    package_manager: str = "pnpm"
    commands: tuple[str, ...] = DEFAULT_COMMANDS
    command_timeout_seconds: int = 300

    slow_build_ms: int = 30000
    check_workspace_config: bool = True
    workspace_checks: tuple[WorkspaceCheck, ...] = DEFAULT_WORKSPACE_CHECKS
    recommend_below: int = 80
    high_priority_below: int = 60
    output_dir: str = "."
    html_report: bool = True
    verbosity: Verbosity = "normal"

    scoring: ScoringWeights = field(default_factory=ScoringWeights)
    thresholds: StatusThresholds = field(default_factory=StatusThresholds)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.command_timeout_seconds < 1:
            raise ValueError("command_timeout_seconds must be at least 1")
        if self.slow_build_ms < 0:
            raise ValueError("slow_build_ms must be non-negative")
        if not 0 <= self.high_priority_below <= self.recommend_below <= 100:
            raise ValueError("high_priority_below must not exceed recommend_below (0..100)")
        unknown = set(self.commands) - set(DEFAULT_COMMANDS)
        if unknown:
            raise ValueError(f"Unknown commands: {', '.join(sorted(unknown))}")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be quiet, normal or verbose")

    @property
    def command_timeout(self) -> float:
        return float(self.command_timeout_seconds)


def load_config(
    config_file: Optional[Path] = None, root: Optional[Path] = None, **overrides: Any
) -> HealthConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        root: Workspace root searched for monorepo-health.toml (default: cwd)
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated HealthConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = (root or Path.cwd()) / CONFIG_FILENAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    # Verbosity flags from the CLI collapse into one field
    if "verbose" in overrides:
        if overrides.pop("verbose"):
            overrides["verbosity"] = "verbose"
    if "quiet" in overrides:
        if overrides.pop("quiet"):
            overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return HealthConfig(**_coerce_sections(merged))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _coerce_sections(merged: dict[str, Any]) -> dict[str, Any]:
    """Turn TOML tables and arrays into the nested frozen dataclasses."""
    result = dict(merged)

    scoring = result.get("scoring")
    if isinstance(scoring, dict):
        result["scoring"] = ScoringWeights(**_tuplify(scoring))

    thresholds = result.get("thresholds")
    if isinstance(thresholds, dict):
        result["thresholds"] = StatusThresholds(**thresholds)

    packages = result.get("packages")
    if isinstance(packages, list):
        entries = []
        for entry in packages:
            if not isinstance(entry, dict) or "name" not in entry or "path" not in entry:
                raise InvalidConfigError("packages", entry, "each entry needs name and path")
            entries.append(PackageEntry(name=str(entry["name"]), path=str(entry["path"])))
        result["packages"] = tuple(entries)

    checks = result.get("workspace_checks")
    if isinstance(checks, list):
        result["workspace_checks"] = tuple(
            c if isinstance(c, WorkspaceCheck) else WorkspaceCheck(**c) for c in checks
        )

    return _tuplify(result)


def _tuplify(values: dict[str, Any]) -> dict[str, Any]:
    return {k: tuple(v) if isinstance(v, list) else v for k, v in values.items()}


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from MONOREPO_HEALTH_* environment variables.

    Scalar fields only, e.g.:
        MONOREPO_HEALTH_WORKERS: int
        MONOREPO_HEALTH_RUN_COMMANDS: bool (true/false/1/0)
        MONOREPO_HEALTH_PACKAGE_MANAGER: str
        MONOREPO_HEALTH_COMMAND_TIMEOUT_SECONDS: int
        MONOREPO_HEALTH_SLOW_BUILD_MS: int
        MONOREPO_HEALTH_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any variables found.
    """
    type_hints = get_type_hints(HealthConfig)

    result: dict[str, Any] = {}

    for field_name in HealthConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns None for types that cannot come from a single string
    (tuples, nested sections).

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is tuple or type_hint is tuple:
        return None

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If TOML support is unavailable or parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
