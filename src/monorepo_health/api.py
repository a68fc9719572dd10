"""Public API for monorepo-health.

Example:
    >>> from monorepo_health import analyze
    >>>
    >>> report = analyze("/path/to/workspace")
    >>> report.overall
    {'score': 87, 'status': 'good'}
    >>>
    >>> # Filesystem checks only, no package-manager commands
    >>> report = analyze("/path/to/workspace", run_commands=False)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Sequence

from .config import HealthConfig, load_config
from .graph import validate_descriptors
from .logging_config import get_logger
from .report import HealthReport, build_report
from .signals import (
    CommandSignalProvider,
    FilesystemSignalProvider,
    SignalProvider,
    gather_signals,
)
from .workspace import check_workspace_config, load_workspace

logger = get_logger(__name__)


def default_providers(config: HealthConfig) -> list[SignalProvider]:
    """Filesystem checks always; command checks when enabled and installed."""
    providers: list[SignalProvider] = [
        FilesystemSignalProvider(config.scoring.required_fields, config.scoring.required_scripts)
    ]
    if config.run_commands and config.commands:
        commands = CommandSignalProvider(
            package_manager=config.package_manager,
            commands=config.commands,
            timeout=config.command_timeout,
        )
        if commands.available():
            providers.append(commands)
        else:
            logger.warning(
                f"{config.package_manager} not found on PATH; "
                "skipping test, size, audit and build checks"
            )
    return providers


def analyze(
    path: str | Path = ".",
    config_file: Optional[Path] = None,
    providers: Optional[Sequence[SignalProvider]] = None,
    **overrides: Any,
) -> HealthReport:
    """Run a full health check of the workspace at ``path``.

    1. Load configuration (auto-discover TOML + apply overrides)
    2. Load package manifests
    3. Score root-level workspace configuration
    4. Gather per-package signals in parallel
    5. Build graph, scores and recommendations

    Args:
        path: Workspace root (default: current directory)
        config_file: Optional explicit config file path
        providers: Signal providers to use instead of the defaults
        **overrides: Configuration overrides (e.g. run_commands=False, workers=4)

    Raises:
        ConfigurationError: If configuration is invalid
        ManifestError: If a package.json cannot be parsed
        MalformedInputError: If package names collide
    """
    root = Path(path).resolve()
    config = load_config(config_file=config_file, root=root, **overrides)
    return run_health_check(root, config, providers)


def run_health_check(
    root: Path,
    config: HealthConfig,
    providers: Optional[Sequence[SignalProvider]] = None,
) -> HealthReport:
    """Run the pipeline with an already-loaded configuration."""
    descriptors = load_workspace(root, config)
    validate_descriptors(descriptors)

    workspace_record = (
        check_workspace_config(root, config.workspace_checks, config.thresholds)
        if config.check_workspace_config
        else None
    )

    active_providers = list(providers) if providers is not None else default_providers(config)
    signals = gather_signals(descriptors, root, active_providers, workers=config.workers)

    return build_report(descriptors, signals, workspace_record, config)
