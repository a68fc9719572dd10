"""Shared CLI helpers."""

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import HealthConfig, load_config
from ..exceptions import MonorepoHealthError
from ..logging_config import setup_logging

console = Console()
err_console = Console(stderr=True)


@contextmanager
def cli_errors() -> Iterator[None]:
    """Print library errors with their hint, then exit 1."""
    try:
        yield
    except MonorepoHealthError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        if e.hint:
            err_console.print(f"[dim]{escape(e.hint)}[/dim]")
        raise typer.Exit(1)


def resolve_config(ctx: typer.Context, **overrides: Any) -> tuple[Path, HealthConfig]:
    """Workspace root and merged configuration for a command invocation."""
    obj = ctx.obj or {}
    root: Path = obj.get("path") or Path.cwd().resolve()
    config_file: Optional[Path] = obj.get("config")
    config = load_config(
        config_file=config_file,
        root=root,
        verbose=bool(obj.get("verbose")),
        quiet=bool(obj.get("quiet")),
        **overrides,
    )
    log_file: Optional[Path] = obj.get("log_file")
    setup_logging(config.verbosity, str(log_file) if log_file else None)
    return root, config
