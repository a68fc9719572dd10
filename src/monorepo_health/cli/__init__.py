"""CLI entry point: registers all subcommands."""

from pathlib import Path
from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="monorepo-health",
    help="Monorepo Health - workspace dependency graph and package health checks",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"monorepo-health {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    path: Path = typer.Option(
        Path("."),
        "-C",
        "--path",
        help="Workspace root (default: current directory)",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Append a plain-text log to this file",
        dir_okay=False,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """
    Check the health of a JavaScript/TypeScript monorepo.

    [bold cyan]Examples:[/bold cyan]

      monorepo-health check

      monorepo-health -C ../my-workspace check --no-commands

      monorepo-health graph
    """
    ctx.ensure_object(dict)
    ctx.obj["path"] = path.resolve()
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["log_file"] = log_file


# Import subcommands to register them
from .check import check as _check  # noqa: F401, E402
from .graph import graph as _graph  # noqa: F401, E402
from .versions import versions as _versions  # noqa: F401, E402


def run() -> None:
    """Console-script entry point."""
    app(obj={})
