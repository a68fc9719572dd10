"""Versions command -- dependency version drift across packages."""

import typer
from rich.markup import escape
from rich.table import Table

from ..graph import find_version_mismatches
from ..workspace import load_workspace
from . import app
from ._common import cli_errors, console, resolve_config


@app.command()
def versions(ctx: typer.Context):
    """
    List dependencies declared with different versions across packages.

    [bold cyan]Examples:[/bold cyan]

      monorepo-health versions
    """
    with cli_errors():
        root, config = resolve_config(ctx)
        mismatches = find_version_mismatches(load_workspace(root, config))

    if not mismatches:
        console.print("[green]All common dependencies are in sync![/green]")
        return

    console.print(f"Found {len(mismatches)} inconsistencies:")
    table = Table(show_header=True, show_lines=True)
    table.add_column("Dependency", style="bold")
    table.add_column("Package")
    table.add_column("Version")
    for mismatch in mismatches:
        first = True
        for package, spec in mismatch.versions.items():
            dependency = escape(mismatch.dependency) if first else ""
            table.add_row(dependency, escape(package), escape(spec))
            first = False
    console.print(table)
