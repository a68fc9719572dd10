"""Graph command -- internal dependency tree and cycles."""

import typer
from rich.markup import escape
from rich.tree import Tree

from ..graph import build_dependency_graph
from ..workspace import load_workspace
from . import app
from ._common import cli_errors, console, resolve_config


@app.command()
def graph(ctx: typer.Context):
    """
    Show the internal dependency graph.

    Lists each package with the workspace packages it depends on, then any
    circular dependencies.

    [bold cyan]Examples:[/bold cyan]

      monorepo-health graph
    """
    with cli_errors():
        root, config = resolve_config(ctx)
        descriptors = load_workspace(root, config)
        dep_graph, cycles = build_dependency_graph(descriptors)

    if not dep_graph.nodes:
        console.print("[yellow]No workspace packages found.[/yellow]")
        raise typer.Exit(0)

    console.print()
    console.print("[bold cyan]Internal Dependency Graph[/bold cyan]")
    console.print()
    for node in dep_graph.nodes:
        tree = Tree(f"[bold]{escape(node)}[/bold]")
        deps = dep_graph.adjacency.get(node, ())
        if not deps:
            tree.add("[dim](no internal dependencies)[/dim]")
        for dep in deps:
            tree.add(escape(dep))
        console.print(tree)

    console.print()
    if len(cycles) == 0:
        console.print("[green]No circular dependencies.[/green]")
    else:
        console.print(f"[bold red]{len(cycles)} circular dependencies:[/bold red]")
        for issue in cycles.issues():
            console.print(f"  • {escape(issue)}")
