"""Check command -- full health check with report files."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..api import run_health_check
from ..formatters import REPORT_FILES, JsonFormatter, RichFormatter, get_formatter
from ..logging_config import get_logger
from . import app
from ._common import cli_errors, console, err_console, resolve_config

logger = get_logger(__name__)


@app.command()
def check(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the report as JSON to stdout instead of the summary",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for health-report.json/.html (default: workspace root)",
        file_okay=False,
        dir_okay=True,
    ),
    no_html: bool = typer.Option(
        False,
        "--no-html",
        help="Skip the HTML report",
    ),
    no_commands: bool = typer.Option(
        False,
        "--no-commands",
        help="Only run filesystem checks (no test/size/audit/build commands)",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Parallel workers for signal gathering",
        min=1,
        max=32,
    ),
    fail_under: Optional[int] = typer.Option(
        None,
        "--fail-under",
        help="Exit 1 if the overall score is below this value",
        min=0,
        max=100,
    ),
):
    """
    Run the full health check and write report files.

    Scores every workspace package, detects circular dependencies and
    prints prioritised recommendations.

    [bold cyan]Examples:[/bold cyan]

      monorepo-health check

      monorepo-health check --no-commands --fail-under 80

      monorepo-health check --json > report.json
    """
    overrides: dict = {"workers": workers}
    if no_commands:
        overrides["run_commands"] = False
    if no_html:
        overrides["html_report"] = False

    with cli_errors():
        root, config = resolve_config(ctx, **overrides)
        report = run_health_check(root, config)

        target = output_dir or (root / config.output_dir)
        target.mkdir(parents=True, exist_ok=True)
        formats = ["json", "html"] if config.html_report else ["json"]
        written = []
        for fmt in formats:
            path = target / REPORT_FILES[fmt]
            path.write_text(get_formatter(fmt).format(report), encoding="utf-8")
            written.append(path)
        logger.info(f"Reports written to {target}")

    if json_output:
        JsonFormatter().render(report)
    else:
        RichFormatter(console=console).render(report)
        console.print("[dim]Detailed reports saved:[/dim]")
        for path in written:
            console.print(f"  [dim]- {escape(str(path))}[/dim]")

    if fail_under is not None and report.overall_score < fail_under:
        err_console.print(
            f"[red]Overall score {report.overall_score} is below {fail_under}[/red]"
        )
        raise typer.Exit(1)
