"""Rich terminal formatter for health reports."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..recommendations import sort_by_priority
from ..report import HealthReport
from .base import BaseFormatter

STATUS_STYLES = {
    "excellent": "green bold",
    "good": "blue",
    "fair": "yellow",
    "poor": "red",
    "critical": "red bold",
}

_TOP_RECOMMENDATIONS = 3


def status_label(status: str) -> str:
    style = STATUS_STYLES.get(status, "white")
    return f"[{style}]{status}[/{style}]"


class RichFormatter(BaseFormatter):
    """Summary panel, package table, cycles and top recommendations."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)

    def render(self, report: HealthReport) -> None:
        c = self.console
        c.print()
        c.print("[bold cyan]HEALTH CHECK SUMMARY[/bold cyan]")
        c.print(
            f"Overall Score: [bold]{report.overall_score}/100[/bold] "
            f"({status_label(report.overall_status)})"
        )
        c.print()

        if report.packages:
            table = Table(show_header=True, show_lines=False, pad_edge=True)
            table.add_column("Package", min_width=24)
            table.add_column("Score", justify="right")
            table.add_column("Status")
            table.add_column("Issues", justify="right")
            for name, record in report.packages.items():
                table.add_row(
                    escape(name),
                    str(record.score),
                    status_label(record.status),
                    str(len(record.issues)),
                )
            c.print(table)

        if report.config is not None and report.config.issues:
            c.print()
            c.print(f"[bold]Workspace configuration[/bold] {report.config.score}/100")
            for issue in report.config.issues:
                c.print(f"  [yellow]•[/yellow] {escape(issue)}")

        if report.dependencies.issues:
            c.print()
            c.print("[bold red]Dependency issues[/bold red]")
            for issue in report.dependencies.issues:
                c.print(f"  • {escape(issue)}")

        high = [r for r in sort_by_priority(report.recommendations) if r.priority == "high"]
        if high:
            c.print()
            c.print("[bold yellow]Top Recommendations:[/bold yellow]")
            for rec in high[:_TOP_RECOMMENDATIONS]:
                c.print(f"  • {escape(rec.message)}")
        c.print()

    def format(self, report: HealthReport) -> str:
        with self.console.capture() as capture:
            self.render(report)
        return capture.get()
