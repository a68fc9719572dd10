"""Standalone HTML health report."""

from html import escape

from ..report import HealthReport
from .base import BaseFormatter

_STYLE = """
    body { font-family: Arial, sans-serif; max-width: 1200px; margin: 0 auto; padding: 20px; }
    .header { background: #f0f0f0; padding: 20px; border-radius: 8px; margin-bottom: 20px; }
    .score { font-size: 48px; font-weight: bold; }
    h3 .score { font-size: 20px; margin-left: 8px; }
    .excellent { color: #22c55e; }
    .good { color: #3b82f6; }
    .fair { color: #f59e0b; }
    .poor { color: #ef4444; }
    .critical { color: #991b1b; }
    .package-card { border: 1px solid #ddd; padding: 15px; margin: 10px 0; border-radius: 8px; }
    .issue { color: #ef4444; margin: 5px 0; }
    .metric { color: #6b7280; }
"""


class HtmlFormatter(BaseFormatter):
    """Self-contained HTML page: overall score, package cards, recommendations."""

    def render(self, report: HealthReport) -> None:
        print(self.format(report))

    def format(self, report: HealthReport) -> str:
        packages = "".join(self._package_card(name, report) for name in report.packages)
        recommendations = "".join(
            self._recommendation_card(rec.priority, rec.message, rec.actions)
            for rec in report.recommendations
        )
        cycles = ""
        if report.dependencies.issues:
            items = "".join(f"<li>{escape(i)}</li>" for i in report.dependencies.issues)
            cycles = f"<h2>Dependency Issues</h2><ul>{items}</ul>"

        return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>Monorepo Health Report</title>
  <style>{_STYLE}</style>
</head>
<body>
  <div class="header">
    <h1>Monorepo Health Report</h1>
    <p>Generated: {escape(report.timestamp)}</p>
    <div class="score {report.overall_status}">
      Overall Score: {report.overall_score}/100
    </div>
  </div>

  <h2>Package Health</h2>
  {packages or "<p>No packages found.</p>"}
  {cycles}
  <h2>Recommendations</h2>
  {recommendations or "<p>Nothing to recommend.</p>"}
</body>
</html>
"""

    @staticmethod
    def _package_card(name: str, report: HealthReport) -> str:
        record = report.packages[name]
        if record.issues:
            issues = "<h4>Issues:</h4>" + "".join(
                f'<div class="issue">&bull; {escape(issue)}</div>' for issue in record.issues
            )
        else:
            issues = "<p>No issues found</p>"
        metrics = ""
        if record.metrics:
            metrics = "<h4>Metrics:</h4>" + "".join(
                f'<div class="metric">&bull; {escape(key)}: {value:g}</div>'
                for key, value in record.metrics.items()
            )
        return (
            f'<div class="package-card">'
            f'<h3>{escape(name)} <span class="score {record.status}">{record.score}/100</span></h3>'
            f"{issues}{metrics}</div>"
        )

    @staticmethod
    def _recommendation_card(priority: str, message: str, actions: tuple[str, ...]) -> str:
        items = "".join(f"<li>{escape(action)}</li>" for action in actions)
        return (
            f'<div class="package-card">'
            f"<h4>[{priority.upper()}] {escape(message)}</h4>"
            f"<ul>{items}</ul></div>"
        )
