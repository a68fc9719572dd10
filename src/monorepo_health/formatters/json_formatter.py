"""JSON formatter for health reports."""

import json

from ..report import HealthReport
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the report as indented JSON."""

    def render(self, report: HealthReport) -> None:
        print(self.format(report))

    def format(self, report: HealthReport) -> str:
        return json.dumps(report.to_dict(), indent=2)
