"""Output formatters for health reports.

``rich`` is the terminal summary; ``json`` and ``html`` produce the report
files written by ``monorepo-health check``.
"""

from .base import BaseFormatter
from .html_formatter import HtmlFormatter
from .json_formatter import JsonFormatter
from .rich_formatter import RichFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "rich": RichFormatter,
    "json": JsonFormatter,
    "html": HtmlFormatter,
}

# Report file written for each file-based format
REPORT_FILES = {
    "json": "health-report.json",
    "html": "health-report.html",
}


def get_formatter(name: str) -> BaseFormatter:
    """Get a formatter instance by name.

    Raises:
        ValueError: If name is not recognized
    """
    cls = FORMATTERS.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(FORMATTERS))}")
    return cls()


__all__ = [
    "BaseFormatter",
    "RichFormatter",
    "JsonFormatter",
    "HtmlFormatter",
    "FORMATTERS",
    "REPORT_FILES",
    "get_formatter",
]
