"""Base formatter interface for health report rendering."""

from abc import ABC, abstractmethod

from ..report import HealthReport


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, report: HealthReport) -> None:
        """Render the report to stdout/stderr as appropriate."""

    @abstractmethod
    def format(self, report: HealthReport) -> str:
        """Return formatted string representation of the report."""
