"""Base formatter interface for review report rendering."""

from abc import ABC, abstractmethod

from ..findings import FindingsReport


class BaseFormatter(ABC):
    """Abstract base class for report formatters."""

    @abstractmethod
    def render(self, report: FindingsReport) -> None:
        """Render the report to the terminal."""

    @abstractmethod
    def format(self, report: FindingsReport) -> str:
        """Return formatted string representation of the report."""
