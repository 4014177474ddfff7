"""Output formatters for review reports."""

from .base import BaseFormatter
from .console_formatter import NO_ISSUES_MESSAGE, ConsoleFormatter
from .json_formatter import render_json
from .markdown_formatter import MarkdownFormatter, render_markdown, report_filename

__all__ = [
    "BaseFormatter",
    "ConsoleFormatter",
    "MarkdownFormatter",
    "NO_ISSUES_MESSAGE",
    "render_json",
    "render_markdown",
    "report_filename",
]
