"""Markdown report formatter.

The same text backs the file delivery channel and the dashboard's export
endpoint, so it is rendered from the dashboard projection (camelCase dict)
rather than from the dataclasses directly.
"""

from datetime import datetime
from typing import Any, Mapping

from rich.console import Console
from rich.markdown import Markdown

from ..findings import FindingsReport
from .base import BaseFormatter

TOOL_NAME = "ai-codereview"


def _display_time(timestamp: str) -> str:
    try:
        return datetime.fromisoformat(timestamp).strftime("%Y-%m-%d %H:%M:%S")
    except (TypeError, ValueError):
        return str(timestamp)


def render_markdown(data: Mapping[str, Any]) -> str:
    """Markdown for a report in its dashboard (``to_dict``) form."""
    summary = data.get("summary") or {}
    files = data.get("files") or []

    lines = [
        "# AI Code Review Report",
        "",
        f"**Generated**: {_display_time(data.get('timestamp', ''))}",
        f"**Files reviewed**: {summary.get('total', len(files))}",
        f"**Passed**: {summary.get('passed', 0)}",
        f"**Needs attention**: {summary.get('hasIssues', 0)}",
        "",
    ]

    if not files:
        lines += ["## Review Result", "", "✅ **Code review complete, no issues found**", ""]
    else:
        lines += ["## Detailed Findings", ""]
        for index, f in enumerate(files, start=1):
            icon = "✅" if f.get("status") == "success" else "⚠️"
            path = f.get("fullPath") or f.get("filename", "")
            lines += [f"### {index}. {icon} {path}", "", str(f.get("analysis", "")), "", "---", ""]

    lines += [
        "## Notes",
        "",
        "This report was generated automatically by an AI code review tool to assist",
        "code quality checks. Judge each suggestion against the actual context.",
        "",
        f"*Generated by*: {TOOL_NAME}",
        "",
    ]
    return "\n".join(lines)


class MarkdownFormatter(BaseFormatter):
    """Markdown report, as written to ``AI_CODE_REVIEW-<timestamp>.md``."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def render(self, report: FindingsReport) -> None:
        self.console.print(Markdown(self.format(report)))

    def format(self, report: FindingsReport) -> str:
        return render_markdown(report.to_dict())


def report_filename(fmt: str = "markdown", now: datetime | None = None) -> str:
    """``AI_CODE_REVIEW-<YYYY-MM-DD_HH-MM-SS>.md`` (``.json`` for JSON)."""
    stamp = (now or datetime.now()).strftime("%Y-%m-%d_%H-%M-%S")
    extension = "json" if fmt == "json" else "md"
    return f"AI_CODE_REVIEW-{stamp}.{extension}"
