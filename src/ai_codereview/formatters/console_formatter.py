"""Rich terminal formatter for review findings."""

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

from ..findings import FindingsReport
from .base import BaseFormatter

NO_ISSUES_MESSAGE = "Code review complete, no issues found"

_SEVERITY_STYLE = {"high": "red bold", "medium": "yellow", "low": "green"}


def _severity_label(severity: str) -> str:
    style = _SEVERITY_STYLE.get(severity, "dim")
    return f"[{style}]{severity}[/{style}]"


class ConsoleFormatter(BaseFormatter):
    """Summary table plus the full review text of every file."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def render(self, report: FindingsReport) -> None:
        if not report.files:
            self.console.print(f"[green]✓ {NO_ISSUES_MESSAGE}[/green]")
            return

        self._print_summary(report)
        self.console.print()
        self.console.print("[bold]AI code review feedback[/bold]")
        for index, f in enumerate(report.files, start=1):
            self.console.print(Rule(f"{index}. {f.full_path}", align="left"))
            # Review text is model output; never interpret it as rich markup
            self.console.print(f.analysis, markup=False, highlight=False)
        self.console.print(Rule())

    def format(self, report: FindingsReport) -> str:
        with self.console.capture() as capture:
            self.render(report)
        return capture.get()

    def _print_summary(self, report: FindingsReport) -> None:
        s = report.summary
        self.console.print(
            Panel(
                f"[bold]{s.total}[/bold] files reviewed  "
                f"[green]{s.passed}[/green] passed  "
                f"[yellow]{s.has_issues}[/yellow] need attention  "
                f"success rate [bold]{s.success_rate}%[/bold]",
                title="[bold cyan]AI Code Review[/bold cyan]",
                expand=False,
            )
        )

        table = Table(show_header=True, header_style="bold", expand=False)
        table.add_column("File")
        table.add_column("Status")
        table.add_column("Severity")
        table.add_column("Issues", justify="right")
        table.add_column("Suggestions", justify="right")
        for f in report.files:
            status = "[yellow]warning[/yellow]" if f.has_issues else "[green]ok[/green]"
            table.add_row(
                f.full_path,
                status,
                _severity_label(f.severity) if f.has_issues else "[dim]-[/dim]",
                str(len(f.issues)),
                str(len(f.suggestions)),
            )
        self.console.print(table)
