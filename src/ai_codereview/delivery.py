"""Delivery dispatcher: show one run's findings on the configured channel.

Channels degrade in one direction only: web falls back to a report file,
and a report file that cannot be written falls back to the console. The
FindingsReport is built once and handed to whichever channel runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

from rich.console import Console

from .config import DeliveryConfig
from .exceptions import DeliveryError, ReportWriteError
from .findings import FindingsReport, build_report
from .formatters import ConsoleFormatter, MarkdownFormatter, report_filename
from .logging_config import get_logger
from .review import AnalysisResult
from .server import DEFAULT_HOST, DashboardServer, ReviewState, ensure_dashboard

logger = get_logger(__name__)


@dataclass
class DeliveryOutcome:
    """What the dispatcher actually did.

    Attributes:
        mode: Channel that ran (may differ from the configured one after a fallback)
        has_issues: Any reviewed file has issues
        report: The report shown on that channel
        report_path: Markdown file written by the file channel
        server: Running dashboard server (web channel only)
    """

    mode: str
    has_issues: bool
    report: FindingsReport
    report_path: Optional[Path] = None
    server: Optional[DashboardServer] = None

    @property
    def serving(self) -> bool:
        return self.server is not None


class DeliveryDispatcher:
    """Routes a FindingsReport to console, file or web."""

    def __init__(
        self,
        delivery: DeliveryConfig,
        console: Optional[Console] = None,
        server_factory: Optional[Callable[..., Any]] = None,
        report_dir: Optional[Path] = None,
        dashboard_builder: Callable[[], Path] = ensure_dashboard,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.delivery = delivery
        self.console = console or Console()
        self.server_factory = server_factory or DashboardServer
        self.report_dir = report_dir
        self.dashboard_builder = dashboard_builder
        self.clock = clock

    def deliver(
        self, results: Sequence[AnalysisResult], run_meta: Optional[dict[str, Any]] = None
    ) -> DeliveryOutcome:
        report = build_report(results, run_meta)
        mode = self.delivery.output_mode
        logger.debug("Delivering %d result(s) via %s", len(report.files), mode)

        if mode == "web":
            try:
                return self._deliver_web(report)
            except (DeliveryError, OSError) as e:
                logger.warning("Web dashboard unavailable, writing a report file instead: %s", e)
                self.console.print(
                    "[yellow]Web dashboard unavailable, falling back to a report file[/yellow]"
                )
                return self._deliver_file(report)
        if mode == "file":
            return self._deliver_file(report)
        return self._deliver_console(report)

    def _deliver_console(self, report: FindingsReport) -> DeliveryOutcome:
        ConsoleFormatter(self.console).render(report)
        return DeliveryOutcome(mode="console", has_issues=report.has_issues, report=report)

    def _deliver_file(self, report: FindingsReport) -> DeliveryOutcome:
        if not report.files:
            return self._deliver_console(report)

        try:
            path = self.write_report(report)
        except ReportWriteError as e:
            logger.warning("%s; showing findings on the console instead", e)
            return self._deliver_console(report)

        s = report.summary
        self.console.print(f"[green]Review report written to[/green] {path}")
        self.console.print(
            f"[dim]{s.total} file(s) reviewed, {s.passed} passed, {s.has_issues} need attention[/dim]"
        )
        return DeliveryOutcome(
            mode="file", has_issues=report.has_issues, report=report, report_path=path
        )

    def write_report(self, report: FindingsReport) -> Path:
        """Write the Markdown report into the report directory.

        Raises:
            ReportWriteError: If the file cannot be written
        """
        directory = self.report_dir or Path.cwd()
        path = directory / report_filename("markdown", self.clock())
        try:
            path.write_text(MarkdownFormatter(self.console).format(report), encoding="utf-8")
        except OSError as e:
            raise ReportWriteError(path, str(e))
        logger.info("Wrote review report: %s", path)
        return path

    def _deliver_web(self, report: FindingsReport) -> DeliveryOutcome:
        public_dir = self.dashboard_builder()
        state = ReviewState()
        state.publish(report.to_dict())
        server = self.server_factory(
            state=state,
            public_dir=public_dir,
            host=DEFAULT_HOST,
            port=self.delivery.web_port,
            auto_open=self.delivery.auto_open_browser,
            console=self.console,
        )
        server.start()
        return DeliveryOutcome(mode="web", has_issues=report.has_issues, report=report, server=server)
