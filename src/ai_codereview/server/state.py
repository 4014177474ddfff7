"""Thread-safe shared state for the dashboard server."""

from __future__ import annotations

import threading
from typing import Any, Optional

from ..logging_config import get_logger

logger = get_logger(__name__)


class ReviewState:
    """Holds one run's report and the developer's commit decision.

    The report is published once by the main thread before the server
    starts; afterwards only the running flag and the decision change. The
    Starlette handlers run on the server thread, the orchestrator blocks on
    :meth:`wait_for_decision` in the main thread.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._report: dict[str, Any] | None = None
        self._running = False
        self._decision: bool | None = None
        self._decided = threading.Event()

    def publish(self, report: dict[str, Any]) -> None:
        """Set the dashboard projection of the report."""
        with self._lock:
            self._report = report

    def get_report(self) -> dict[str, Any] | None:
        with self._lock:
            return self._report

    def set_running(self, running: bool) -> None:
        with self._lock:
            self._running = running

    @property
    def running(self) -> bool:
        with self._lock:
            return self._running

    def record_decision(self, proceed: bool) -> bool:
        """Record the commit decision. Only the first decision counts.

        Returns:
            True if this call recorded the decision
        """
        with self._lock:
            if self._decision is not None:
                logger.debug("Ignoring repeated commit decision (proceed=%s)", proceed)
                return False
            self._decision = proceed
        self._decided.set()
        return True

    @property
    def decision(self) -> bool | None:
        with self._lock:
            return self._decision

    def wait_for_decision(self, timeout: Optional[float] = None) -> bool | None:
        """Block until a decision arrives or *timeout* elapses (None if it did)."""
        if not self._decided.wait(timeout):
            return None
        return self.decision
