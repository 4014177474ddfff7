"""Process exit controller.

A hook must hand its exit status back to the VCS promptly. A lingering
non-daemon thread (a server that ignores its stop request, a stuck
browser launcher) would keep the interpreter alive after ``sys.exit``, so
the controller escalates: normal exit, then ``os._exit``, then
``os.abort``.
"""

from __future__ import annotations

import os
import sys
import threading
import time
from typing import Callable, Iterable, NoReturn, Optional

from .logging_config import get_logger

logger = get_logger(__name__)

GRACE_PERIOD = 0.15
JOIN_TIMEOUT = 2.0


class ExitController:
    """Closes registered resources, then terminates with a given status."""

    def __init__(
        self,
        grace_period: float = GRACE_PERIOD,
        join_timeout: float = JOIN_TIMEOUT,
        exit_fn: Callable[[int], None] = os._exit,
        abort_fn: Callable[[], None] = os.abort,
        sleep: Callable[[float], None] = time.sleep,
        thread_source: Callable[[], Iterable[threading.Thread]] = threading.enumerate,
    ) -> None:
        self.grace_period = grace_period
        self.join_timeout = join_timeout
        self._exit_fn = exit_fn
        self._abort_fn = abort_fn
        self._sleep = sleep
        self._thread_source = thread_source
        self._closers: list[tuple[str, Callable[[], None]]] = []
        self.status: Optional[int] = None

    def register(self, closer: Callable[[], None], name: Optional[str] = None) -> None:
        """Register a resource closer; closers run in reverse order."""
        self._closers.append((name or getattr(closer, "__qualname__", repr(closer)), closer))

    def close_resources(self) -> None:
        while self._closers:
            name, closer = self._closers.pop()
            try:
                closer()
            except Exception:
                logger.warning("Error while closing %s", name, exc_info=True)

    def lingering_threads(self) -> list[threading.Thread]:
        current = threading.current_thread()
        return [
            t
            for t in self._thread_source()
            if t is not current and not t.daemon and t.is_alive()
        ]

    def exit(self, code: int) -> NoReturn:
        """Shut down and terminate the process with *code*."""
        self.status = code
        self.close_resources()
        _flush_streams()
        self._sleep(self.grace_period)

        deadline = time.monotonic() + self.join_timeout
        for thread in self.lingering_threads():
            thread.join(max(0.0, deadline - time.monotonic()))

        remaining = self.lingering_threads()
        if not remaining:
            raise SystemExit(code)

        logger.warning(
            "Forcing exit with status %d, %d thread(s) still running: %s",
            code,
            len(remaining),
            ", ".join(t.name for t in remaining),
        )
        _flush_streams()
        self._exit_fn(code)

        logger.error("Forced exit did not terminate the process, aborting")
        self._abort_fn()
        raise SystemExit(code)


def _flush_streams() -> None:
    for stream in (sys.stdout, sys.stderr):
        if stream is None:
            continue
        try:
            stream.flush()
        except (OSError, ValueError):
            pass
