"""Dashboard server lifecycle: startup, waiting for a decision, shutdown.

The uvicorn server runs in one background thread while the main thread
waits for the decision posted to ``/api/commit``. Ctrl+C and SIGTERM end
the wait as a refusal.
"""

from __future__ import annotations

import signal
import threading
import time
import webbrowser
from pathlib import Path
from typing import Any, Optional

from rich.console import Console

from ..exceptions import ServerStartError
from ..logging_config import get_logger
from .process import DEFAULT_HOST, DEFAULT_PORT, is_port_in_use
from .state import ReviewState

logger = get_logger(__name__)

STARTUP_TIMEOUT = 10.0
BROWSER_DELAY = 1.0
_POLL_INTERVAL = 0.05


class DashboardServer:
    """One uvicorn server serving one run's dashboard.

    Safe to stop more than once; the exit controller and the decision wait
    may both call :meth:`stop`.
    """

    def __init__(
        self,
        state: ReviewState,
        public_dir: Path,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        auto_open: bool = True,
        console: Optional[Console] = None,
        startup_timeout: float = STARTUP_TIMEOUT,
    ) -> None:
        self.state = state
        self.public_dir = public_dir
        self.host = host
        self.port = port
        self.auto_open = auto_open
        self.console = console or Console()
        self.startup_timeout = startup_timeout

        self._server: Any = None
        self._thread: threading.Thread | None = None
        self._browser_timer: threading.Timer | None = None
        self._error: str | None = None
        self._stop_lock = threading.Lock()
        self._stopped = False

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def start(self) -> None:
        """Start serving and block until uvicorn reports it is up.

        Raises:
            ServerStartError: If the port is taken, startup fails or times out
        """
        import uvicorn

        from .app import create_app

        if is_port_in_use(self.host, self.port):
            raise ServerStartError(self.host, self.port, "port already in use")

        config = uvicorn.Config(
            create_app(self.state, self.public_dir),
            host=self.host,
            port=self.port,
            log_level="warning",
        )
        self._server = uvicorn.Server(config)
        self._thread = threading.Thread(
            target=self._serve, name="ai-codereview-dashboard", daemon=True
        )
        self._thread.start()

        deadline = time.monotonic() + self.startup_timeout
        while not self._server.started:
            if not self._thread.is_alive():
                raise ServerStartError(
                    self.host, self.port, self._error or "server exited during startup"
                )
            if time.monotonic() > deadline:
                self._server.should_exit = True
                raise ServerStartError(self.host, self.port, "startup timed out")
            time.sleep(_POLL_INTERVAL)

        self.state.set_running(True)
        logger.info("Dashboard listening on %s", self.url)
        self.console.print()
        self.console.print(f"[bold]Review dashboard[/bold] -> [link={self.url}]{self.url}[/link]")
        self.console.print("[dim]Decide on the commit in the dashboard (Ctrl+C to abort)[/dim]")

        if self.auto_open:
            self._browser_timer = threading.Timer(BROWSER_DELAY, self._open_browser)
            self._browser_timer.daemon = True
            self._browser_timer.start()

    def _serve(self) -> None:
        try:
            self._server.run()
        except SystemExit as exc:
            # uvicorn exits with status 1 when it cannot bind
            self._error = f"server exited with status {exc.code}"
        except Exception as exc:
            logger.debug("Dashboard server error", exc_info=True)
            self._error = str(exc)

    def _open_browser(self) -> None:
        try:
            opened = webbrowser.open(self.url)
        except webbrowser.Error as exc:
            logger.warning("Could not open browser: %s", exc)
            opened = False
        if not opened:
            self.console.print(f"[yellow]Open {self.url} in your browser to see the review[/yellow]")

    def wait_for_decision(self) -> bool:
        """Block until the dashboard posts a decision; True means proceed.

        Ctrl+C and SIGTERM count as a refusal. The server is stopped before
        returning either way.
        """
        interrupted = threading.Event()
        previous_sigterm = None

        def _on_sigterm(signum, frame):
            logger.info("Received SIGTERM, stopping dashboard")
            interrupted.set()

        try:
            previous_sigterm = signal.signal(signal.SIGTERM, _on_sigterm)
        except (OSError, ValueError):
            logger.debug("SIGTERM handler not installed (not on the main thread)")

        try:
            while True:
                decision = self.state.wait_for_decision(timeout=0.5)
                if decision is not None:
                    logger.info("Dashboard decision received (proceed=%s)", decision)
                    return decision
                if interrupted.is_set():
                    self.console.print("\n[yellow]Received SIGTERM, stopping server...[/yellow]")
                    return False
                if self._thread is not None and not self._thread.is_alive():
                    logger.warning("Dashboard server stopped before a decision was made")
                    return False
        except KeyboardInterrupt:
            self.console.print("\n[yellow]Interrupted, stopping server...[/yellow]")
            return False
        finally:
            if previous_sigterm is not None:
                try:
                    signal.signal(signal.SIGTERM, previous_sigterm)
                except (OSError, ValueError):
                    pass
            self.stop()

    def stop(self, timeout: float = 5.0) -> None:
        """Ask uvicorn to exit and wait for the server thread."""
        with self._stop_lock:
            if self._stopped:
                return
            self._stopped = True

        if self._browser_timer is not None:
            self._browser_timer.cancel()
        if self._server is not None:
            self._server.should_exit = True
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("Dashboard server did not stop within %.1fs", timeout)
        self.state.set_running(False)
        logger.debug("Dashboard server stopped")
