"""Delivery exceptions: web server, dashboard build, report file, terminal."""

from pathlib import Path
from typing import Optional

from .base import AICodeReviewError


class DeliveryError(AICodeReviewError):
    """Base class for delivery-channel failures.

    The dispatcher catches these and degrades to the next channel.
    """

    pass


class ServerStartError(DeliveryError):
    """Raised when the dashboard server cannot be started."""

    def __init__(self, host: str, port: int, reason: str):
        super().__init__(
            f"Cannot start dashboard server on {host}:{port}",
            details={"host": host, "port": str(port), "reason": reason},
        )
        self.host = host
        self.port = port
        self.reason = reason


class DashboardBuildError(DeliveryError):
    """Raised when the dashboard front-end cannot be built."""

    def __init__(self, reason: str, directory: Optional[Path] = None):
        details = {"reason": reason}
        if directory is not None:
            details["directory"] = str(directory)
        super().__init__("Dashboard build failed", details=details)
        self.reason = reason
        self.directory = directory


class ReportWriteError(DeliveryError):
    """Raised when the Markdown report cannot be written."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Cannot write report file: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason


class TerminalUnavailableError(AICodeReviewError):
    """Raised when the controlling terminal device cannot be opened."""

    def __init__(self, device: str, reason: str):
        super().__init__(
            f"Controlling terminal unavailable: {device}",
            details={"device": device, "reason": reason},
        )
        self.device = device
        self.reason = reason
