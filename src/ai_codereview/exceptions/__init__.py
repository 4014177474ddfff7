"""Exception hierarchy for AI Code Review."""

from .base import AICodeReviewError
from .config import ConfigTemplateError, ConfigurationError, InvalidConfigError
from .delivery import (
    DashboardBuildError,
    DeliveryError,
    ReportWriteError,
    ServerStartError,
    TerminalUnavailableError,
)
from .review import ReviewError, ReviewerInitError, ReviewRequestError
from .vcs import VcsError

__all__ = [
    "AICodeReviewError",
    "ConfigurationError",
    "InvalidConfigError",
    "ConfigTemplateError",
    "VcsError",
    "ReviewError",
    "ReviewerInitError",
    "ReviewRequestError",
    "DeliveryError",
    "ServerStartError",
    "DashboardBuildError",
    "ReportWriteError",
    "TerminalUnavailableError",
]
