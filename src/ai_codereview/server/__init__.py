"""Local review dashboard server.

The dashboard is a single-page front-end served by Starlette/uvicorn on
127.0.0.1. It shows one run's findings and reports the commit decision back
through ``POST /api/commit``.
"""

from .app import create_app
from .dashboard import ensure_dashboard
from .lifecycle import DashboardServer
from .process import DEFAULT_HOST, DEFAULT_PORT, is_port_in_use
from .state import ReviewState

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DashboardServer",
    "ReviewState",
    "create_app",
    "ensure_dashboard",
    "is_port_in_use",
]
