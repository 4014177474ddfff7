"""Starlette ASGI application for the review dashboard."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import FileResponse, JSONResponse, Response
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

from .. import __version__
from ..config import parse_bool
from ..formatters import render_json, render_markdown, report_filename
from ..logging_config import get_logger
from .state import ReviewState

logger = get_logger(__name__)

FEATURES = ["export", "theme-toggle", "real-time"]
SUPPORTED_FORMATS = ["markdown", "pdf", "json"]


async def _json_body(request: Request) -> dict:
    """Request body as a dict; empty or invalid JSON reads as {}."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        logger.debug("Ignoring malformed JSON body on %s", request.url.path)
        return {}
    return body if isinstance(body, dict) else {}


def _is_report(data: Any) -> bool:
    """Whether *data* has the shape of a report's dashboard projection."""
    if not isinstance(data, Mapping):
        return False
    summary = data.get("summary") or {}
    files = data.get("files") or []
    return (
        isinstance(summary, Mapping)
        and isinstance(files, list)
        and all(isinstance(f, Mapping) for f in files)
    )


def _parse_proceed(value: Any) -> Optional[bool]:
    """Commit decision from a request value; None when it is not a boolean."""
    if value is None:
        return True
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return parse_bool(value)
        except ValueError:
            return None
    return None


def create_app(state: ReviewState, public_dir: Path) -> Starlette:
    """Build the Starlette application wired to *state*.

    Args:
        state: Shared report and decision state
        public_dir: Built dashboard (``index.html`` plus ``assets/``)
    """
    index_path = public_dir / "index.html"
    assets_dir = public_dir / "assets"

    async def api_review_data(request: Request) -> JSONResponse:
        report = state.get_report()
        if report is None:
            return JSONResponse(
                {"error": "No review data available", "message": "Run a code review first"},
                status_code=404,
            )
        logger.debug("Serving review data (%d files)", len(report.get("files", [])))
        return JSONResponse(
            {
                "success": True,
                "data": report,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        )

    async def api_config(request: Request) -> JSONResponse:
        return JSONResponse(
            {
                "success": True,
                "config": {
                    "version": __version__,
                    "features": FEATURES,
                    "supportedFormats": SUPPORTED_FORMATS,
                },
            }
        )

    async def api_export(request: Request) -> JSONResponse:
        body = await _json_body(request)
        fmt = body.get("format") or "markdown"
        data = body.get("data")
        if data is None:
            data = state.get_report()
        if not data:
            return JSONResponse({"error": "No data to export"}, status_code=400)
        if not _is_report(data):
            return JSONResponse({"error": "Invalid report data"}, status_code=400)

        content = render_json(data) if fmt == "json" else render_markdown(data)
        return JSONResponse(
            {
                "success": True,
                "content": content,
                "filename": report_filename(fmt),
                "format": fmt,
            }
        )

    async def api_commit(request: Request) -> JSONResponse:
        body = await _json_body(request)
        proceed = _parse_proceed(body.get("proceed"))
        if proceed is None:
            return JSONResponse({"error": "Invalid proceed value"}, status_code=400)
        recorded = state.record_decision(proceed)
        return JSONResponse(
            {
                "success": True,
                "message": "Commit decision recorded" if recorded else "Commit decision already recorded",
                "action": "continue-commit" if proceed else "abort-commit",
            }
        )

    async def api_not_found(request: Request) -> JSONResponse:
        return JSONResponse({"error": "API endpoint not found"}, status_code=404)

    async def spa(request: Request) -> Response:
        if not index_path.is_file():
            return JSONResponse({"error": "Dashboard not built"}, status_code=503)
        return FileResponse(index_path, media_type="text/html")

    routes = [
        Route("/api/review-data", api_review_data),
        Route("/api/config", api_config),
        Route("/api/export", api_export, methods=["POST"]),
        Route("/api/commit", api_commit, methods=["POST"]),
        Route("/api", api_not_found, methods=["GET", "POST", "PUT", "DELETE"]),
        Route("/api/{rest:path}", api_not_found, methods=["GET", "POST", "PUT", "DELETE"]),
    ]
    if assets_dir.is_dir():
        routes.append(Mount("/assets", app=StaticFiles(directory=str(assets_dir)), name="assets"))
    routes.append(Route("/{path:path}", spa))

    return Starlette(routes=routes)
