"""Tests for the delivery dispatcher and its fallbacks."""

import socket
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from ai_codereview.config import DeliveryConfig
from ai_codereview.delivery import DeliveryDispatcher
from ai_codereview.exceptions import DashboardBuildError, ServerStartError
from ai_codereview.formatters import render_markdown

NOW = datetime(2024, 5, 1, 10, 0, 0)
REPORT_NAME = "AI_CODE_REVIEW-2024-05-01_10-00-00.md"


@pytest.fixture
def public_dir(tmp_path):
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<html></html>", encoding="utf-8")
    return public


def _dispatcher(mode, console, report_dir, **kwargs):
    delivery = DeliveryConfig(output_mode=mode, web_port=kwargs.pop("port", 3000), auto_open_browser=False)
    return DeliveryDispatcher(delivery, console, report_dir=report_dir, clock=lambda: NOW, **kwargs)


# ── Console ──────────────────────────────────────────────────────


class TestConsoleChannel:
    def test_prints_findings(self, sample_results, quiet_console, tmp_path):
        outcome = _dispatcher("console", quiet_console, tmp_path).deliver(sample_results)
        assert outcome.mode == "console"
        assert outcome.has_issues is True
        assert not outcome.serving
        assert "src/app.js" in quiet_console.file.getvalue()
        assert list(tmp_path.iterdir()) == []


# ── File ─────────────────────────────────────────────────────────


class TestFileChannel:
    def test_writes_markdown_report(self, sample_results, quiet_console, tmp_path):
        outcome = _dispatcher("file", quiet_console, tmp_path).deliver(sample_results, {"vcs": "git"})

        assert outcome.mode == "file"
        assert outcome.report_path == tmp_path / REPORT_NAME
        text = outcome.report_path.read_text(encoding="utf-8")
        assert text == render_markdown(outcome.report.to_dict())
        assert outcome.report.config == {"vcs": "git"}
        assert REPORT_NAME in quiet_console.file.getvalue()

    def test_no_results_writes_nothing(self, quiet_console, tmp_path):
        outcome = _dispatcher("file", quiet_console, tmp_path).deliver([])
        assert outcome.mode == "console"
        assert outcome.has_issues is False
        assert outcome.report_path is None
        assert list(tmp_path.iterdir()) == []

    def test_write_failure_falls_back_to_console(self, sample_results, quiet_console, tmp_path):
        missing = tmp_path / "does" / "not" / "exist"
        outcome = _dispatcher("file", quiet_console, missing).deliver(sample_results)
        assert outcome.mode == "console"
        assert outcome.report_path is None
        assert "src/app.js" in quiet_console.file.getvalue()


# ── Web ──────────────────────────────────────────────────────────


class TestWebChannel:
    def test_starts_server_with_published_report(self, sample_results, quiet_console, tmp_path, public_dir):
        server = MagicMock()
        factory = MagicMock(return_value=server)
        dispatcher = _dispatcher(
            "web",
            quiet_console,
            tmp_path,
            port=3100,
            server_factory=factory,
            dashboard_builder=lambda: public_dir,
        )

        outcome = dispatcher.deliver(sample_results)

        assert outcome.mode == "web"
        assert outcome.serving
        assert outcome.server is server
        server.start.assert_called_once_with()
        kwargs = factory.call_args.kwargs
        assert kwargs["port"] == 3100
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["auto_open"] is False
        assert kwargs["public_dir"] == public_dir
        assert kwargs["state"].get_report() == outcome.report.to_dict()
        assert not (tmp_path / REPORT_NAME).exists()

    def test_start_failure_falls_back_to_file(self, sample_results, quiet_console, tmp_path, public_dir):
        server = MagicMock()
        server.start.side_effect = ServerStartError("127.0.0.1", 3000, "port already in use")
        dispatcher = _dispatcher(
            "web",
            quiet_console,
            tmp_path,
            server_factory=MagicMock(return_value=server),
            dashboard_builder=lambda: public_dir,
        )

        outcome = dispatcher.deliver(sample_results)

        assert outcome.mode == "file"
        assert not outcome.serving
        text = (tmp_path / REPORT_NAME).read_text(encoding="utf-8")
        assert text == render_markdown(outcome.report.to_dict())

    def test_build_failure_falls_back_to_file(self, sample_results, quiet_console, tmp_path):
        def broken_build():
            raise DashboardBuildError("npm not found")

        factory = MagicMock()
        dispatcher = _dispatcher(
            "web", quiet_console, tmp_path, server_factory=factory, dashboard_builder=broken_build
        )

        outcome = dispatcher.deliver(sample_results)

        assert outcome.mode == "file"
        factory.assert_not_called()

    def test_fallback_is_single_hop(self, sample_results, quiet_console, tmp_path, public_dir):
        server = MagicMock()
        server.start.side_effect = ServerStartError("127.0.0.1", 3000, "boom")
        missing = tmp_path / "missing"
        dispatcher = _dispatcher(
            "web",
            quiet_console,
            missing,
            server_factory=MagicMock(return_value=server),
            dashboard_builder=lambda: public_dir,
        )

        outcome = dispatcher.deliver(sample_results)

        assert outcome.mode == "console"
        server.start.assert_called_once_with()

    def test_bound_port_writes_report_file(self, sample_results, quiet_console, tmp_path, public_dir):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.bind(("127.0.0.1", 0))
            sock.listen(1)
            port = sock.getsockname()[1]

            dispatcher = _dispatcher(
                "web", quiet_console, tmp_path, port=port, dashboard_builder=lambda: public_dir
            )
            outcome = dispatcher.deliver(sample_results)

        assert outcome.mode == "file"
        assert outcome.report_path == tmp_path / REPORT_NAME
        assert outcome.report_path.read_text(encoding="utf-8") == render_markdown(
            outcome.report.to_dict()
        )
