"""Tests for the exception hierarchy."""

from pathlib import Path

import pytest

from ai_codereview.exceptions import (
    AICodeReviewError,
    ConfigTemplateError,
    ConfigurationError,
    DashboardBuildError,
    DeliveryError,
    InvalidConfigError,
    ReportWriteError,
    ReviewError,
    ReviewerInitError,
    ReviewRequestError,
    ServerStartError,
    TerminalUnavailableError,
    VcsError,
)


class TestBase:
    def test_message_only(self):
        assert str(AICodeReviewError("boom")) == "boom"

    def test_message_with_details(self):
        err = AICodeReviewError("boom", details={"a": "1", "b": "2"})
        assert str(err) == "boom (a=1, b=2)"
        assert err.message == "boom"


class TestHierarchy:
    @pytest.mark.parametrize(
        "err, parent",
        [
            (InvalidConfigError("AI_WEB_PORT", "x", "not an int"), ConfigurationError),
            (ConfigTemplateError(Path("/tmp/x"), "denied"), ConfigurationError),
            (ReviewerInitError("no key"), ReviewError),
            (ReviewRequestError("a.py", "timeout"), ReviewError),
            (ServerStartError("127.0.0.1", 3000, "in use"), DeliveryError),
            (DashboardBuildError("npm failed"), DeliveryError),
            (ReportWriteError(Path("/tmp/r.md"), "denied"), DeliveryError),
            (VcsError(["git", "diff"], "exit 128"), AICodeReviewError),
            (TerminalUnavailableError("/dev/tty", "no tty"), AICodeReviewError),
        ],
    )
    def test_parent(self, err, parent):
        assert isinstance(err, parent)
        assert isinstance(err, AICodeReviewError)

    def test_terminal_error_is_not_a_delivery_error(self):
        assert not isinstance(TerminalUnavailableError("/dev/tty", "x"), DeliveryError)


class TestMessages:
    def test_invalid_config(self):
        err = InvalidConfigError("AI_WEB_PORT", "abc", "not an integer")
        assert str(err).startswith("Invalid configuration for AI_WEB_PORT: abc")
        assert err.reason == "not an integer"

    def test_server_start(self):
        err = ServerStartError("127.0.0.1", 3000, "port already in use")
        assert "127.0.0.1:3000" in str(err)
        assert err.details["reason"] == "port already in use"

    def test_dashboard_build_directory_optional(self):
        assert "directory" not in DashboardBuildError("x").details
        assert DashboardBuildError("x", Path("/p")).details["directory"] == str(Path("/p"))

    def test_vcs_command(self):
        err = VcsError(["svn", "status"], "not a working copy")
        assert err.message == "VCS command failed: svn status"

    def test_review_request(self):
        err = ReviewRequestError("src/a.js", "HTTP 401")
        assert err.filename == "src/a.js"
        assert "src/a.js" in str(err)

    def test_terminal(self):
        assert TerminalUnavailableError("CON", "x").message == "Controlling terminal unavailable: CON"
