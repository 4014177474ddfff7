"""Tests for the dashboard build step."""

import subprocess
from unittest.mock import patch

import pytest

from ai_codereview.exceptions import DashboardBuildError
from ai_codereview.server.dashboard import TEMPLATE_PATH, ensure_dashboard, is_built


@pytest.fixture
def template(tmp_path):
    path = tmp_path / "template.html"
    path.write_text("<html>template</html>", encoding="utf-8")
    return path


@pytest.fixture
def frontend(tmp_path):
    path = tmp_path / "frontend"
    path.mkdir()
    (path / "package.json").write_text("{}", encoding="utf-8")
    return path


class TestEnsureDashboard:
    def test_bundled_template_exists(self):
        assert TEMPLATE_PATH.is_file()

    def test_already_built_is_reused(self, tmp_path, template):
        public = tmp_path / "public"
        public.mkdir()
        (public / "index.html").write_text("existing", encoding="utf-8")

        with patch("ai_codereview.server.dashboard.subprocess.run") as run:
            assert ensure_dashboard(public, tmp_path / "nofrontend", template) == public
        run.assert_not_called()
        assert (public / "index.html").read_text(encoding="utf-8") == "existing"

    def test_copies_template_without_frontend(self, tmp_path, template):
        public = tmp_path / "public"
        result = ensure_dashboard(public, tmp_path / "nofrontend", template)
        assert result == public
        assert is_built(public)
        assert (public / "index.html").read_text(encoding="utf-8") == "<html>template</html>"
        assert (public / "assets").is_dir()

    def test_missing_template(self, tmp_path):
        with pytest.raises(DashboardBuildError):
            ensure_dashboard(tmp_path / "public", tmp_path / "nofrontend", tmp_path / "gone.html")


# ── npm build ────────────────────────────────────────────────────


class TestNpmBuild:
    def test_install_then_build(self, tmp_path, frontend):
        public = tmp_path / "public"

        def fake_run(command, **kwargs):
            if command == ["npm", "run", "build"]:
                public.mkdir()
                (public / "index.html").write_text("built", encoding="utf-8")
            return subprocess.CompletedProcess(command, 0)

        with patch("ai_codereview.server.dashboard.subprocess.run", side_effect=fake_run) as run:
            ensure_dashboard(public, frontend, tmp_path / "unused.html")

        commands = [c.args[0] for c in run.call_args_list]
        assert commands == [["npm", "install"], ["npm", "run", "build"]]
        assert all(c.kwargs["cwd"] == frontend for c in run.call_args_list)
        assert is_built(public)

    def test_skips_install_when_node_modules_present(self, tmp_path, frontend):
        (frontend / "node_modules").mkdir()
        public = tmp_path / "public"

        def fake_run(command, **kwargs):
            public.mkdir()
            (public / "index.html").write_text("built", encoding="utf-8")
            return subprocess.CompletedProcess(command, 0)

        with patch("ai_codereview.server.dashboard.subprocess.run", side_effect=fake_run) as run:
            ensure_dashboard(public, frontend, tmp_path / "unused.html")
        assert run.call_count == 1
        assert run.call_args.args[0] == ["npm", "run", "build"]

    def test_npm_missing(self, tmp_path, frontend):
        with patch(
            "ai_codereview.server.dashboard.subprocess.run",
            side_effect=FileNotFoundError("npm"),
        ):
            with pytest.raises(DashboardBuildError, match="Dashboard build failed"):
                ensure_dashboard(tmp_path / "public", frontend, tmp_path / "unused.html")

    def test_build_failure(self, tmp_path, frontend):
        (frontend / "node_modules").mkdir()
        error = subprocess.CalledProcessError(2, ["npm", "run", "build"])
        with patch("ai_codereview.server.dashboard.subprocess.run", side_effect=error):
            with pytest.raises(DashboardBuildError) as exc_info:
                ensure_dashboard(tmp_path / "public", frontend, tmp_path / "unused.html")
        assert "status 2" in exc_info.value.reason

    def test_build_without_output(self, tmp_path, frontend):
        with patch(
            "ai_codereview.server.dashboard.subprocess.run",
            return_value=subprocess.CompletedProcess([], 0),
        ):
            with pytest.raises(DashboardBuildError, match="index.html"):
                ensure_dashboard(tmp_path / "public", frontend, tmp_path / "unused.html")
