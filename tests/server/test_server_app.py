"""Tests for the dashboard HTTP API."""

import json

import pytest
from starlette.testclient import TestClient

from ai_codereview import __version__
from ai_codereview.findings import build_report
from ai_codereview.server.app import create_app
from ai_codereview.server.state import ReviewState


@pytest.fixture
def public_dir(tmp_path):
    public = tmp_path / "public"
    (public / "assets").mkdir(parents=True)
    (public / "index.html").write_text("<html><body>dashboard</body></html>", encoding="utf-8")
    (public / "assets" / "app.js").write_text("console.log('hi')", encoding="utf-8")
    return public


@pytest.fixture
def state():
    return ReviewState()


@pytest.fixture
def client(state, public_dir):
    return TestClient(create_app(state, public_dir))


@pytest.fixture
def report_data(sample_results):
    return build_report(sample_results, timestamp="2024-05-01T10:00:00").to_dict()


# ── Review data ──────────────────────────────────────────────────


class TestReviewData:
    def test_404_before_publish(self, client):
        resp = client.get("/api/review-data")
        assert resp.status_code == 404
        body = resp.json()
        assert "error" in body
        assert "message" in body

    def test_returns_published_report(self, client, state, report_data):
        state.publish(report_data)
        resp = client.get("/api/review-data")
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["data"] == report_data
        assert "timestamp" in body


class TestConfig:
    def test_config(self, client):
        body = client.get("/api/config").json()
        assert body["success"] is True
        assert body["config"]["version"] == __version__
        assert body["config"]["features"] == ["export", "theme-toggle", "real-time"]
        assert body["config"]["supportedFormats"] == ["markdown", "pdf", "json"]


# ── Export ───────────────────────────────────────────────────────


class TestExport:
    def test_no_data(self, client):
        resp = client.post("/api/export", json={"format": "markdown"})
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_markdown_from_state(self, client, state, report_data):
        state.publish(report_data)
        body = client.post("/api/export", json={}).json()
        assert body["success"] is True
        assert body["format"] == "markdown"
        assert body["content"].startswith("# AI Code Review Report")
        assert body["filename"].startswith("AI_CODE_REVIEW-")
        assert body["filename"].endswith(".md")

    def test_json_from_body(self, client, report_data):
        body = client.post("/api/export", json={"format": "json", "data": report_data}).json()
        assert body["format"] == "json"
        assert body["filename"].endswith(".json")
        assert json.loads(body["content"]) == report_data

    def test_empty_body(self, client, state, report_data):
        state.publish(report_data)
        resp = client.post("/api/export", content=b"")
        assert resp.status_code == 200
        assert resp.json()["format"] == "markdown"

    @pytest.mark.parametrize(
        "data",
        [
            ["not", "a", "report"],
            "a string",
            {"summary": ["total", 3], "files": []},
            {"summary": {}, "files": "src/app.js"},
            {"summary": {}, "files": ["src/app.js"]},
        ],
    )
    def test_malformed_data_is_rejected(self, client, data):
        resp = client.post("/api/export", json={"format": "markdown", "data": data})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid report data"}


# ── Commit decision ──────────────────────────────────────────────


class TestCommit:
    def test_default_is_continue(self, client, state):
        body = client.post("/api/commit").json()
        assert body["success"] is True
        assert body["action"] == "continue-commit"
        assert state.decision is True

    def test_abort(self, client, state):
        body = client.post("/api/commit", json={"proceed": False}).json()
        assert body["action"] == "abort-commit"
        assert state.decision is False

    @pytest.mark.parametrize("value", ["false", "FALSE", "no", "0"])
    def test_string_false_aborts(self, client, state, value):
        body = client.post("/api/commit", json={"proceed": value}).json()
        assert body["action"] == "abort-commit"
        assert state.decision is False

    def test_string_true_continues(self, client, state):
        body = client.post("/api/commit", json={"proceed": "true"}).json()
        assert body["action"] == "continue-commit"
        assert state.decision is True

    @pytest.mark.parametrize("value", ["maybe", 0, [], {"x": 1}])
    def test_unrecognized_value_is_rejected(self, client, state, value):
        resp = client.post("/api/commit", json={"proceed": value})
        assert resp.status_code == 400
        assert state.decision is None

    def test_first_decision_wins(self, client, state):
        client.post("/api/commit", json={"proceed": False})
        body = client.post("/api/commit", json={"proceed": True}).json()
        assert body["message"] == "Commit decision already recorded"
        assert state.decision is False


# ── Routing ──────────────────────────────────────────────────────


class TestRouting:
    @pytest.mark.parametrize("path", ["/api/nope", "/api/review-data/extra", "/api"])
    def test_unknown_api_path(self, client, path):
        resp = client.get(path)
        assert resp.status_code == 404
        assert resp.json() == {"error": "API endpoint not found"}

    @pytest.mark.parametrize("path", ["/", "/files/abc123", "/settings"])
    def test_spa_paths_serve_index(self, client, path):
        resp = client.get(path)
        assert resp.status_code == 200
        assert "dashboard" in resp.text
        assert resp.headers["content-type"].startswith("text/html")

    def test_assets(self, client):
        resp = client.get("/assets/app.js")
        assert resp.status_code == 200
        assert "console.log" in resp.text

    def test_unbuilt_dashboard(self, state, tmp_path):
        client = TestClient(create_app(state, tmp_path / "empty"))
        assert client.get("/").status_code == 503
        assert client.get("/api/config").status_code == 200
