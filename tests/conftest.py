"""Shared test fixtures for AI Code Review tests."""

import io
from typing import Dict, List, Optional, Union

import pytest
from rich.console import Console

from ai_codereview.review import AnalysisResult
from ai_codereview.vcs.filters import GIT_RULES, FilterRules, filter_relevant


class FakeBackend:
    """In-memory VCS backend."""

    name = "git"
    description = "fake backend"

    def __init__(
        self,
        changed: Optional[List[str]] = None,
        diffs: Optional[Dict[str, str]] = None,
        contents: Optional[Dict[str, str]] = None,
        rules: FilterRules = GIT_RULES,
    ):
        self.changed = list(changed or [])
        self.diffs = dict(diffs or {})
        self.contents = dict(contents or {})
        self.rules = rules

    def list_changed_files(self) -> List[str]:
        return list(self.changed)

    def filter_relevant(self, paths) -> List[str]:
        return filter_relevant(paths, self.rules)

    def diff(self, path: str) -> str:
        return self.diffs.get(path, "")

    def all_diff(self) -> str:
        return "".join(self.diffs.values())

    def content(self, path: str) -> str:
        return self.contents.get(path, "")

    def commit_message(self) -> str:
        return ""


class FakeReviewer:
    """Returns canned review text per file, or raises the canned exception."""

    def __init__(self, answers: Dict[str, Union[str, Exception]], default: str = "Looks good."):
        self.answers = answers
        self.default = default
        self.calls: List[tuple] = []

    def review(self, filename: str, diff: str, content: str = "") -> str:
        self.calls.append((filename, diff, content))
        answer = self.answers.get(filename, self.default)
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture
def make_backend():
    return FakeBackend


@pytest.fixture
def make_reviewer():
    return FakeReviewer


@pytest.fixture
def quiet_console():
    """Console writing into a buffer; read it back with ``.file.getvalue()``."""
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture
def sample_results():
    """One file with a security issue, one performance remark, one clean file."""
    return [
        AnalysisResult(
            filename="src/app.js",
            analysis="Critical: SQL injection security risk in query builder\nStrongly suggest using parameters",
            has_issues=True,
            diff="+db.query('SELECT ' + input)",
        ),
        AnalysisResult(
            filename="lib/util.py",
            analysis="There is a performance problem in the loop\nConsider caching the lookup",
            has_issues=True,
            diff="+for x in items:",
        ),
        AnalysisResult(
            filename="src/view.js",
            analysis="Looks good to me.",
            has_issues=False,
            diff="+render()",
        ),
    ]
