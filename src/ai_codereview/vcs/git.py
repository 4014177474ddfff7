"""Git backend: reviews the staged changes (the index)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ..exceptions import VcsError
from ..logging_config import get_logger
from ._command import read_working_copy, run_vcs
from .filters import GIT_RULES, FilterRules, filter_relevant

logger = get_logger(__name__)


@dataclass
class GitBackend:
    """Staged-changes backend built on the ``git`` CLI."""

    root: Path = field(default_factory=Path.cwd)
    rules: FilterRules = GIT_RULES
    name: str = "git"
    description: str = "Git mode: reviewing staged files (added with git add)"

    def list_changed_files(self) -> list[str]:
        try:
            # -z: NUL-separated, paths never quoted
            output = run_vcs(["git", "diff", "--cached", "--name-only", "-z"], cwd=self.root)
        except VcsError as exc:
            logger.error("Error getting staged files: %s", exc)
            return []
        return [name for name in output.split("\0") if name.strip()]

    def diff(self, path: str) -> str:
        try:
            return run_vcs(["git", "diff", "--cached", "--", path], cwd=self.root)
        except VcsError as exc:
            logger.error("Error getting diff for %s: %s", path, exc)
            return ""

    def all_diff(self) -> str:
        try:
            return run_vcs(["git", "diff", "--cached"], cwd=self.root)
        except VcsError as exc:
            logger.error("Error getting staged diff: %s", exc)
            return ""

    def content(self, path: str) -> str:
        return read_working_copy(path, self.root)

    def filter_relevant(self, paths: Iterable[str]) -> list[str]:
        return filter_relevant(paths, self.rules)

    def commit_message(self) -> str:
        """Message of the commit in progress, if git has written one yet."""
        msg_path = self.root / ".git" / "COMMIT_EDITMSG"
        try:
            if msg_path.is_file():
                return msg_path.read_text(encoding="utf-8", errors="replace").strip()
        except OSError:
            logger.debug("Cannot read %s", msg_path)
        return ""
