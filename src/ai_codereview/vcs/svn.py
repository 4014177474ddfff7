"""SVN backend: reviews every working-copy modification.

SVN has no staging area, so the change set is whatever ``svn status``
reports as Modified, Added or Deleted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ..exceptions import VcsError
from ..logging_config import get_logger
from ._command import read_working_copy, run_vcs
from .filters import SVN_RULES, FilterRules, filter_relevant

logger = get_logger(__name__)

# "M       path/to/file" - status letter, whitespace, path
_STATUS_RE = re.compile(r"^[MAD]\s+(.+)$")


def parse_status(output: str) -> list[str]:
    """Extract paths from ``svn status`` output; unrecognized lines are dropped."""
    files = []
    for line in output.splitlines():
        match = _STATUS_RE.match(line)
        if match:
            path = match.group(1).strip()
            if path:
                files.append(path)
    return files


@dataclass
class SvnBackend:
    """Working-copy backend built on the ``svn`` CLI."""

    root: Path = field(default_factory=Path.cwd)
    rules: FilterRules = SVN_RULES
    name: str = "svn"
    description: str = "SVN mode: reviewing all modified files (M/A/D status)"

    def list_changed_files(self) -> list[str]:
        try:
            output = run_vcs(["svn", "status"], cwd=self.root)
        except VcsError as exc:
            logger.error("Error getting SVN modified files: %s", exc)
            return []
        return parse_status(output)

    def diff(self, path: str) -> str:
        try:
            return run_vcs(["svn", "diff", path], cwd=self.root)
        except VcsError as exc:
            logger.error("Error getting SVN diff for %s: %s", path, exc)
            return ""

    def all_diff(self) -> str:
        try:
            return run_vcs(["svn", "diff"], cwd=self.root)
        except VcsError as exc:
            logger.error("Error getting SVN diff: %s", exc)
            return ""

    def content(self, path: str) -> str:
        return read_working_copy(path, self.root)

    def filter_relevant(self, paths: Iterable[str]) -> list[str]:
        return filter_relevant(paths, self.rules)

    def commit_message(self) -> str:
        # svn takes the message on the command line; nothing to read ahead of time
        return ""
