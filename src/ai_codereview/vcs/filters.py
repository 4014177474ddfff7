"""Change filter: select analyzable files from a raw changed-file list.

A path is kept only if its extension is on the allow-list and none of the
excluded path segments occur in it. Order is preserved, so filtering an
already-filtered list returns it unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class FilterRules:
    """Backend-specific allow-list and exclusion list."""

    extensions: tuple[str, ...]
    ignored_segments: tuple[str, ...]

    def has_relevant_extension(self, path: str) -> bool:
        return any(path.endswith(ext) for ext in self.extensions)

    def is_ignored(self, path: str) -> bool:
        normalized = path.replace("\\", "/")
        return any(segment in normalized for segment in self.ignored_segments)

    def accepts(self, path: str) -> bool:
        return self.has_relevant_extension(path) and not self.is_ignored(path)


GIT_RULES = FilterRules(
    extensions=(".js", ".jsx", ".ts", ".tsx", ".vue", ".py", ".java", ".go", ".php", ".rb"),
    ignored_segments=("node_modules/", "dist/", "build/", ".git/", "coverage/"),
)

SVN_RULES = FilterRules(
    extensions=GIT_RULES.extensions + (".c", ".cpp", ".h", ".hpp"),
    ignored_segments=(
        "node_modules/",
        "dist/",
        "build/",
        ".svn/",
        "coverage/",
        "target/",
        "bin/",
        "obj/",
    ),
)


def filter_relevant(paths: Iterable[str], rules: FilterRules) -> list[str]:
    """Return the paths accepted by *rules*, in input order."""
    return [path for path in paths if rules.accepts(path)]
