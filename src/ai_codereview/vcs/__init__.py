"""Version-control adapter: one capability surface over git and svn.

Backends are selected once per run, either from an explicit type or by
probing for a control directory (``.git`` first, then ``.svn``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Protocol, Union

from ..exceptions import InvalidConfigError
from ..logging_config import get_logger
from .filters import GIT_RULES, SVN_RULES, FilterRules, filter_relevant
from .git import GitBackend
from .svn import SvnBackend, parse_status

logger = get_logger(__name__)


class VcsBackend(Protocol):
    """Capabilities the review pipeline needs from a version-control system."""

    name: str
    description: str

    def list_changed_files(self) -> list[str]: ...

    def diff(self, path: str) -> str: ...

    def all_diff(self) -> str: ...

    def content(self, path: str) -> str: ...

    def filter_relevant(self, paths: Iterable[str]) -> list[str]: ...

    def commit_message(self) -> str: ...


def detect_vcs_type(root: Optional[Path] = None) -> str:
    """Probe *root* for a control directory; git when nothing is found."""
    root = root or Path.cwd()
    if (root / ".git").exists():
        return "git"
    if (root / ".svn").exists():
        return "svn"
    logger.warning("No version control system detected, defaulting to git")
    return "git"


def select_backend(
    explicit_type: Optional[str] = None, root: Optional[Path] = None
) -> Union[GitBackend, SvnBackend]:
    """Return the backend for *explicit_type*, or the auto-detected one.

    Raises:
        InvalidConfigError: If *explicit_type* names an unknown system
    """
    root = root or Path.cwd()
    vcs_type = (explicit_type or detect_vcs_type(root)).strip().lower()

    if vcs_type == "git":
        backend: Union[GitBackend, SvnBackend] = GitBackend(root=root)
    elif vcs_type == "svn":
        backend = SvnBackend(root=root)
    else:
        raise InvalidConfigError("VCS_TYPE", explicit_type, "expected git or svn")

    logger.info("Using %s version control", backend.name)
    return backend


__all__ = [
    "VcsBackend",
    "GitBackend",
    "SvnBackend",
    "FilterRules",
    "GIT_RULES",
    "SVN_RULES",
    "detect_vcs_type",
    "filter_relevant",
    "parse_status",
    "select_backend",
]
