"""Subprocess helpers shared by the VCS backends."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional

from ..exceptions import VcsError
from ..logging_config import get_logger

logger = get_logger(__name__)

# Seconds before a VCS command is abandoned
COMMAND_TIMEOUT = 30


def run_vcs(args: list[str], cwd: Optional[Path] = None) -> str:
    """Run a VCS command and return its stdout decoded as UTF-8.

    Raises:
        VcsError: If the executable is missing, times out or exits non-zero
    """
    logger.debug("Running VCS command: %s", " ".join(args))
    try:
        completed = subprocess.run(
            args,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            check=False,
            timeout=COMMAND_TIMEOUT,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        raise VcsError(args, str(exc)) from exc

    if completed.returncode != 0:
        stderr = completed.stderr.decode("utf-8", errors="replace").strip()
        raise VcsError(args, stderr or f"exit status {completed.returncode}")

    return completed.stdout.decode("utf-8", errors="replace")


def read_working_copy(path: str, root: Path) -> str:
    """Read a working-copy file as UTF-8; empty when missing or unreadable."""
    target = Path(path)
    if not target.is_absolute():
        target = root / target
    try:
        if not target.is_file():
            return ""
        return target.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.error("Error reading file %s: %s", path, exc)
        return ""
