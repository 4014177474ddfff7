"""Version-control exceptions.

These never escape the VCS adapter: every backend operation catches them
and degrades to an empty result.
"""

from typing import List

from .base import AICodeReviewError


class VcsError(AICodeReviewError):
    """Raised when a VCS command cannot be executed or exits non-zero."""

    def __init__(self, command: List[str], reason: str):
        super().__init__(
            f"VCS command failed: {' '.join(command)}",
            details={"reason": reason},
        )
        self.command = command
        self.reason = reason
