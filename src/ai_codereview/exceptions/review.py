"""Review service exceptions: client setup and per-file requests."""

from .base import AICodeReviewError


class ReviewError(AICodeReviewError):
    """Base class for review-service errors."""

    pass


class ReviewerInitError(ReviewError):
    """Raised when the review client cannot be constructed (e.g. no API key).

    Surfaced to the top level, which offers a single skip-or-abort decision.
    """

    def __init__(self, reason: str):
        super().__init__(f"AI review service unavailable: {reason}", details={"reason": reason})
        self.reason = reason


class ReviewRequestError(ReviewError):
    """Raised when a single file's review request fails."""

    def __init__(self, filename: str, reason: str):
        super().__init__(
            f"Review request failed for {filename}",
            details={"filename": filename, "reason": reason},
        )
        self.filename = filename
        self.reason = reason
