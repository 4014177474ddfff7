"""Per-file analysis result."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AnalysisResult:
    """One reviewed file.

    Attributes:
        filename: Path as reported by the VCS backend
        analysis: The review service's free-text answer
        has_issues: Best-effort keyword classification of *analysis*
        diff: The diff that was reviewed
    """

    filename: str
    analysis: str
    has_issues: bool
    diff: str = ""

    def to_dict(self) -> dict:
        return {
            "filename": self.filename,
            "analysis": self.analysis,
            "hasIssues": self.has_issues,
            "diff": self.diff,
        }
