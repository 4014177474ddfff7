"""Analysis pipeline: one review call per changed file.

Files are processed strictly one at a time in change-set order, so results
come back in that same order. A failing review call costs only its own file.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Protocol

from ..logging_config import get_logger
from .models import AnalysisResult
from .vocabulary import DEFAULT_VOCABULARY, Vocabulary, detect_issues

logger = get_logger(__name__)


class Reviewer(Protocol):
    def review(self, filename: str, diff: str, content: str = "") -> str: ...


class SourceReader(Protocol):
    def diff(self, path: str) -> str: ...

    def content(self, path: str) -> str: ...


class AnalysisPipeline:
    """Drives the reviewer over a filtered change set."""

    def __init__(
        self,
        backend: SourceReader,
        reviewer: Reviewer,
        vocabulary: Vocabulary = DEFAULT_VOCABULARY,
        on_file: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.backend = backend
        self.reviewer = reviewer
        self.vocabulary = vocabulary
        self.on_file = on_file

    def analyze(self, change_set: Iterable[str]) -> list[AnalysisResult]:
        results: list[AnalysisResult] = []
        for filename in change_set:
            if self.on_file is not None:
                self.on_file(filename)
            result = self.analyze_file(filename)
            if result is not None:
                results.append(result)
        logger.info("Analyzed %d file(s)", len(results))
        return results

    def analyze_file(self, filename: str) -> Optional[AnalysisResult]:
        """Review one file; None when it has no diff or the review failed."""
        diff = self.backend.diff(filename)
        if not diff or not diff.strip():
            logger.debug("No diff for %s, skipping", filename)
            return None

        content = self.backend.content(filename)

        try:
            analysis = self.reviewer.review(filename, diff, content)
        except Exception as exc:
            logger.error("Error analyzing %s: %s", filename, exc)
            return None

        return AnalysisResult(
            filename=filename,
            analysis=analysis,
            has_issues=detect_issues(analysis, self.vocabulary),
            diff=diff,
        )
