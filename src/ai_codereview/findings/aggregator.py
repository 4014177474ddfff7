"""Build a FindingsReport from the pipeline's AnalysisResults.

Issue and suggestion extraction is a line-by-line keyword scan over the
review text (see review.vocabulary); the model is free to answer in prose.
"""

from __future__ import annotations

import hashlib
import posixpath
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from ..review.models import AnalysisResult
from ..review.vocabulary import (
    DEFAULT_VOCABULARY,
    Vocabulary,
    contains_any,
    file_severity,
    issue_severity,
    issue_type,
    suggestion_priority,
)
from .models import FindingsReport, Issue, ProcessedFile, ReviewStats, Suggestion, Summary

# Extension -> dashboard icon class
ICON_MAP: dict[str, str] = {
    ".js": "fab fa-js-square",
    ".jsx": "fab fa-react",
    ".ts": "fab fa-js-square",
    ".tsx": "fab fa-react",
    ".vue": "fab fa-vuejs",
    ".css": "fab fa-css3-alt",
    ".scss": "fab fa-sass",
    ".sass": "fab fa-sass",
    ".less": "fab fa-css3-alt",
    ".html": "fab fa-html5",
    ".htm": "fab fa-html5",
    ".json": "fas fa-file-code",
    ".xml": "fas fa-file-code",
    ".yaml": "fas fa-file-code",
    ".yml": "fas fa-file-code",
    ".md": "fab fa-markdown",
    ".py": "fab fa-python",
    ".java": "fab fa-java",
    ".go": "fas fa-code",
    ".php": "fab fa-php",
    ".rb": "fas fa-gem",
    ".swift": "fab fa-swift",
    ".kt": "fas fa-code",
    ".rs": "fas fa-code",
    ".c": "fas fa-file-code",
    ".cpp": "fas fa-file-code",
    ".h": "fas fa-file-code",
    ".cs": "fas fa-file-code",
    ".sql": "fas fa-database",
    ".sh": "fas fa-terminal",
    ".bat": "fas fa-terminal",
    ".ps1": "fas fa-terminal",
}
DEFAULT_ICON = "fas fa-file-code"


def file_id(filename: str) -> str:
    """Stable 8-hex-char id derived from the filename alone."""
    return hashlib.md5(filename.encode("utf-8"), usedforsecurity=False).hexdigest()[:8]


def file_icon(extension: str) -> str:
    return ICON_MAP.get(extension, DEFAULT_ICON)


def split_path(path: str) -> tuple[str, str, str]:
    """(basename, directory, extension); directory is '' for top-level files."""
    normalized = path.replace("\\", "/")
    basename = posixpath.basename(normalized)
    directory = posixpath.dirname(normalized)
    extension = posixpath.splitext(basename)[1]
    return basename, "" if directory == "." else directory, extension


def estimate_size(analysis: str) -> str:
    length = len(analysis)
    if length > 500:
        return "large"
    if length > 200:
        return "medium"
    return "small"


def extract_issues(analysis: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> list[Issue]:
    issues = []
    for line in analysis.splitlines():
        if not line.strip() or not contains_any(line, vocabulary.problem_terms):
            continue
        issues.append(
            Issue(
                type=issue_type(line, vocabulary),
                description=line.strip(),
                severity=issue_severity(line, vocabulary),
            )
        )
    return issues


def extract_suggestions(
    analysis: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> list[Suggestion]:
    suggestions = []
    for line in analysis.splitlines():
        if not line.strip() or not contains_any(line, vocabulary.suggestion_terms):
            continue
        suggestions.append(
            Suggestion(
                type="improvement",
                description=line.strip(),
                priority=suggestion_priority(line, vocabulary),
            )
        )
    return suggestions


def build_summary(results: Sequence[AnalysisResult]) -> Summary:
    total = len(results)
    has_issues = sum(1 for r in results if r.has_issues)
    passed = total - has_issues
    # Nothing reviewed counts as a full pass
    success_rate = round(passed / total * 100) if total > 0 else 100
    return Summary(total=total, passed=passed, has_issues=has_issues, success_rate=success_rate)


def process_file(
    result: AnalysisResult, vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> ProcessedFile:
    basename, directory, extension = split_path(result.filename)
    return ProcessedFile(
        id=file_id(result.filename),
        filename=basename,
        full_path=result.filename,
        directory=directory,
        extension=extension,
        status="warning" if result.has_issues else "success",
        analysis=result.analysis,
        has_issues=result.has_issues,
        diff=result.diff,
        icon=file_icon(extension),
        issues=tuple(extract_issues(result.analysis, vocabulary)),
        suggestions=tuple(extract_suggestions(result.analysis, vocabulary)),
        severity=file_severity(result.analysis, vocabulary),
        size=estimate_size(result.analysis),
    )


def build_stats(
    results: Sequence[AnalysisResult], vocabulary: Vocabulary = DEFAULT_VOCABULARY
) -> ReviewStats:
    stats = ReviewStats()
    type_terms = dict(vocabulary.issue_types)
    for r in results:
        extension = split_path(r.filename)[2]
        counts = stats.by_language.setdefault(extension, {"total": 0, "issues": 0})
        counts["total"] += 1
        if not r.has_issues:
            continue

        counts["issues"] += 1
        stats.total_issues += 1
        if contains_any(r.analysis, type_terms.get("security", ())):
            stats.security_issues += 1
        if contains_any(r.analysis, type_terms.get("performance", ())):
            stats.performance_issues += 1
        if contains_any(r.analysis, vocabulary.maintainability_terms):
            stats.maintainability_issues += 1
        severity = file_severity(r.analysis, vocabulary)
        stats.by_severity[severity] = stats.by_severity.get(severity, 0) + 1
    return stats


def build_report(
    results: Sequence[AnalysisResult],
    run_meta: Optional[dict[str, Any]] = None,
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
    timestamp: Optional[str] = None,
) -> FindingsReport:
    """Convert analysis results into the report every delivery channel shows.

    Parameters
    ----------
    results:
        Pipeline output, in change-set order.
    run_meta:
        Free-form run metadata (VCS, output mode, model) carried to the dashboard.
    vocabulary:
        Keyword tables for issue/suggestion/severity classification.
    timestamp:
        ISO-8601 timestamp; defaults to now (UTC).
    """
    return FindingsReport(
        summary=build_summary(results),
        files=tuple(process_file(r, vocabulary) for r in results),
        stats=build_stats(results, vocabulary),
        timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
        config=dict(run_meta or {}),
    )
