"""Keyword vocabulary for classifying free-text review output.

The review service answers in prose, not structured data, so every
classification here is a shallow, case-insensitive lexical pass. Results are
best-effort signals, not ground truth.

All keyword tables live in one frozen Vocabulary value so callers (and tests)
can substitute their own tables without touching the classifiers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

# (label, keywords) pairs, checked in order; first match wins
Tiers = Sequence[tuple[str, tuple[str, ...]]]


@dataclass(frozen=True)
class Vocabulary:
    """Keyword tables used by the pipeline and the findings aggregator.

    Attributes:
        issue_indicators: Any match marks a whole file as having issues
        problem_terms: A line with any of these becomes an Issue
        suggestion_terms: A line with any of these becomes a Suggestion
        issue_types: Issue type tiers (security > performance > bug > maintainability)
        issue_severity: Per-issue severity tiers (high, medium; else low)
        suggestion_priority: Per-suggestion priority tiers (high, medium; else low)
        file_severity: Whole-analysis severity tiers (high, medium; else low)
        maintainability_terms: Counted in stats.maintainability_issues
    """

    issue_indicators: tuple[str, ...] = (
        "error",
        "issue",
        "problem",
        "bug",
        "security",
        "performance",
        "suggest fixing",
        "needs attention",
    )
    problem_terms: tuple[str, ...] = ("issue", "problem", "error", "bug", "security")
    suggestion_terms: tuple[str, ...] = ("suggest", "recommend", "optimiz", "improve")
    issue_types: Tiers = (
        ("security", ("security", "sql injection", "xss")),
        ("performance", ("performance", "optimiz")),
        ("bug", ("bug", "error")),
        ("maintainability", ("readability", "maintainab")),
    )
    issue_severity: Tiers = (
        ("high", ("severe", "critical", "security", "sql injection")),
        ("medium", ("important", "performance")),
    )
    suggestion_priority: Tiers = (
        ("high", ("strongly suggest", "strongly recommend", "must")),
        ("medium", ("as soon as possible", "asap")),
    )
    file_severity: Tiers = (
        ("high", ("severe", "critical", "security risk")),
        ("medium", ("suggest fixing", "needs attention")),
    )
    maintainability_terms: tuple[str, ...] = ("maintainab", "readability")


DEFAULT_VOCABULARY = Vocabulary()


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """Case-insensitive substring match of any keyword."""
    lowered = text.lower()
    return any(keyword.lower() in lowered for keyword in keywords)


def classify_tier(text: str, tiers: Tiers, default: str) -> str:
    """Label of the first tier with a matching keyword, else *default*."""
    for label, keywords in tiers:
        if contains_any(text, keywords):
            return label
    return default


def detect_issues(analysis: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> bool:
    """Whether the analysis text mentions anything issue-like."""
    return contains_any(analysis, vocabulary.issue_indicators)


def issue_type(line: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str:
    return classify_tier(line, vocabulary.issue_types, "general")


def issue_severity(line: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str:
    return classify_tier(line, vocabulary.issue_severity, "low")


def suggestion_priority(line: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str:
    return classify_tier(line, vocabulary.suggestion_priority, "low")


def file_severity(analysis: str, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> str:
    return classify_tier(analysis, vocabulary.file_severity, "low")
