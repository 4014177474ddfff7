"""Structured findings built from raw analysis results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Issue:
    type: str  # security|performance|bug|maintainability|general
    description: str
    severity: str  # high|medium|low

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "description": self.description, "severity": self.severity}


@dataclass(frozen=True)
class Suggestion:
    type: str
    description: str
    priority: str  # high|medium|low

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "description": self.description, "priority": self.priority}


@dataclass(frozen=True)
class ProcessedFile:
    """An AnalysisResult enriched for display."""

    id: str
    filename: str  # basename
    full_path: str
    directory: str
    extension: str
    status: str  # success|warning
    analysis: str
    has_issues: bool
    diff: str
    icon: str
    issues: tuple[Issue, ...]
    suggestions: tuple[Suggestion, ...]
    severity: str
    size: str  # small|medium|large

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "filename": self.filename,
            "fullPath": self.full_path,
            "directory": self.directory,
            "extension": self.extension,
            "status": self.status,
            "analysis": self.analysis,
            "hasIssues": self.has_issues,
            "diff": self.diff,
            "icon": self.icon,
            "issues": [i.to_dict() for i in self.issues],
            "suggestions": [s.to_dict() for s in self.suggestions],
            "severity": self.severity,
            "size": self.size,
        }


@dataclass(frozen=True)
class Summary:
    total: int
    passed: int
    has_issues: int
    success_rate: int

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "passed": self.passed,
            "hasIssues": self.has_issues,
            "successRate": self.success_rate,
        }


@dataclass
class ReviewStats:
    """Counts over files with issues, plus per-extension totals."""

    total_issues: int = 0
    security_issues: int = 0
    performance_issues: int = 0
    maintainability_issues: int = 0
    by_language: dict[str, dict[str, int]] = field(default_factory=dict)
    by_severity: dict[str, int] = field(
        default_factory=lambda: {"high": 0, "medium": 0, "low": 0}
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalIssues": self.total_issues,
            "securityIssues": self.security_issues,
            "performanceIssues": self.performance_issues,
            "maintainabilityIssues": self.maintainability_issues,
            "byLanguage": {ext: dict(counts) for ext, counts in self.by_language.items()},
            "bySeverity": dict(self.by_severity),
        }


@dataclass(frozen=True)
class FindingsReport:
    """Everything one run found; read-only once built."""

    summary: Summary
    files: tuple[ProcessedFile, ...]
    stats: ReviewStats
    timestamp: str
    config: dict[str, Any] = field(default_factory=dict)

    @property
    def has_issues(self) -> bool:
        return self.summary.has_issues > 0

    def file_by_id(self, file_id: str) -> ProcessedFile | None:
        for f in self.files:
            if f.id == file_id:
                return f
        return None

    def to_dict(self) -> dict[str, Any]:
        """Dashboard projection (the ``data`` of ``GET /api/review-data``)."""
        return {
            "summary": self.summary.to_dict(),
            "files": [f.to_dict() for f in self.files],
            "timestamp": self.timestamp,
            "stats": self.stats.to_dict(),
            "config": dict(self.config),
        }
