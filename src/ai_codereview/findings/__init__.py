"""Findings aggregation: structured issues, suggestions and statistics."""

from .aggregator import (
    build_report,
    build_summary,
    extract_issues,
    extract_suggestions,
    file_id,
)
from .models import FindingsReport, Issue, ProcessedFile, ReviewStats, Suggestion, Summary

__all__ = [
    "FindingsReport",
    "Issue",
    "ProcessedFile",
    "ReviewStats",
    "Suggestion",
    "Summary",
    "build_report",
    "build_summary",
    "extract_issues",
    "extract_suggestions",
    "file_id",
]
