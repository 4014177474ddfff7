"""
AI Code Review - pre-commit review gate for git and svn

Sends every changed file to an OpenAI-compatible review service, presents
the findings on the console, in a Markdown report or on a local web
dashboard, and lets the developer decide whether the commit goes ahead.
"""

__version__ = "1.5.2"
__author__ = "AI Code Review contributors"

from .findings import FindingsReport, build_report
from .orchestrator import run_review
from .review import AnalysisPipeline, AnalysisResult, ReviewClient
from .vcs import select_backend

__all__ = [
    "run_review",  # Main entry point (what the hook runs)
    "select_backend",
    "AnalysisPipeline",
    "AnalysisResult",
    "ReviewClient",
    "FindingsReport",
    "build_report",
]
