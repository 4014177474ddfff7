"""Review service client, keyword vocabulary and per-file analysis pipeline."""

from .client import DEFAULT_SYSTEM_PROMPT, ReviewClient, build_prompt, truncate_context
from .models import AnalysisResult
from .pipeline import AnalysisPipeline
from .vocabulary import DEFAULT_VOCABULARY, Vocabulary, detect_issues

__all__ = [
    "AnalysisPipeline",
    "AnalysisResult",
    "ReviewClient",
    "DEFAULT_SYSTEM_PROMPT",
    "DEFAULT_VOCABULARY",
    "Vocabulary",
    "build_prompt",
    "detect_issues",
    "truncate_context",
]
