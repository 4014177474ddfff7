"""OpenAI-compatible review client.

Any chat-completions service that speaks the OpenAI protocol works
(DeepSeek, Moonshot, a local Ollama, ...); only the base URL and model
differ. Each call reviews one file and returns the model's free text.
"""

from __future__ import annotations

from typing import Any, Optional

from openai import OpenAI

from ..config import ReviewConfig
from ..exceptions import ReviewerInitError, ReviewRequestError
from ..logging_config import get_logger

logger = get_logger(__name__)

# Full file content is context only; cap it to bound the request size
CONTENT_CONTEXT_LIMIT = 2000

DEFAULT_SYSTEM_PROMPT = """You are an expert code reviewer. Review the code change you are given and focus on:
1. Code quality and best practices
2. Potential bugs and security issues
3. Performance improvements
4. Readability and maintainability
5. Test coverage suggestions

Keep the reply short and clear. If there are no problems, simply confirm that the code looks good."""


def truncate_context(content: str, limit: int = CONTENT_CONTEXT_LIMIT) -> str:
    """Cut *content* to *limit* characters, marking the cut with ``...``."""
    if len(content) > limit:
        return content[:limit] + "..."
    return content


def build_prompt(filename: str, diff: str, content: str = "") -> str:
    """User message for one file: the diff verbatim plus truncated context."""
    parts = [f"File: {filename}", "", "Code change:", "```diff", diff, "```", ""]
    if content:
        parts.extend(
            [
                "Full file content (for context only):",
                "```",
                truncate_context(content),
                "```",
                "",
            ]
        )
    parts.append("Please review this change and give your feedback.")
    return "\n".join(parts)


class ReviewClient:
    """Sends one review request per file to the configured service."""

    def __init__(self, config: ReviewConfig, client: Optional[Any] = None) -> None:
        """Build the client.

        Args:
            config: Resolved run configuration
            client: Pre-built OpenAI client (tests inject a fake here)

        Raises:
            ReviewerInitError: If no API key is configured or the client
                cannot be constructed
        """
        self.model = config.model
        self.max_tokens = config.max_tokens
        self.temperature = config.temperature
        self.system_prompt = config.system_prompt or DEFAULT_SYSTEM_PROMPT

        if client is not None:
            self._client = client
            return

        if not config.api_key:
            raise ReviewerInitError(
                "API_KEY is not set. Run 'ai-codereview init-config' to create a config file"
            )

        try:
            self._client = OpenAI(api_key=config.api_key, base_url=config.base_url)
        except Exception as exc:
            raise ReviewerInitError(str(exc)) from exc

        logger.info("Review client ready (model=%s, base_url=%s)", self.model, config.base_url)

    def review(self, filename: str, diff: str, content: str = "") -> str:
        """Return the service's review of one file's change.

        Raises:
            ReviewRequestError: On any transport, auth, quota or response error
        """
        prompt = build_prompt(filename, diff, content)
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": self.system_prompt},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except Exception as exc:
            raise ReviewRequestError(filename, str(exc)) from exc

        try:
            text = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as exc:
            raise ReviewRequestError(filename, f"malformed response: {exc}") from exc

        if not text or not text.strip():
            raise ReviewRequestError(filename, "empty response")
        return text.strip()
