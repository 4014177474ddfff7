"""Configuration loading and management for AI Code Review.

Configuration is read from ``.env``-style key/value files. Sources are merged
in priority order (lowest to highest):
    1. Package default config (ai_codereview/defaults.env)
    2. Installation-global config (<sys.prefix>/.ai-codereview.env)
    3. User global config (~/.ai-codereview.env)
    4. Project config (./.env)
    5. Process environment (recognized keys only)
    6. CLI overrides (passed as kwargs)

The merged result is a frozen ReviewConfig. Nothing is written back into
``os.environ``; callers receive the config value and pass it down.

Example:
    >>> config = load_config(output_mode="console")
    >>> config.delivery.output_mode
    'console'
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Mapping, Optional

from dotenv import dotenv_values

from .exceptions import ConfigTemplateError, InvalidConfigError
from .logging_config import get_logger

logger = get_logger(__name__)

OutputMode = Literal["console", "file", "web"]
OUTPUT_MODES: tuple[str, ...] = ("console", "file", "web")
VCS_TYPES: tuple[str, ...] = ("git", "svn")

CONFIG_FILENAME = ".ai-codereview.env"
PROJECT_CONFIG_FILENAME = ".env"
_PACKAGE_DEFAULTS = Path(__file__).parent / "defaults.env"

# Recognized keys -> ReviewConfig / DeliveryConfig field names
ENV_KEYS: dict[str, str] = {
    "API_KEY": "api_key",
    "OPENAI_API_KEY": "api_key",
    "AI_BASE_URL": "base_url",
    "AI_MODEL": "model",
    "AI_MAX_TOKENS": "max_tokens",
    "AI_TEMPERATURE": "temperature",
    "AI_OUTPUT_MODE": "output_mode",
    "AI_WEB_PORT": "web_port",
    "AI_AUTO_OPEN_BROWSER": "auto_open_browser",
    "VCS_TYPE": "vcs_type",
    "AI_REVIEW_SYSTEM_PROMPT": "system_prompt",
}

_DELIVERY_FIELDS = ("output_mode", "web_port", "auto_open_browser")


@dataclass(frozen=True)
class ConfigSource:
    """One ``.env`` file in the precedence chain."""

    label: str
    path: Path

    @property
    def exists(self) -> bool:
        return self.path.is_file()


@dataclass(frozen=True)
class DeliveryConfig:
    """How findings are presented to the developer.

    Attributes:
        output_mode: console, file (Markdown report) or web (local dashboard)
        web_port: Port the dashboard server binds on 127.0.0.1
        auto_open_browser: Open the dashboard in a browser once it is up
    """

    output_mode: OutputMode = "file"
    web_port: int = 3000
    auto_open_browser: bool = True

    def __post_init__(self) -> None:
        if self.output_mode not in OUTPUT_MODES:
            raise InvalidConfigError(
                "output_mode", self.output_mode, f"expected one of {', '.join(OUTPUT_MODES)}"
            )
        if not 1 <= self.web_port <= 65535:
            raise InvalidConfigError("web_port", self.web_port, "must be between 1 and 65535")


@dataclass(frozen=True)
class ReviewConfig:
    """Configuration for one review run.

    Attributes:
        Review service:
            api_key: Credential for the OpenAI-compatible service (None = unavailable)
            base_url: Service base URL
            model: Chat model name
            max_tokens: Response token cap per file
            temperature: Sampling temperature (0.0-2.0)
            system_prompt: Custom system instruction (None = built-in prompt)

        Version control:
            vcs_type: Explicit backend override (None = auto-detect)

        Output control:
            delivery: Resolved delivery channel settings
            debug: Debug logging requested

        Provenance:
            loaded_sources: Config files that contributed, lowest precedence first
    """

    api_key: Optional[str] = None
    base_url: str = "https://api.deepseek.com/v1"
    model: str = "deepseek-chat"
    max_tokens: int = 1000
    temperature: float = 0.3
    system_prompt: Optional[str] = None

    vcs_type: Optional[str] = None

    delivery: DeliveryConfig = field(default_factory=DeliveryConfig)
    debug: bool = False

    loaded_sources: tuple[ConfigSource, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_tokens < 1:
            raise InvalidConfigError("max_tokens", self.max_tokens, "must be at least 1")
        if not 0.0 <= self.temperature <= 2.0:
            raise InvalidConfigError(
                "temperature", self.temperature, "must be between 0.0 and 2.0"
            )
        if self.vcs_type is not None and self.vcs_type.lower() not in VCS_TYPES:
            raise InvalidConfigError(
                "vcs_type", self.vcs_type, f"expected one of {', '.join(VCS_TYPES)}"
            )


def default_sources(
    project_root: Optional[Path] = None, home: Optional[Path] = None
) -> list[ConfigSource]:
    """Return config sources ordered from lowest to highest precedence."""
    project_root = project_root or Path.cwd()
    sources = [ConfigSource("package default", _PACKAGE_DEFAULTS)]
    sources.append(ConfigSource("installation global", installation_config_path()))
    user_path = user_config_path(home)
    if user_path is not None:
        sources.append(ConfigSource("user global", user_path))
    sources.append(ConfigSource("project", project_root / PROJECT_CONFIG_FILENAME))
    return sources


def installation_config_path() -> Path:
    """Config file shared by every user of this Python installation."""
    return Path(sys.prefix) / CONFIG_FILENAME


def user_config_path(home: Optional[Path] = None) -> Optional[Path]:
    """Config file in the user's home directory, or None if there is no home."""
    if home is not None:
        return home / CONFIG_FILENAME
    try:
        return Path.home() / CONFIG_FILENAME
    except RuntimeError:
        return None


def load_config(
    sources: Optional[list[ConfigSource]] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> ReviewConfig:
    """Load configuration by merging every source in precedence order.

    Args:
        sources: Config files, lowest precedence first (default: default_sources())
        environ: Process environment to consult (default: os.environ)
        **overrides: Direct overrides from CLI flags; None values are ignored

    Returns:
        Validated ReviewConfig instance

    Raises:
        InvalidConfigError: If a value cannot be parsed or fails validation
    """
    if sources is None:
        sources = default_sources()
    if environ is None:
        environ = os.environ

    raw_fields: dict[str, tuple[str, str]] = {}
    loaded: list[ConfigSource] = []

    for source in sources:
        values = _read_env_file(source)
        if values is None:
            continue
        loaded.append(source)
        raw_fields.update(_recognized(values))

    raw_fields.update(_recognized(environ))

    fields: dict[str, Any] = {}
    for field_name, (key, raw) in raw_fields.items():
        fields[field_name] = _parse_value(field_name, raw, key)

    for name, value in overrides.items():
        if value is not None:
            fields[name] = value

    delivery_kwargs = {name: fields.pop(name) for name in _DELIVERY_FIELDS if name in fields}
    if "output_mode" in delivery_kwargs:
        delivery_kwargs["output_mode"] = str(delivery_kwargs["output_mode"]).lower()

    try:
        return ReviewConfig(
            delivery=DeliveryConfig(**delivery_kwargs),
            loaded_sources=tuple(loaded),
            **fields,
        )
    except TypeError as e:
        raise InvalidConfigError("overrides", overrides, str(e))


def _read_env_file(source: ConfigSource) -> Optional[dict[str, Optional[str]]]:
    """Parse one ``.env`` file; None when it is absent or unreadable."""
    if not source.exists:
        logger.debug("%s config not found: %s", source.label, source.path)
        return None
    try:
        values = dotenv_values(source.path, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Skipping %s config %s: %s", source.label, source.path, e)
        return None
    logger.debug("Loaded %s config: %s", source.label, source.path)
    return dict(values)


def _recognized(values: Mapping[str, Optional[str]]) -> dict[str, tuple[str, str]]:
    """Map recognized, non-empty keys to field_name -> (key, raw value)."""
    result: dict[str, tuple[str, str]] = {}
    # Reversed so API_KEY wins over its OPENAI_API_KEY alias within one source
    for key in reversed(list(ENV_KEYS)):
        value = values.get(key)
        if value is None or not str(value).strip():
            continue
        result[ENV_KEYS[key]] = (key, str(value).strip())
    return result


def _parse_value(field_name: str, value: str, key: str) -> Any:
    """Parse a raw string to the type of *field_name*."""
    try:
        if field_name in ("max_tokens", "web_port"):
            return int(value)
        if field_name == "temperature":
            return float(value)
        if field_name == "auto_open_browser":
            return parse_bool(value)
    except ValueError as e:
        raise InvalidConfigError(key, value, str(e))
    return value


def parse_bool(value: str) -> bool:
    """Accept true/false/1/0/yes/no/on/off."""
    lower = value.strip().lower()
    if lower in ("true", "1", "yes", "on"):
        return True
    if lower in ("false", "0", "no", "off"):
        return False
    raise ValueError(f"expected true/false, got '{value}'")


CONFIG_TEMPLATE = """# AI Code Review configuration
# Location: {location}
# Every project reviewed on this machine uses this file. A .env file in the
# project root takes precedence over it.

# ===========================================
# Required - API key
# ===========================================

API_KEY=your-api-key

# ===========================================
# Review service (optional)
# ===========================================

AI_BASE_URL=https://api.deepseek.com/v1
AI_MODEL=deepseek-chat
# AI_MAX_TOKENS=1000
# AI_TEMPERATURE=0.3

# Output mode (optional)
# file: write a Markdown report (default)
# console: print findings to the terminal
# web: serve a local dashboard
AI_OUTPUT_MODE=file
# AI_WEB_PORT=3000
# AI_AUTO_OPEN_BROWSER=true

# Version control system (optional, auto-detected when unset)
# VCS_TYPE=git

# Custom review instruction (optional)
# AI_REVIEW_SYSTEM_PROMPT=You are an expert code reviewer. Focus on bugs, security and performance.
"""


def write_config_template(path: Path, location: str) -> Path:
    """Write the commented config template to *path*.

    Raises:
        ConfigTemplateError: If the file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(CONFIG_TEMPLATE.format(location=location), encoding="utf-8")
    except OSError as e:
        raise ConfigTemplateError(path, str(e))
    return path


def describe_sources(sources: Optional[list[ConfigSource]] = None) -> list[tuple[int, ConfigSource]]:
    """Sources ranked for display, highest precedence first (rank 1)."""
    if sources is None:
        sources = default_sources()
    ordered = list(reversed(sources))
    return [(rank, source) for rank, source in enumerate(ordered, start=1)]
