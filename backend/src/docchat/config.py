"""Configuration system for the docchat backend.

Settings come from two places: an optional INI file holding tunable limits
(validated against CONFIG_SCHEMA), and environment variables holding
credentials, model names and deployment mode. Everything is read once at
startup and treated as read-only afterwards.
"""

from configparser import ConfigParser
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional
import os

from docchat.constants.chat import (
    IMPORTANT_BUDGET_RATIO,
    LOG_PREVIEW_LENGTH,
    MAX_DOCS_LENGTH,
    MAX_QUESTION_LENGTH,
)
from docchat.constants.llm import (
    DEFAULT_FALLBACK_MODEL,
    DEFAULT_PRIMARY_MODEL,
    DEFAULT_PROVIDER,
    DEFAULT_TEMPERATURE,
    MAX_TOKENS,
    REQUEST_TIMEOUT_SECONDS,
    TOKENS_PER_CHAR,
)


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# Schema: section -> key -> (type, default, min, max, description)
CONFIG_SCHEMA: dict[str, dict[str, tuple[type, Any, Any, Any, str]]] = {
    "chat": {
        "max_question_length": (int, MAX_QUESTION_LENGTH, 1, 10_000, "Max question characters"),
        "max_docs_length": (int, MAX_DOCS_LENGTH, 100, 1_000_000, "Docs truncation budget"),
        "important_budget_ratio": (
            float,
            IMPORTANT_BUDGET_RATIO,
            0.0,
            1.0,
            "Share of the budget reserved for important lines",
        ),
        "log_preview_length": (int, LOG_PREVIEW_LENGTH, 10, 1000, "Question preview in logs"),
    },
    "llm": {
        "max_tokens": (int, MAX_TOKENS, 256, 32768, "Max response tokens"),
        "temperature": (float, DEFAULT_TEMPERATURE, 0.0, 2.0, "Completion temperature"),
        "request_timeout": (float, REQUEST_TIMEOUT_SECONDS, 1.0, 600.0, "Seconds per LLM call"),
        "tokens_per_char": (float, TOKENS_PER_CHAR, 0.1, 1.0, "Token estimation multiplier"),
    },
}


@dataclass(frozen=True)
class ChatConfig:
    """Request limits for the chat endpoint."""

    max_question_length: int
    max_docs_length: int
    important_budget_ratio: float
    log_preview_length: int


@dataclass(frozen=True)
class LLMConfig:
    """Parameters shared by every completion call."""

    max_tokens: int
    temperature: float
    request_timeout: float
    tokens_per_char: float


def _defaults(section: str) -> dict[str, Any]:
    return {key: default for key, (_, default, _, _, _) in CONFIG_SCHEMA[section].items()}


def _load_section(
    parser: ConfigParser, section: str, schema: dict[str, tuple[type, Any, Any, Any, str]]
) -> dict[str, Any]:
    """Load and validate a configuration section.

    Args:
        parser: ConfigParser instance with loaded config
        section: Section name to load
        schema: Schema definition for the section

    Returns:
        Dictionary of validated configuration values

    Raises:
        ConfigError: If validation fails
    """
    result = {}

    for key, (typ, default, min_val, max_val, _) in schema.items():
        if parser.has_option(section, key):
            raw_value = parser.get(section, key)
            value: int | float | str
            try:
                if typ is int:
                    value = int(raw_value)
                elif typ is float:
                    value = float(raw_value)
                else:
                    value = raw_value
            except ValueError as e:
                raise ConfigError(
                    f"Invalid value for [{section}].{key}: {raw_value!r} (expected {typ.__name__})"
                ) from e
        else:
            value = default

        if typ in (int, float) and value is not None:
            if min_val is not None and value < min_val:
                raise ConfigError(
                    f"Value for [{section}].{key} is {value}, but minimum is {min_val}"
                )
            if max_val is not None and value > max_val:
                raise ConfigError(
                    f"Value for [{section}].{key} is {value}, but maximum is {max_val}"
                )

        result[key] = value

    return result


def _load_sections(config_path: Optional[Path] = None) -> tuple[ChatConfig, LLMConfig]:
    """Load the tunable sections from an INI file, falling back to schema defaults."""
    parser = ConfigParser()

    if config_path and config_path.exists():
        parser.read(config_path)

    chat = ChatConfig(**_load_section(parser, "chat", CONFIG_SCHEMA["chat"]))
    llm = LLMConfig(**_load_section(parser, "llm", CONFIG_SCHEMA["llm"]))
    return chat, llm


@dataclass(frozen=True)
class Config:
    """Complete application configuration."""

    provider_api_key: Optional[str] = None
    api_key: Optional[str] = None
    provider: str = DEFAULT_PROVIDER
    primary_model: str = DEFAULT_PRIMARY_MODEL
    fallback_model: str = DEFAULT_FALLBACK_MODEL
    environment: str = "production"
    data_dir: Path = None  # type: ignore[assignment]  # Set in __post_init__ if None

    chat: ChatConfig = None  # type: ignore[assignment]
    llm: LLMConfig = None  # type: ignore[assignment]

    def __post_init__(self):
        """Fill in section configs and data dir with defaults if not provided."""
        if self.data_dir is None:
            object.__setattr__(self, "data_dir", Path.home() / ".docchat")
        if self.chat is None:
            object.__setattr__(self, "chat", ChatConfig(**_defaults("chat")))
        if self.llm is None:
            object.__setattr__(self, "llm", LLMConfig(**_defaults("llm")))

    @property
    def is_production(self) -> bool:
        """Whether raw error details must be hidden from callers."""
        return self.environment != "development"

    @property
    def provider_configured(self) -> bool:
        """Whether the completion provider credential is present."""
        return bool(self.provider_api_key)

    @property
    def api_key_required(self) -> bool:
        """Whether callers must present a matching x-api-key header."""
        return bool(self.api_key)

    @property
    def models(self) -> list[str]:
        """Models to try, in order. Duplicates are dropped."""
        ordered = [self.primary_model]
        if self.fallback_model and self.fallback_model != self.primary_model:
            ordered.append(self.fallback_model)
        return ordered

    @property
    def db_path(self) -> Path:
        """Path to the SQLite database file."""
        return self.data_dir / "docchat.db"

    @property
    def llm_log_path(self) -> Path:
        """Path to the LLM query log file."""
        return self.data_dir / "logs" / "llm-queries.jsonl"


@lru_cache(maxsize=1)
def load_settings() -> Config:
    """Load settings from environment variables and config file.

    Settings are cached for the lifetime of the application.
    Use load_settings.cache_clear() to reload settings.

    Returns:
        Config object populated from environment variables and config file.

    Raises:
        ConfigError: If the config file holds invalid values.
    """
    config_path_str = os.getenv("DOCCHAT_CONFIG")
    chat, llm = _load_sections(Path(config_path_str) if config_path_str else None)

    data_dir_str = os.getenv("DOCCHAT_DATA_DIR")
    data_dir = Path(data_dir_str) if data_dir_str else Path.home() / ".docchat"

    return Config(
        provider_api_key=os.getenv("GROQ_API_KEY") or None,
        api_key=os.getenv("API_KEY") or None,
        provider=os.getenv("LLM_PROVIDER", DEFAULT_PROVIDER),
        primary_model=os.getenv("PRIMARY_MODEL", DEFAULT_PRIMARY_MODEL),
        fallback_model=os.getenv("FALLBACK_MODEL", DEFAULT_FALLBACK_MODEL),
        environment=os.getenv("DOCCHAT_ENV", "production"),
        data_dir=data_dir,
        chat=chat,
        llm=llm,
    )


# Alias used by API dependencies
Settings = Config
