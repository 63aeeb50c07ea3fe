"""
Configuration management for ArticleLens using Pydantic.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, ClassVar, List, Optional, cast

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

# --- Nested Configuration Models ---


class ExtractionSettings(BaseModel):
    """Configuration for the candidate-region extraction heuristic."""

    boilerplate_selectors: List[str] = Field(
        default=[
            "script",
            "style",
            "nav",
            "header",
            "footer",
            "aside",
            ".sidebar",
            ".menu",
            ".navigation",
            ".advertisement",
            ".ad",
            ".social-share",
            ".comments",
            ".related-articles",
            '[class*="ad-"]',
            '[id*="ad-"]',
            ".popup",
            ".modal",
        ],
        description="Selectors hidden before scoring.",
    )
    content_selectors: List[str] = Field(
        default=[
            "article",
            '[role="main"]',
            ".post-content",
            ".article-content",
            ".entry-content",
            ".content",
            ".post-body",
            ".article-body",
            "main",
            ".main-content",
            ".story-body",
            ".article-text",
        ],
        description="Ordered candidate selectors. Earlier entries win ties.",
    )
    article_tag_boost: float = Field(default=1.5, gt=0, description="Multiplier for the bare 'article' selector.")
    content_name_boost: float = Field(default=1.3, gt=0, description="Multiplier for selectors containing 'content'.")
    article_name_boost: float = Field(default=1.3, gt=0, description="Multiplier for selectors containing 'article'.")
    min_word_count: int = Field(default=50, ge=0, description="Candidates must have strictly more words than this.")
    min_text_length: int = Field(
        default=200, ge=0, description="Winning text shorter than this falls back to the document body."
    )

    @field_validator("content_selectors")
    @classmethod
    def validate_content_selectors(cls, v: List[str]) -> List[str]:
        """Ensure there is at least one candidate selector."""
        if not v:
            raise ValueError("content_selectors must contain at least one selector")
        return v


class SanitizerConfig(BaseModel):
    """Configuration for text normalization before prompting."""

    max_length: int = Field(default=50_000, gt=0, description="Character ceiling for extracted content.")
    truncation_marker: str = Field(default="...", description="Suffix appended when content is truncated.")
    preview_length: int = Field(default=2_000, gt=0, description="Characters shown by 'show extracted content'.")


class ModelConfig(BaseModel):
    """Configuration for the text-generation provider."""

    base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the generateContent API.",
    )
    model: str = Field(default="gemini-pro", description="Model name used in the request path.")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature.")
    max_output_tokens: int = Field(default=2048, gt=0, description="Upper bound on generated tokens.")
    timeout: Optional[float] = Field(
        default=None,
        description="Request timeout in seconds. None leaves the request unbounded.",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class StorageConfig(BaseModel):
    """Configuration for credential persistence."""

    credential_path: Path = Field(
        default_factory=lambda: Path.home() / ".articlelens" / "credentials.json",
        description="JSON file holding the provider API key.",
    )
    credential_key: str = Field(default="geminiApiKey", description="Key of the API key inside the JSON file.")


class MonitoringConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(
        default=None,
        description="Path to log file. If None, logs to console.",
    )

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "ArticleLens"
    version: str = "0.1.0"
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    sanitizer: SanitizerConfig = Field(default_factory=SanitizerConfig)
    model: ModelConfig = Field(default_factory=ModelConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="ARTICLELENS_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


CONFIG_FILE_NAMES = ("config.yaml", "config.yml")


def find_config_file() -> Path | None:
    """First ArticleLens config file in the working directory, if any."""
    cwd = Path.cwd()
    return next((cwd / name for name in CONFIG_FILE_NAMES if (cwd / name).exists()), None)


# --- Lazy Configuration Loader ---


class LazyConfig:
    """
    Stand-in for ``Config`` that reads the working-directory config file on
    first attribute access. An unreadable or invalid file is logged and the
    defaults are used, so importing the CLI never fails on configuration.
    """

    _config: ClassVar[Config | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __getattr__(self, name: str) -> Any:
        cls = self.__class__
        if cls._config is None:
            with cls._lock:
                if cls._config is None:
                    cls._config = cls._resolve()
        return getattr(cls._config, name)

    @staticmethod
    def _resolve() -> Config:
        path = find_config_file()
        if path is None:
            log.debug("No ArticleLens config file in %s, using defaults", Path.cwd())
            return Config()
        try:
            log.info("Reading ArticleLens configuration from %s", path)
            return Config.from_yaml(path)
        except (ValidationError, FileNotFoundError, yaml.YAMLError) as e:
            log.error(
                "Ignoring invalid config file %s, using defaults: %s",
                path,
                e,
                exc_info=log.isEnabledFor(logging.DEBUG),
            )
            return Config()


# --- Global Settings Instance ---
settings: Config = cast(Config, LazyConfig())
