"""
Configuration management for doc-translate-ai.

Handles loading configuration from YAML files and environment variables.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file if present (before Settings initialization)
load_dotenv()

MIB = 1024 * 1024

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOC_MIME_TYPE = "application/msword"
IMAGE_MIME_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")

DEFAULT_ALLOWED_MIME_TYPES = [PDF_MIME_TYPE, DOCX_MIME_TYPE, DOC_MIME_TYPE, *IMAGE_MIME_TYPES]


class LLMProvider(str, Enum):
    """Available LLM providers."""

    OPENROUTER = "openrouter"


class RetryStrategy(str, Enum):
    """Delay schedule between attempts of one chunk."""

    FIXED = "fixed"
    EXPONENTIAL = "exponential"


class ExportFormat(str, Enum):
    """Output formats for the translated document."""

    TXT = "txt"
    HTML = "html"
    DOCX = "docx"
    PDF = "pdf"


class PathsConfig(BaseModel):
    """Configuration for file paths."""

    output_dir: Path = Field(default=Path("./translated"))
    database_path: Path = Field(default=Path("./doc_translate.duckdb"))

    @field_validator("output_dir", "database_path")
    @classmethod
    def expand_path(cls, v: Path) -> Path:
        """Expand user home directory and make path absolute."""
        return Path(v).expanduser().resolve()


class TranslationConfig(BaseModel):
    """Configuration for the AI translation backend."""

    provider: LLMProvider = Field(default=LLMProvider.OPENROUTER)
    model: str = Field(default="default")
    base_url: str = Field(default="https://openrouter.ai/api/v1")
    # Only required for the openrouter provider
    openrouter_api_key: str = Field(default="")
    target_language: str = Field(default="en")
    high_fidelity: bool = Field(default=False)
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    max_tokens: int = Field(default=32000, ge=256, le=131072)
    timeout_seconds: float = Field(default=600.0, ge=10.0, le=3600.0)


class ChunkingConfig(BaseModel):
    """Page-range chunk sizing tiers (first match wins)."""

    large_file_bytes: int = Field(default=50 * MIB, ge=1)
    large_file_chunk_pages: int = Field(default=25, ge=1)
    many_pages_threshold: int = Field(default=200, ge=1)
    many_pages_chunk_pages: int = Field(default=30, ge=1)
    default_chunk_pages: int = Field(default=50, ge=1)
    # Forces a chunk size regardless of the tiers above
    fixed_chunk_pages: int | None = Field(default=None, ge=1)


class ProcessingConfig(BaseModel):
    """Configuration for the chunk loop."""

    max_retries: int = Field(default=3, ge=1, le=10)
    retry_delay: float = Field(default=5.0, ge=0.0, le=120.0)
    retry_strategy: RetryStrategy = Field(default=RetryStrategy.FIXED)
    chunk_delay: float = Field(default=2.0, ge=0.0, le=60.0)
    raise_on_total_upstream_failure: bool = Field(default=False)


class UploadConfig(BaseModel):
    """Input validation limits."""

    max_file_size_mb: int = Field(default=200, ge=1, le=2048)
    allowed_mime_types: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_MIME_TYPES)
    )

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * MIB


class ExportConfig(BaseModel):
    """Configuration for export formats."""

    formats: list[ExportFormat] = Field(
        default_factory=lambda: [
            ExportFormat.TXT,
            ExportFormat.DOCX,
            ExportFormat.PDF,
            ExportFormat.HTML,
        ]
    )
    # Export right after a successful translation
    auto_export: bool = Field(default=True)


LOG_LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}


class LoggingConfig(BaseModel):
    """Configuration for the processing log."""

    level: str = Field(default="INFO")
    # Echo log entries to the console in addition to the database
    console: bool = Field(default=False)

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Valid options: {list(LOG_LEVELS)}")
        return level


class Settings(BaseSettings):
    """Main settings class that combines all configurations."""

    model_config = SettingsConfigDict(
        env_prefix="",  # No prefix for simpler env vars
        env_nested_delimiter="__",
        extra="ignore",
    )

    paths: PathsConfig = Field(default_factory=PathsConfig)
    translation: TranslationConfig = Field(default_factory=TranslationConfig)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def __init__(self, **data: Any) -> None:
        """Initialize with environment variable fallbacks for API keys."""
        super().__init__(**data)
        # Override API keys from environment if not set in config
        if not self.translation.openrouter_api_key:
            self.translation.openrouter_api_key = os.getenv("OPENROUTER_API_KEY", "")

    @classmethod
    def from_yaml(cls, path: Path | str) -> Settings:
        """Load settings from a YAML file, with environment variable overrides."""
        path = Path(path)
        if not path.exists():
            # Return defaults if file doesn't exist
            return cls()

        with open(path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}

        # Process environment variable substitutions in YAML values
        yaml_config = _substitute_env_vars(yaml_config)

        return cls(**yaml_config)


def _substitute_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively substitute ${ENV_VAR} patterns in config values."""
    result = {}
    for key, value in config.items():
        if isinstance(value, dict):
            result[key] = _substitute_env_vars(value)
        elif isinstance(value, str) and value.startswith("${") and value.endswith("}"):
            env_var = value[2:-1]
            result[key] = os.getenv(env_var, "")
        elif isinstance(value, list):
            result[key] = [
                _substitute_env_vars(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            result[key] = value
    return result


def load_config(path: Path | str | None = None) -> Settings:
    """
    Load configuration from YAML file or return defaults.

    Args:
        path: Path to YAML config file. If None, looks for config.yaml in current directory.

    Returns:
        Settings instance with merged YAML and environment configurations.
    """
    if path is None:
        default_paths = [
            Path("config.yaml"),
            Path("config.yml"),
            Path(".doc-translate.yaml"),
        ]
        for p in default_paths:
            if p.exists():
                path = p
                break

    if path is not None:
        return Settings.from_yaml(path)

    return Settings()


def create_default_config(path: Path | str = "config.yaml") -> None:
    """Create a default configuration file."""
    default_config = """# doc-translate-ai configuration
paths:
  output_dir: "./translated"
  database_path: "./doc_translate.duckdb"

translation:
  provider: "openrouter"
  # Model alias (default, fast, quality) or full OpenRouter model name
  model: "default"
  openrouter_api_key: "${OPENROUTER_API_KEY}"
  # Target language code (en, es, fr, de, ar, ...)
  target_language: "en"
  # Structure-preserving markdown output instead of plain prose
  high_fidelity: false

chunking:
  # Files above this size are sent in smaller page ranges
  large_file_bytes: 52428800
  large_file_chunk_pages: 25
  # Page count above which the medium tier applies
  many_pages_threshold: 200
  many_pages_chunk_pages: 30
  default_chunk_pages: 50

processing:
  # Attempts per chunk before it is marked failed
  max_retries: 3
  # Seconds between attempts of the same chunk
  retry_delay: 5
  # "fixed" or "exponential"
  retry_strategy: "fixed"
  # Seconds between chunks (rate limiting)
  chunk_delay: 2
  # Report UpstreamServiceError instead of NoTranslatableContent when every chunk failed
  raise_on_total_upstream_failure: false

upload:
  max_file_size_mb: 200

export:
  formats: ["txt", "docx", "pdf", "html"]
  auto_export: true

logging:
  level: "INFO"
  console: false
"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(default_config)
