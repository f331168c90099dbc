"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from doc_translate_ai.config import (
    ExportFormat,
    RetryStrategy,
    Settings,
    create_default_config,
    load_config,
)


def test_defaults():
    settings = Settings()

    assert settings.processing.max_retries == 3
    assert settings.processing.retry_delay == 5.0
    assert settings.processing.chunk_delay == 2.0
    assert settings.processing.retry_strategy == RetryStrategy.FIXED
    assert settings.chunking.default_chunk_pages == 50
    assert settings.upload.max_file_size_bytes == 200 * 1024 * 1024
    assert settings.export.formats == [
        ExportFormat.TXT,
        ExportFormat.DOCX,
        ExportFormat.PDF,
        ExportFormat.HTML,
    ]


def test_api_key_from_environment(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-env")

    assert Settings().translation.openrouter_api_key == "sk-env"


def test_yaml_with_env_substitution(tmp_path, monkeypatch):
    monkeypatch.setenv("MY_KEY", "sk-from-yaml")
    path = tmp_path / "config.yaml"
    path.write_text(
        """
translation:
  openrouter_api_key: "${MY_KEY}"
  target_language: "de"
processing:
  retry_strategy: "exponential"
  chunk_delay: 0
logging:
  level: "debug"
"""
    )

    settings = Settings.from_yaml(path)

    assert settings.translation.openrouter_api_key == "sk-from-yaml"
    assert settings.translation.target_language == "de"
    assert settings.processing.retry_strategy == RetryStrategy.EXPONENTIAL
    assert settings.processing.chunk_delay == 0
    assert settings.logging.level == "DEBUG"


def test_missing_yaml_gives_defaults(tmp_path):
    assert Settings.from_yaml(tmp_path / "missing.yaml").processing.max_retries == 3


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Settings(logging={"level": "LOUD"})


def test_default_config_file_round_trips(tmp_path):
    path = tmp_path / "nested" / "config.yaml"

    create_default_config(path)
    settings = load_config(path)

    assert settings.chunking.large_file_bytes == 50 * 1024 * 1024
    assert settings.processing.raise_on_total_upstream_failure is False
    assert settings.export.auto_export is True
