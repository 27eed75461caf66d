"""Tests for environment-driven settings."""

from pathlib import Path

import pydantic
import pytest

from shipscan.infrastructure.config import DEFAULT_DATA_DIR, Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("SHIPSCAN_DATA_DIR", "SHIPSCAN_LOG_LEVEL", "SHIPSCAN_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)


def test_defaults_when_environment_empty():
    settings = Settings()
    assert settings.data_dir == DEFAULT_DATA_DIR
    assert settings.log_level == "WARNING"
    assert settings.log_format == "text"


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("SHIPSCAN_DATA_DIR", "/var/lib/shipscan")
    monkeypatch.setenv("SHIPSCAN_LOG_LEVEL", "debug")
    monkeypatch.setenv("SHIPSCAN_LOG_FORMAT", "JSON")

    settings = Settings()

    assert settings.data_dir == Path("/var/lib/shipscan")
    assert settings.log_level == "DEBUG"
    assert settings.log_format == "json"


def test_explicit_values_override_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("SHIPSCAN_LOG_LEVEL", "ERROR")
    settings = Settings(data_dir=tmp_path, log_level="info")
    assert settings.data_dir == tmp_path
    assert settings.log_level == "INFO"


def test_unknown_log_level_rejected(monkeypatch):
    monkeypatch.setenv("SHIPSCAN_LOG_LEVEL", "VERBOSE")
    with pytest.raises(pydantic.ValidationError, match="log level"):
        Settings()


def test_unknown_log_format_rejected(monkeypatch):
    monkeypatch.setenv("SHIPSCAN_LOG_FORMAT", "xml")
    with pytest.raises(pydantic.ValidationError):
        Settings()
