"""Runtime settings, loaded from the environment with pydantic-settings.

SHIPSCAN_DATA_DIR     directory holding the JSON store
SHIPSCAN_LOG_LEVEL    DEBUG, INFO, WARNING (default), ERROR, CRITICAL
SHIPSCAN_LOG_FORMAT   "text" (default) or "json"
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="SHIPSCAN_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    data_dir: Path = Field(default=DEFAULT_DATA_DIR, description="JSON store directory")
    log_level: str = Field(default="WARNING", description="Root level for shipscan loggers")
    log_format: Literal["text", "json"] = "text"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        level = str(v).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v):
        return str(v).strip().lower()
