"""Centralized checker configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the repository root: .env, .env.local
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_SNAPSHOT_LOCATION = Path("schema.snapshot.graphql")


class Settings(BaseSettings):
    """Typed checker configuration loaded from env and `.env` files.

    Attributes
    ----------
    snapshot_location : Path
        Where the signed snapshot lives; maps from `BC_SNAPSHOT_LOCATION`.
    allow_breaking_changes : bool
        Record breaking changes instead of failing; maps from
        `BC_ALLOW_BREAKING_CHANGES`.
    schema_source : Optional[str]
        Default schema for the CLI (SDL path or `module:attr`); maps from `BC_SCHEMA`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    """

    snapshot_location: Path = Field(
        default=DEFAULT_SNAPSHOT_LOCATION, alias="BC_SNAPSHOT_LOCATION"
    )
    allow_breaking_changes: bool = Field(default=False, alias="BC_ALLOW_BREAKING_CHANGES")
    schema_source: str | None = Field(default=None, alias="BC_SCHEMA")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    Tests force a rebuild via `load_settings.cache_clear()` after mutating
    `os.environ`.
    """
    return Settings()


settings: Settings = load_settings()


def get_logger(name: str = "bcchecker") -> logging.Logger:
    """Return a process-global logger configured to the current `LOG_LEVEL`."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
