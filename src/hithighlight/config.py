"""Centralised highlighter configuration using pydantic-settings.

All environment variables are read through the Settings class.
Consumers call ``get_settings()`` to obtain a cached, validated instance.
Tests construct ``Settings(_env_file=None, ...)`` directly for isolation.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hithighlight.escaping import EscapeMode

logger = logging.getLogger(__name__)

# src/hithighlight/config.py  ->  parent x3  ->  project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# ---------------------------------------------------------------------------
# Sub-models (one per configuration domain)
# ---------------------------------------------------------------------------
class HighlightConfig(BaseModel):
    """Defaults applied to new Highlighter instances."""

    tag: str = Field(default="em", min_length=1)
    escape_mode: EscapeMode = EscapeMode.STANDARD


class LoggingConfig(BaseModel):
    """Where and how verbosely ``setup_logging()`` writes."""

    log_dir: Path = Path("logs")
    level: LogLevel = "INFO"


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Highlighter settings with automatic .env loading and type validation.

    Environment variables use double-underscore delimiter for nesting:
    ``HIGHLIGHT__TAG``, ``HIGHLIGHT__ESCAPE_MODE``, ``LOG__LOG_DIR``.
    """

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    highlight: HighlightConfig = HighlightConfig()
    log: LoggingConfig = LoggingConfig()


# ---------------------------------------------------------------------------
# Singleton access
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    settings = Settings()

    env_file = settings.model_config.get("env_file")
    if env_file is not None:
        paths = env_file if isinstance(env_file, (list, tuple)) else (env_file,)
        loaded = [str(p) for p in paths if Path(str(p)).is_file()]
        if loaded:
            logger.info("Settings loaded .env from: %s", ", ".join(loaded))
        else:
            logger.info("Settings: no .env file found, using env vars and defaults")

    return settings
