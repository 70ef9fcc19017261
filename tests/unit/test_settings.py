"""Tests for hithighlight.config -- Settings, sub-models, env overrides.

Every test constructs Settings(_env_file=None, ...) to avoid reading real .env files.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from hithighlight import setup_logging
from hithighlight.config import (
    _PROJECT_ROOT,
    HighlightConfig,
    LoggingConfig,
    Settings,
    get_settings,
)
from hithighlight.escaping import EscapeMode

if TYPE_CHECKING:
    from collections.abc import Generator


class TestDefaults:
    """Settings with no environment."""

    def test_highlight_defaults(self) -> None:
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.highlight.tag == "em"
        assert s.highlight.escape_mode is EscapeMode.STANDARD

    def test_log_defaults(self) -> None:
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.log.log_dir == Path("logs")
        assert s.log.level == "INFO"

    def test_env_file_points_at_project_root(self) -> None:
        assert Settings.model_config.get("env_file") == _PROJECT_ROOT / ".env"


class TestEnvOverrides:
    """Double-underscore env vars populate nested sub-models."""

    def test_tag(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HIGHLIGHT__TAG", "strong")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.highlight.tag == "strong"

    def test_escape_mode(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HIGHLIGHT__ESCAPE_MODE", "full")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.highlight.escape_mode is EscapeMode.FULL

    def test_log_dir(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG__LOG_DIR", "/tmp/hh")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.log.log_dir == Path("/tmp/hh")


class TestValidation:
    """Invalid configuration fails at construction."""

    def test_unknown_escape_mode(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HIGHLIGHT__ESCAPE_MODE", "bogus")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_empty_tag(self) -> None:
        with pytest.raises(ValidationError):
            HighlightConfig(tag="")

    def test_unknown_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG__LEVEL", "VERBOSE")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_known_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG__LEVEL", "WARNING")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.log.level == "WARNING"


class TestGetSettings:
    """get_settings() is a cached singleton."""

    def test_returns_same_instance(self) -> None:
        assert get_settings() is get_settings()

    def test_cache_clear_rereads_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert get_settings().highlight.tag == "em"
        monkeypatch.setenv("HIGHLIGHT__TAG", "mark")
        assert get_settings().highlight.tag == "em"
        get_settings.cache_clear()
        assert get_settings().highlight.tag == "mark"


class TestSetupLogging:
    """setup_logging() attaches console and rotating file handlers."""

    @pytest.fixture
    def restore_root_logger(self) -> Generator[logging.Logger]:
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield root
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers = handlers
        root.setLevel(level)

    def test_creates_log_file(
        self, tmp_path: Path, restore_root_logger: logging.Logger
    ) -> None:
        log_file = setup_logging(tmp_path / "logs")
        assert log_file == tmp_path / "logs" / "hithighlight.log"
        assert log_file.is_file()
        assert len(restore_root_logger.handlers) >= 2

    def test_second_call_adds_no_handlers(
        self, tmp_path: Path, restore_root_logger: logging.Logger
    ) -> None:
        setup_logging(tmp_path)
        count = len(restore_root_logger.handlers)
        assert setup_logging(tmp_path) == tmp_path / "hithighlight.log"
        assert len(restore_root_logger.handlers) == count

    def test_other_directory_adds_handlers(
        self, tmp_path: Path, restore_root_logger: logging.Logger
    ) -> None:
        setup_logging(tmp_path / "one")
        count = len(restore_root_logger.handlers)
        setup_logging(tmp_path / "two")
        assert len(restore_root_logger.handlers) == count + 2

    def test_directory_from_settings(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        restore_root_logger: logging.Logger,
    ) -> None:
        monkeypatch.setenv("LOG__LOG_DIR", str(tmp_path / "from-env"))
        log_file = setup_logging()
        assert log_file.parent == tmp_path / "from-env"
        assert LoggingConfig().log_dir == Path("logs")
