"""hithighlight - Hit highlighting for auto-linked social media posts.

Wraps search-hit ranges in a highlight tag while leaving any link markup
from an earlier auto-linking pass intact.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from hithighlight.config import Settings, get_settings
from hithighlight.escaping import EscapeMode, escape_text
from hithighlight.highlighter import DEFAULT_TAG, Highlighter, highlight_hits
from hithighlight.segments import (
    Boundary,
    BoundaryKind,
    HitRange,
    TextChunk,
    flatten_hits,
    plain_text,
    split_markup,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_TAG",
    "Boundary",
    "BoundaryKind",
    "EscapeMode",
    "Highlighter",
    "HitRange",
    "Settings",
    "TextChunk",
    "escape_text",
    "flatten_hits",
    "get_settings",
    "highlight_hits",
    "plain_text",
    "setup_logging",
    "split_markup",
]


def setup_logging(log_dir: Path | None = None) -> Path:
    """Configure logging to both console and rotating file.

    Intended for applications embedding the highlighter; importing the
    package never touches logging configuration. Calling it again for the
    same log file is a no-op, so records are never written twice.

    Args:
        log_dir: Directory for the log file. Defaults to ``LOG__LOG_DIR``.

    Returns:
        Path of the log file.
    """
    config = get_settings().log
    log_dir = log_dir or config.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "hithighlight.log"

    root_logger = logging.getLogger()
    if any(
        isinstance(handler, RotatingFileHandler)
        and handler.baseFilename == os.path.abspath(log_file)
        for handler in root_logger.handlers
    ):
        return log_file
    root_logger.setLevel(logging.DEBUG)

    # File handler - detailed logging with rotation (10MB, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    # Console handler - less verbose
    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.info("Logging configured. Log file: %s", log_file.absolute())
    return log_file
