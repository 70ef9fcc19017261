"""Shared pytest fixtures for hithighlight tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from hithighlight.config import get_settings

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Drop highlighter env vars and the cached Settings around every test."""
    for key in list(os.environ):
        if key.startswith(("HIGHLIGHT__", "LOG__")):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
