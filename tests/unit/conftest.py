"""Shared fixtures for unit tests."""

from __future__ import annotations

import emoji as emoji_lib
import pytest

# =============================================================================
# Unicode Test Fixtures
# =============================================================================

# Single code point, and a ZWJ sequence spanning five code points
THUMBS_UP: str = emoji_lib.emojize(":thumbs_up:")
FAMILY: str = emoji_lib.emojize(":family_man_woman_girl:")


@pytest.fixture
def linked_post() -> str:
    """A post after auto-linking: a mention, a hashtag and a URL."""
    return (
        '<a class="tweet-url username" href="https://twitter.com/jack">@jack</a>'
        " loves "
        '<a href="https://twitter.com/search?q=%23python" class="tweet-url hashtag">'
        "#python</a> see "
        '<a href="https://t.co/abc" rel="nofollow">t.co/abc</a>'
    )
