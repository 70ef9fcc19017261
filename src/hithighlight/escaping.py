"""HTML escaping of raw post text before highlighting.

Three modes, selected at ``Highlighter`` construction:

- ``none``: text is used verbatim (it may already carry link markup).
- ``standard``: the five HTML-special characters ``& " ' < >`` are encoded.
- ``full``: every character with a named HTML 4 entity is encoded as well.

Both encoding modes leave entity references that are already present
(``&amp;``, ``&#233;``, ``&#x1F600;``) alone, so escaping an already escaped
post is a no-op.
"""

from __future__ import annotations

import re
from enum import StrEnum
from html.entities import codepoint2name, name2codepoint


class EscapeMode(StrEnum):
    """How raw text is escaped before highlighting."""

    NONE = "none"
    STANDARD = "standard"
    FULL = "full"


# Apostrophe has no HTML 4 named entity, so it is always numeric.
_STANDARD_TABLE: dict[str, str] = {
    "&": "&amp;",
    '"': "&quot;",
    "'": "&#039;",
    "<": "&lt;",
    ">": "&gt;",
}

_FULL_TABLE: dict[str, str] = {
    chr(codepoint): f"&{name};" for codepoint, name in codepoint2name.items()
}
_FULL_TABLE["'"] = "&#039;"

# An existing entity reference, or a single character needing encoding.
_ENTITY_REF = r"&(?:#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);"
_STANDARD_PATTERN = re.compile(
    _ENTITY_REF + "|[" + re.escape("".join(_STANDARD_TABLE)) + "]"
)
_FULL_PATTERN = re.compile(
    _ENTITY_REF + "|[" + re.escape("".join(sorted(_FULL_TABLE))) + "]"
)


def _is_known_entity(reference: str) -> bool:
    """Return True if ``&...;`` is a numeric or HTML 4 named reference."""
    name = reference[1:-1]
    return name.startswith("#") or name in name2codepoint


def _encode(text: str, pattern: re.Pattern[str], table: dict[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        token = match.group(0)
        if len(token) == 1:
            return table[token]
        if _is_known_entity(token):
            return token
        # Unknown name: only the ampersand is encoded
        return "&amp;" + token[1:]

    return pattern.sub(_replace, text)


def escape_text(text: str, mode: EscapeMode | str = EscapeMode.STANDARD) -> str:
    """Escape *text* for HTML output according to *mode*.

    Args:
        text: Raw post text.
        mode: An ``EscapeMode`` or its string value.

    Returns:
        The escaped text.

    Raises:
        ValueError: If *mode* is not a known escape mode.
    """
    mode = EscapeMode(mode)
    if mode is EscapeMode.NONE:
        return text
    if mode is EscapeMode.FULL:
        return _encode(text, _FULL_PATTERN, _FULL_TABLE)
    return _encode(text, _STANDARD_PATTERN, _STANDARD_TABLE)
