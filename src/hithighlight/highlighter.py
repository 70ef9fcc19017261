"""Hit highlighting for posts that may already carry link markup.

Hit offsets are measured against the plain text of a post, i.e. with every
``<...>`` segment removed.  A prior auto-linking pass may have wrapped
mentions, hashtags and URLs in anchor tags, so the offsets no longer line up
with the string being decorated.

Architecture:
    Text without any ``<`` takes the fast path: tags are spliced in directly,
    shifting later offsets by the length of everything inserted so far.
    Otherwise the text is split into ``TextChunk`` runs and the hits into
    ``Boundary`` events, and the two ordered streams are merged with one
    cursor each.  Existing markup segments are copied through verbatim and
    are never split by a highlight tag.

Preconditions (not validated):
    Hits are sorted ascending by start, non-overlapping, and have
    ``start <= end``.  Malformed hits give implementation-defined output.
    Offsets past the end of the text never raise: their tags are appended.
"""

from __future__ import annotations

import logging
import warnings
from typing import TYPE_CHECKING

from hithighlight.config import Settings, get_settings
from hithighlight.escaping import EscapeMode, escape_text
from hithighlight.segments import (
    BoundaryKind,
    TextChunk,
    flatten_hits,
    split_markup,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from hithighlight.segments import Boundary, HitRange

logger = logging.getLogger(__name__)

DEFAULT_TAG = "em"


# ---------------------------------------------------------------------------
# Fast path (no existing markup)
# ---------------------------------------------------------------------------


def _splice(text: str, insertion: str, position: int) -> str:
    """Insert *insertion* into *text* at code-point *position*.

    A negative position counts from the end (floored at 0) and a position
    past the end appends.
    """
    length = len(text)
    if position < 0:
        position = max(0, length + position)
    elif position > length:
        position = length
    return text[:position] + insertion + text[position:]


def _insert_tags(
    text: str, hits: Iterable[HitRange], open_tag: str, close_tag: str
) -> str:
    result = text
    shift = 0  # length of tags inserted so far
    for start, end in hits:
        result = _splice(result, open_tag, start + shift)
        shift += len(open_tag)
        result = _splice(result, close_tag, end + shift)
        shift += len(close_tag)
    return result


# ---------------------------------------------------------------------------
# Chunked path (merge against existing markup)
# ---------------------------------------------------------------------------


class _ChunkCursor:
    """Read position within the chunk stream of a marked-up post.

    Emits text and markup into a shared output list as it advances.
    ``opened_here`` records that an OPEN boundary was placed inside the
    current chunk; a CLOSE boundary landing exactly on that chunk's end then
    goes before the following markup segment rather than after it.
    """

    __slots__ = ("_chunks", "_index", "_out", "offset", "opened_here")

    def __init__(self, chunks: list[TextChunk], out: list[str]) -> None:
        self._chunks = chunks
        self._index = 0
        self._out = out
        self.offset = 0  # within-chunk cursor
        self.opened_here = False

    @property
    def exhausted(self) -> bool:
        return self._index >= len(self._chunks)

    @property
    def chunk(self) -> TextChunk:
        return self._chunks[self._index]

    def advance_to(self, boundary: Boundary, markup: str) -> bool:
        """Flush every chunk ending at or before *boundary*.

        Returns True if *markup* was emitted at a chunk end on the way.
        """
        placed = False
        while not self.exhausted and boundary.offset >= self.chunk.end:
            chunk = self.chunk
            self._out.append(chunk.text[self.offset :])
            if self.opened_here and boundary.offset == chunk.end:
                self._out.append(markup)
                placed = True
            if chunk.tag is not None:
                self._out.append(chunk.tag)
            self._index += 1
            self.offset = 0
            self.opened_here = False
        return placed

    def place(self, boundary: Boundary, markup: str) -> None:
        """Emit the current chunk up to *boundary*, then *markup*."""
        spot = boundary.offset - self.chunk.start
        self._out.append(self.chunk.text[self.offset : spot])
        self._out.append(markup)
        self.offset = spot
        self.opened_here = boundary.kind is BoundaryKind.OPEN

    def flush(self) -> None:
        """Emit everything not yet emitted, markup segments verbatim."""
        if self.exhausted:
            return
        self._out.append(self.chunk.text[self.offset :])
        if self.chunk.tag is not None:
            self._out.append(self.chunk.tag)
        for chunk in self._chunks[self._index + 1 :]:
            self._out.append(chunk.text)
            if chunk.tag is not None:
                self._out.append(chunk.tag)
        self._index = len(self._chunks)
        self.offset = 0


def _merge_tags(
    text: str, hits: Iterable[HitRange], open_tag: str, close_tag: str
) -> str:
    out: list[str] = []
    chunks = split_markup(text)
    cursor = _ChunkCursor(chunks, out)
    boundary_count = 0
    for boundary in flatten_hits(hits):
        boundary_count += 1
        markup = open_tag if boundary.kind is BoundaryKind.OPEN else close_tag
        if cursor.advance_to(boundary, markup):
            continue
        if not cursor.exhausted:
            cursor.place(boundary, markup)
            continue
        logger.debug(
            "%s boundary at %d is past the end of the text; appending tag",
            boundary.kind.value,
            boundary.offset,
        )
        out.append(markup)
    cursor.flush()
    logger.debug(
        "Merged %d boundaries into %d chunks of marked-up text",
        boundary_count,
        len(chunks),
    )
    return "".join(out)


def highlight_hits(
    text: str, hits: Sequence[HitRange] | None, tag: str = DEFAULT_TAG
) -> str:
    """Wrap each hit range of *text* in ``<tag>``/``</tag>``.

    Args:
        text: Post text, with or without link markup.  Not escaped here.
        hits: ``(start, end)`` code-point offsets into the plain text,
            sorted and non-overlapping.
        tag: Highlight element name.

    Returns:
        The highlighted text, or *text* itself when there are no hits.
    """
    if not hits:
        return text
    open_tag, close_tag = f"<{tag}>", f"</{tag}>"
    if "<" not in text:
        return _insert_tags(text, hits, open_tag, close_tag)
    return _merge_tags(text, hits, open_tag, close_tag)


# ---------------------------------------------------------------------------
# Highlighter
# ---------------------------------------------------------------------------


class Highlighter:
    """Performs hit highlighting on posts that have already been auto-linked.

    Useful with the hit offsets returned by a search API.  The text given at
    construction is escaped unless ``escape=False``; ``highlight()`` never
    escapes.
    """

    def __init__(
        self,
        text: str | None = None,
        escape: bool = True,
        full_encode: bool = False,
        tag: str | None = None,
    ) -> None:
        if text and escape:
            mode = EscapeMode.FULL if full_encode else EscapeMode.STANDARD
            text = escape_text(text, mode)
        self.text = text
        self.tag = tag if tag is not None else get_settings().highlight.tag

    @classmethod
    def create(cls, text: str | None = None, full_encode: bool = False) -> Highlighter:
        """Fluent constructor; the text is escaped."""
        return cls(text, full_encode=full_encode)

    @classmethod
    def from_settings(
        cls, text: str | None = None, settings: Settings | None = None
    ) -> Highlighter:
        """Build a highlighter whose tag and escaping follow *settings*."""
        config = (settings or get_settings()).highlight
        if text:
            text = escape_text(text, config.escape_mode)
        return cls(text, escape=False, tag=config.tag)

    def get_tag(self) -> str:
        return self.tag

    def set_tag(self, tag: str) -> Highlighter:
        """Set the tag to surround hits with; returns self for chaining."""
        self.tag = tag
        return self

    @property
    def tags(self) -> tuple[str, str]:
        """The ``(opening, closing)`` highlight tag pair."""
        return f"<{self.tag}>", f"</{self.tag}>"

    def highlight(
        self, text: str | None = None, hits: Sequence[HitRange] | None = None
    ) -> str | None:
        """Hit highlight *text*, or the constructed text when *text* is None.

        Args:
            text: The post to highlight.  Used as given, without escaping.
            hits: ``(start, end)`` index pairs into the plain text.

        Returns:
            The highlighted post.  None when no text was given here or at
            construction, whatever the hits.
        """
        if text is None:
            text = self.text
        if not hits or text is None:
            return text
        return highlight_hits(text, hits, self.tag)

    def add_hit_highlighting(self, hits: Sequence[HitRange]) -> str | None:
        """Highlight the constructed text.

        .. deprecated:: Use ``highlight(hits=...)`` instead.
        """
        warnings.warn(
            "add_hit_highlighting() is deprecated; use highlight(hits=...)",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.highlight(self.text, hits)
