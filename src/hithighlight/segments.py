"""Typed views of marked-up text and of hit boundaries.

The highlighter merges two ordered streams:

- ``TextChunk`` -- the plain-text runs of a post, each carrying its
  plain-text start offset and the markup segment (``<a href=...>``,
  ``</a>``) that immediately follows it.
- ``Boundary`` -- the flattened hit list, one OPEN event per hit start and
  one CLOSE event per hit end.

Splitting is on every ``<`` and ``>`` character; markup segments are
re-emitted as ``"<" + body + ">"``, which reproduces the input exactly for
the non-nested tags a linking pass produces.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

HitRange: TypeAlias = tuple[int, int]

_MARKUP_DELIMITERS = re.compile(r"[<>]")


class BoundaryKind(Enum):
    """Whether a boundary opens or closes a highlight."""

    OPEN = "OPEN"
    CLOSE = "CLOSE"


@dataclass(frozen=True, slots=True)
class Boundary:
    """A single hit boundary in plain-text coordinates.

    Attributes:
        offset: Code-point offset into the plain (markup-free) text.
        kind: OPEN for a hit start, CLOSE for a hit end.
    """

    offset: int
    kind: BoundaryKind


@dataclass(frozen=True, slots=True)
class TextChunk:
    """A plain-text run and the markup segment that follows it.

    Attributes:
        text: The chunk's characters, exactly as in the input.
        start: Plain-text offset of the chunk's first character.
        tag: The following markup segment including its angle brackets,
             or None for the final chunk.
    """

    text: str
    start: int
    tag: str | None = None

    @property
    def end(self) -> int:
        """Plain-text offset just past the chunk's last character."""
        return self.start + len(self.text)


def split_markup(text: str) -> list[TextChunk]:
    """Decompose *text* into chunks separated by ``<...>`` segments.

    ``"<a>hello</a> world"`` becomes::

        TextChunk("", 0, "<a>")
        TextChunk("hello", 0, "</a>")
        TextChunk(" world", 5, None)

    The first chunk is always the (possibly empty) prefix before the first
    segment. Text without markup yields a single chunk.
    """
    parts = _MARKUP_DELIMITERS.split(text)
    chunks: list[TextChunk] = []
    offset = 0
    for index in range(0, len(parts), 2):
        body = parts[index + 1] if index + 1 < len(parts) else None
        chunk = TextChunk(
            text=parts[index],
            start=offset,
            tag=None if body is None else f"<{body}>",
        )
        chunks.append(chunk)
        offset = chunk.end
    return chunks


def plain_text(text: str) -> str:
    """Return the markup-free view of *text* that hit offsets refer to."""
    return "".join(chunk.text for chunk in split_markup(text))


def flatten_hits(hits: Iterable[HitRange]) -> Iterator[Boundary]:
    """Yield an OPEN then a CLOSE boundary for each hit, in hit order."""
    for start, end in hits:
        yield Boundary(start, BoundaryKind.OPEN)
        yield Boundary(end, BoundaryKind.CLOSE)
