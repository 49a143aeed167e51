"""Logical line segmentation and position/offset conversion."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, assert_never

from .constants import EditorConstants
from .position import EditorPosition
from .store import RawStore

# Optional indentation, 1-6 hashes and exactly the one space that ends the marker.
_HEADLINE_MARKER = re.compile(r"^(\s*)(#{1,%d}) " % EditorConstants.MAX_HEADLINE_LEVEL)


class LineKind(Enum):
    NORMAL = "normal"
    HEADLINE_START = "headline_start"
    HEADLINE_CONTINUATION = "headline_continuation"


@dataclass(frozen=True)
class Line:
    """One authored line of the document.

    For HEADLINE_START lines ``level`` is the number of hashes and
    ``marker_length`` the number of raw characters hidden in front of the
    visible text (indentation, hashes and the separating space).
    """
    text: str
    kind: LineKind = LineKind.NORMAL
    level: int = 0
    marker_length: int = 0

    def length(self) -> int:
        return len(self.text)

    def beginning(self) -> int:
        if self.kind is LineKind.HEADLINE_START:
            return -self.marker_length
        elif self.kind is LineKind.HEADLINE_CONTINUATION or self.kind is LineKind.NORMAL:
            return 0
        else:
            assert_never(self.kind)

    def end(self) -> int:
        if self.kind is LineKind.HEADLINE_START:
            return len(self.text) - self.marker_length
        elif self.kind is LineKind.HEADLINE_CONTINUATION or self.kind is LineKind.NORMAL:
            return len(self.text)
        else:
            assert_never(self.kind)

    def clamp_x(self, preferred_x: int) -> int:
        if preferred_x < self.beginning():
            return self.beginning()
        if preferred_x > self.end():
            return self.end()
        return preferred_x

    def visible_text(self) -> str:
        """The text after the hidden heading marker (whole text otherwise)."""
        return self.text[self.marker_length:]

    def marker(self) -> str:
        return self.text[:self.marker_length]

    def is_blank(self) -> bool:
        return not self.text.strip()


def headline_marker(text: str) -> Optional[tuple[int, int]]:
    """Return ``(level, marker_length)`` if ``text`` starts a heading."""
    m = _HEADLINE_MARKER.match(text)
    if not m:
        return None
    return (len(m.group(2)), len(m.group(0)))


def classify_lines(text: str) -> list[Line]:
    """Split raw text into classified lines.

    The segment after the last newline is always present, so an empty
    document has exactly one (empty) line and a trailing newline yields an
    empty last line for the cursor to rest on.
    """
    lines: list[Line] = []
    inside_headline = False
    for raw in text.split("\n"):
        marker = headline_marker(raw)
        if marker is not None:
            inside_headline = True
            level, marker_length = marker
            lines.append(Line(raw, LineKind.HEADLINE_START, level, marker_length))
            continue
        if raw == "":
            inside_headline = False
        kind = LineKind.HEADLINE_CONTINUATION if inside_headline else LineKind.NORMAL
        lines.append(Line(raw, kind))
    return lines


class LineModel:
    """Read-only line view over a RawStore.

    Nothing is cached: every call re-segments the current text, so the
    lines can never be stale after an edit.
    """

    def __init__(self, store: RawStore):
        self.store = store

    def lines(self) -> list[Line]:
        return classify_lines(self.store.text())

    def line(self, index: int) -> Line:
        lines = self.lines()
        index = min(max(index, 0), len(lines) - 1)
        return lines[index]

    def position_to_offset(self, position: EditorPosition) -> int:
        lines = self.lines()
        y = min(max(position.y, 0), len(lines) - 1)
        offset = 0
        for line in lines[:y]:
            offset += line.length() + 1  # newline
        line = lines[y]
        if line.kind is LineKind.HEADLINE_START:
            offset += line.marker_length
        offset += position.x
        return max(0, offset)

    def offset_to_position(self, offset: int) -> EditorPosition:
        lines = self.lines()
        x = max(0, offset)
        y = 0
        for y, line in enumerate(lines):
            if x <= line.length():
                break
            x -= line.length() + 1
        else:
            # Past the end of the document
            x = lines[-1].length()
        line = lines[y]
        if line.kind is LineKind.HEADLINE_START:
            x -= line.marker_length
        return EditorPosition(y, x)
