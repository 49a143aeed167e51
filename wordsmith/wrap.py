"""Soft wrapping of logical lines and word boundary search."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import EditorConstants
from .errors import UnwrappableLineError

_WORD = re.compile(r"\S+")


class WrapPolicy(Enum):
    """What to do with a word wider than the wrap width."""
    HARD_BREAK = "hard_break"  # break the word at exactly `width` characters
    STRICT = "strict"  # raise UnwrappableLineError


@dataclass(frozen=True)
class WrappedLine:
    text: str
    start: int  # offset of text[0] in the unwrapped text
    soft: bool  # True if the line ends at an inserted break


def _last_whitespace(text: str, start: int, stop: int) -> Optional[int]:
    """Index of the last whitespace character in text[start:stop], if any."""
    for i in range(min(stop, len(text)) - 1, start - 1, -1):
        if text[i].isspace():
            return i
    return None


class WrappedText:
    """Soft-wrapped view over a piece of text.

    The text is usually one logical line. Authored newlines are respected
    and end a sub-line without a soft break. Sub-lines are recomputed on
    every call.
    """

    def __init__(self, text: str, width: int = EditorConstants.WRAP_WIDTH,
                 policy: WrapPolicy = WrapPolicy.HARD_BREAK):
        if width < 1:
            raise ValueError(f"Wrap width must be positive, got {width}")
        self.text = text
        self.width = width
        self.policy = policy

    def wrapped_lines(self) -> list[WrappedLine]:
        """Wrap the text into sub-lines.

        Raises:
            UnwrappableLineError: with WrapPolicy.STRICT, when a word does
                not fit in the width and has no whitespace to break at.
        """
        result: list[WrappedLine] = []
        base = 0
        for segment in self.text.split("\n"):
            result.extend(self._wrap_segment(segment, base))
            base += len(segment) + 1
        return result

    def _wrap_segment(self, segment: str, base: int) -> list[WrappedLine]:
        result: list[WrappedLine] = []
        start = 0
        while len(segment) - start > self.width:
            limit = start + self.width
            # Whitespace at column `width` still leaves a full-width line
            brk = _last_whitespace(segment, start, limit + 1)
            if brk is not None and brk > start:
                result.append(WrappedLine(segment[start:brk], base + start, True))
                start = brk + 1
                continue
            if self.policy is WrapPolicy.STRICT:
                word = _WORD.search(segment, start)
                raise UnwrappableLineError(word.group() if word else segment[start:], self.width)
            result.append(WrappedLine(segment[start:limit], base + start, True))
            start = limit
        result.append(WrappedLine(segment[start:], base + start, False))
        return result

    def to_string(self) -> str:
        """The text with soft breaks inserted as newlines."""
        return "\n".join(line.text for line in self.wrapped_lines())

    def lines(self) -> list[str]:
        return [line.text for line in self.wrapped_lines()]

    def line_length(self) -> int:
        """Number of wrapped sub-lines."""
        return len(self.wrapped_lines())

    def length(self) -> int:
        """Length of the content, not counting inserted breaks."""
        return len(self.text)

    def is_soft_wrapped_line(self, index: int) -> bool:
        lines = self.wrapped_lines()
        if not 0 <= index < len(lines):
            return False
        return lines[index].soft

    def line_start(self, index: int) -> int:
        lines = self.wrapped_lines()
        index = min(max(index, 0), len(lines) - 1)
        return lines[index].start

    def locate(self, offset: int) -> tuple[int, int]:
        """Map an unwrapped offset to (sub-line index, column).

        An offset that points at the whitespace consumed by a soft break is
        placed at the end of the sub-line before the break.
        """
        lines = self.wrapped_lines()
        offset = min(max(offset, 0), len(self.text))
        row = 0
        for i, line in enumerate(lines):
            if line.start <= offset:
                row = i
            else:
                break
        column = min(offset - lines[row].start, len(lines[row].text))
        return (row, column)

    def next_word_boundary(self, offset: int) -> Optional[int]:
        """Start of the next word after ``offset``, else end of the last word.

        Returns None when no word starts or ends after ``offset``.
        """
        last = None
        for match in _WORD.finditer(self.text):
            if match.start() > offset:
                return match.start()
            last = match
        if last is not None and last.end() > offset:
            return last.end()
        return None

    def previous_word_boundary(self, offset: int) -> Optional[int]:
        """Start of the nearest word beginning strictly before ``offset``."""
        boundary = None
        for match in _WORD.finditer(self.text):
            if match.start() >= offset:
                break
            boundary = match.start()
        return boundary

    def __str__(self):
        return self.to_string()
