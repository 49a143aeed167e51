"""Cursor movement over authored lines.

Every function takes the current lines (a snapshot from
``LineModel.lines()``) and a position, and returns a new position. Vertical
movement works on authored lines; soft wrapping is left to the view.
"""

from typing import Sequence

from .lines import Line
from .position import EditorPosition
from .wrap import WrappedText


def _clamp(lines: Sequence[Line], position: EditorPosition) -> tuple[int, Line, int]:
    """Return (y, line, x) with both coordinates forced into the document."""
    y = min(max(position.y, 0), len(lines) - 1)
    line = lines[y]
    return (y, line, line.clamp_x(position.x))


def left(lines: Sequence[Line], position: EditorPosition) -> EditorPosition:
    y, line, x = _clamp(lines, position)
    if x == line.beginning():
        if y == 0:
            return EditorPosition(y, x)
        return EditorPosition(y - 1, lines[y - 1].end())
    return EditorPosition(y, x - 1)


def right(lines: Sequence[Line], position: EditorPosition) -> EditorPosition:
    y, line, x = _clamp(lines, position)
    if x == line.end():
        if y == len(lines) - 1:
            return EditorPosition(y, x)
        return EditorPosition(y + 1, lines[y + 1].beginning())
    return EditorPosition(y, x + 1)


def up(lines: Sequence[Line], position: EditorPosition, preferred_x: int) -> EditorPosition:
    y = max(min(position.y, len(lines) - 1) - 1, 0)
    return EditorPosition(y, lines[y].clamp_x(preferred_x))


def down(lines: Sequence[Line], position: EditorPosition, preferred_x: int) -> EditorPosition:
    y = min(max(position.y, 0) + 1, len(lines) - 1)
    return EditorPosition(y, lines[y].clamp_x(preferred_x))


def beginning_of_line(lines: Sequence[Line], position: EditorPosition) -> EditorPosition:
    y, line, _ = _clamp(lines, position)
    return EditorPosition(y, line.beginning())


def end_of_line(lines: Sequence[Line], position: EditorPosition) -> EditorPosition:
    y, line, _ = _clamp(lines, position)
    return EditorPosition(y, line.end())


def beginning_of_file(lines: Sequence[Line]) -> EditorPosition:
    return EditorPosition(0, lines[0].beginning())


def end_of_file(lines: Sequence[Line]) -> EditorPosition:
    last = len(lines) - 1
    return EditorPosition(last, lines[last].end())


def beginning_of_word(lines: Sequence[Line], position: EditorPosition) -> EditorPosition:
    """Move to the start of the current or previous word.

    Searches earlier lines when the current line has no word start before
    the cursor. A blank line stops the search at its beginning.
    """
    y, line, x = _clamp(lines, position)
    if x > 0:
        boundary = WrappedText(line.visible_text()).previous_word_boundary(x)
        if boundary is not None:
            return EditorPosition(y, boundary)
    for prev_y in range(y - 1, -1, -1):
        prev = lines[prev_y]
        if prev.is_blank():
            return EditorPosition(prev_y, prev.beginning())
        boundary = WrappedText(prev.visible_text()).previous_word_boundary(prev.end() + 1)
        if boundary is not None:
            return EditorPosition(prev_y, boundary)
    return beginning_of_file(lines)


def end_of_word(lines: Sequence[Line], position: EditorPosition) -> EditorPosition:
    """Move to the start of the next word, or the end of the line's last word.

    Searches later lines when nothing follows the cursor on this line. A
    blank line stops the search at its beginning.
    """
    y, line, x = _clamp(lines, position)
    boundary = WrappedText(line.visible_text()).next_word_boundary(max(x, -1))
    if boundary is not None:
        return EditorPosition(y, boundary)
    for next_y in range(y + 1, len(lines)):
        nxt = lines[next_y]
        if nxt.is_blank():
            return EditorPosition(next_y, nxt.beginning())
        boundary = WrappedText(nxt.visible_text()).next_word_boundary(-1)
        if boundary is not None:
            return EditorPosition(next_y, boundary)
    return end_of_file(lines)
