"""Layout of a document into soft-wrapped screen rows."""

from dataclasses import dataclass
from typing import Optional, assert_never

from .constants import EditorConstants
from .document import Document
from .lines import Line, LineKind
from .position import Cursor, Selection
from .wrap import WrappedText


@dataclass(frozen=True)
class VisualRow:
    """One screen row: a wrapped piece of an authored line."""
    y: int  # authored line index
    start_x: int  # editor x of text[0]
    text: str
    heading: bool  # line belongs to a heading


def _is_heading(line: Line) -> bool:
    if line.kind is LineKind.HEADLINE_START or line.kind is LineKind.HEADLINE_CONTINUATION:
        return True
    elif line.kind is LineKind.NORMAL:
        return False
    else:
        assert_never(line.kind)


class DocumentView:
    """Renders a Document into rows of at most ``num_columns`` characters.

    Heading markers are hidden except on the line holding the cursor, so
    the caret always has a visible cell to sit in. After ``render()`` the
    visible rows are in ``lines``, the caret in ``visual_cursor_y`` /
    ``visual_cursor_x``, and ``selection_ranges`` holds the highlighted
    column span of each row (or None).
    """

    def __init__(self, document: Document, num_rows: int = 24,
                 num_columns: int = EditorConstants.WRAP_WIDTH):
        self.document = document
        self.num_rows = num_rows
        self.num_columns = num_columns
        self.top_row = 0
        self.lines: list[str] = []
        self.heading_rows: list[bool] = []
        self.selection_ranges: list[Optional[tuple[int, int]]] = []
        self.visual_cursor_y = 0
        self.visual_cursor_x = 0

    def layout(self) -> list[VisualRow]:
        """Wrap every authored line into screen rows."""
        cursor_y = self.document.cursor_position().y
        rows: list[VisualRow] = []
        for y, line in enumerate(self.document.lines()):
            if y == cursor_y:
                text, origin = line.text, line.beginning()
            else:
                text, origin = line.visible_text(), 0
            for wrapped in WrappedText(text, self.num_columns).wrapped_lines():
                rows.append(VisualRow(y, origin + wrapped.start, wrapped.text, _is_heading(line)))
        return rows

    def locate_cursor(self, rows: list[VisualRow]) -> tuple[int, int]:
        """Row index and column of the caret within ``rows``."""
        position = self.document.cursor_position()
        y = min(max(position.y, 0), rows[-1].y)
        line = self.document.buffer.line(y)
        first = next(i for i, row in enumerate(rows) if row.y == y)
        # The cursor line is laid out with its marker, starting at beginning()
        offset = line.clamp_x(position.x) - line.beginning()
        sub_line, column = WrappedText(line.text, self.num_columns).locate(offset)
        return (first + sub_line, column)

    def _selection_range(self, row: VisualRow) -> Optional[tuple[int, int]]:
        location = self.document.location
        if isinstance(location, Cursor):
            return None
        elif isinstance(location, Selection):
            start, end = location.smallest(), location.largest()
        else:
            assert_never(location)
        if row.y < start.y or row.y > end.y:
            return None
        row_end = row.start_x + len(row.text)
        lo = row.start_x if row.y > start.y else max(start.x, row.start_x)
        hi = row_end if row.y < end.y else min(end.x, row_end)
        if lo >= hi:
            return None
        return (lo - row.start_x, hi - row.start_x)

    def render(self) -> None:
        rows = self.layout()
        cursor_row, cursor_col = self.locate_cursor(rows)

        # Keep the caret on screen with a little context around it
        context = min(EditorConstants.CONTEXT_ROWS, max(self.num_rows - 1, 0) // 2)
        if cursor_row < self.top_row + context:
            self.top_row = max(0, cursor_row - context)
        elif cursor_row > self.top_row + self.num_rows - 1 - context:
            self.top_row = cursor_row - self.num_rows + 1 + context
        self.top_row = max(0, min(self.top_row, max(0, len(rows) - 1)))

        visible = rows[self.top_row:self.top_row + self.num_rows]
        self.lines = [row.text for row in visible]
        self.heading_rows = [row.heading for row in visible]
        self.selection_ranges = [self._selection_range(row) for row in visible]
        self.visual_cursor_y = cursor_row - self.top_row
        self.visual_cursor_x = cursor_col
