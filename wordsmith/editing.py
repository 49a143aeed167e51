"""Document mutation and post-edit cursor placement."""

from typing import assert_never

from . import navigation
from .lines import LineKind, LineModel
from .position import Cursor, EditLocation, EditorPosition, Selection
from .store import RawStore


def edit_range(location: EditLocation) -> tuple[EditorPosition, EditorPosition]:
    """The ordered range an edit at ``location`` replaces."""
    if isinstance(location, Cursor):
        return (location.position, location.position)
    elif isinstance(location, Selection):
        return (location.smallest(), location.largest())
    else:
        assert_never(location)


class EditEngine:
    """Applies edits to a RawStore.

    ``replace_range`` is the only place the text changes. The derived
    operations compute offsets before the mutation and positions after it,
    and return the Cursor that replaces the current edit location.
    """

    def __init__(self, store: RawStore):
        self.store = store
        self.line_model = LineModel(store)

    def _offset(self, position: EditorPosition) -> int:
        return min(self.line_model.position_to_offset(position), self.store.length())

    def replace_range(self, start: EditorPosition, end: EditorPosition, text: str) -> None:
        self.store.replace(self._offset(start), self._offset(end), text)

    def read_range(self, start: EditorPosition, end: EditorPosition) -> str:
        return self.store.read(self._offset(start), self._offset(end))

    def insert(self, location: EditLocation, text: str) -> Cursor:
        start, end = edit_range(location)
        before = self.line_model.line(start.y)
        raw_column = start.x + before.marker_length
        offset = self._offset(start)

        self.replace_range(start, end, text)

        position = self.line_model.offset_to_position(offset + len(text))
        if text == " ":
            after = self.line_model.line(start.y)
            # The space just typed is the one that turns "##" into a heading marker
            if (after.kind is LineKind.HEADLINE_START
                    and raw_column == after.marker_length - 1):
                position = EditorPosition(start.y, 0)
        return Cursor.at(position)

    def backspace(self, location: EditLocation) -> Cursor:
        if isinstance(location, Cursor):
            return self._backspace_at(location)
        elif isinstance(location, Selection):
            return self.delete_selection(location)
        else:
            assert_never(location)

    def _backspace_at(self, cursor: Cursor) -> Cursor:
        lines = self.line_model.lines()
        y = min(max(cursor.position.y, 0), len(lines) - 1)
        line = lines[y]
        position = EditorPosition(y, line.clamp_x(cursor.position.x))

        if position == navigation.beginning_of_file(lines):
            return Cursor.at(position)
        if line.kind is LineKind.HEADLINE_START and position.x == 0:
            # Remove the whole marker in one step
            start = EditorPosition(y, line.beginning())
        else:
            start = navigation.left(lines, position)

        offset = self._offset(start)
        self.replace_range(start, position, "")
        return Cursor.at(self.line_model.offset_to_position(offset))

    def delete_selection(self, selection: Selection) -> Cursor:
        smallest = selection.smallest()
        self.replace_range(smallest, selection.largest(), "")
        line = self.line_model.line(smallest.y)
        return Cursor.at(EditorPosition(smallest.y, line.clamp_x(max(0, smallest.x))))

    def enter(self, location: EditLocation) -> Cursor:
        start, end = edit_range(location)
        offset = self._offset(start)
        self.replace_range(start, end, "\n")
        y = self.line_model.offset_to_position(offset + 1).y
        return Cursor.at(EditorPosition(y, self.line_model.line(y).beginning()))
