"""Editor session: a buffer plus the single active edit location."""

from enum import Enum
from typing import Callable, Optional, Sequence, assert_never

from . import navigation
from .buffer import Buffer, Storage
from .clipboard import ClipboardManager
from .lines import Line
from .position import Cursor, EditLocation, EditorPosition, Selection


class Motion(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    BEGINNING_OF_LINE = "beginning_of_line"
    END_OF_LINE = "end_of_line"
    BEGINNING_OF_WORD = "beginning_of_word"
    END_OF_WORD = "end_of_word"
    BEGINNING_OF_FILE = "beginning_of_file"
    END_OF_FILE = "end_of_file"

    @property
    def is_backward(self) -> bool:
        return self in (Motion.LEFT, Motion.UP, Motion.BEGINNING_OF_LINE,
                        Motion.BEGINNING_OF_WORD, Motion.BEGINNING_OF_FILE)

    @property
    def is_vertical(self) -> bool:
        return self in (Motion.UP, Motion.DOWN)


def apply_motion(motion: Motion, lines: Sequence[Line], position: EditorPosition,
                 preferred_x: int) -> EditorPosition:
    if motion is Motion.LEFT:
        return navigation.left(lines, position)
    elif motion is Motion.RIGHT:
        return navigation.right(lines, position)
    elif motion is Motion.UP:
        return navigation.up(lines, position, preferred_x)
    elif motion is Motion.DOWN:
        return navigation.down(lines, position, preferred_x)
    elif motion is Motion.BEGINNING_OF_LINE:
        return navigation.beginning_of_line(lines, position)
    elif motion is Motion.END_OF_LINE:
        return navigation.end_of_line(lines, position)
    elif motion is Motion.BEGINNING_OF_WORD:
        return navigation.beginning_of_word(lines, position)
    elif motion is Motion.END_OF_WORD:
        return navigation.end_of_word(lines, position)
    elif motion is Motion.BEGINNING_OF_FILE:
        return navigation.beginning_of_file(lines)
    elif motion is Motion.END_OF_FILE:
        return navigation.end_of_file(lines)
    else:
        assert_never(motion)


class Document:
    """The editing session for one document.

    ``location`` is the only piece of mutable cursor state. Every command
    replaces it with a new Cursor or Selection; nothing here caches line
    data, it is always recomputed from the buffer.
    """

    def __init__(self, buffer: Optional[Buffer] = None,
                 clipboard: Optional[ClipboardManager] = None):
        self.buffer = buffer if buffer is not None else Buffer()
        self.clipboard = clipboard if clipboard is not None else ClipboardManager()
        self.location: EditLocation = Cursor.at(navigation.beginning_of_file(self.buffer.lines()))

    # --- State queries ---

    def lines(self) -> list[Line]:
        return self.buffer.lines()

    def text(self) -> str:
        return self.buffer.text()

    def cursor_position(self) -> EditorPosition:
        """Where the caret is drawn: the cursor, or a selection's floating end."""
        location = self.location
        if isinstance(location, Cursor):
            return location.position
        elif isinstance(location, Selection):
            return location.end
        else:
            assert_never(location)

    def has_selection(self) -> bool:
        return isinstance(self.location, Selection)

    def set_cursor(self, position: EditorPosition) -> None:
        lines = self.lines()
        y = min(max(position.y, 0), len(lines) - 1)
        self.location = Cursor.at(EditorPosition(y, lines[y].clamp_x(position.x)))

    # --- Movement ---

    def move(self, motion: Motion) -> None:
        """Move the cursor, collapsing any selection."""
        lines = self.lines()
        location = self.location
        if isinstance(location, Cursor):
            origin = location.position
            preferred_x = location.preferred_x
        elif isinstance(location, Selection):
            origin = location.smallest() if motion.is_backward else location.largest()
            preferred_x = origin.x
            if motion in (Motion.LEFT, Motion.RIGHT):
                # Collapse onto the edge in the direction of travel
                self.location = Cursor.at(origin)
                return
        else:
            assert_never(location)

        target = apply_motion(motion, lines, origin, preferred_x)
        self.location = Cursor(target, preferred_x if motion.is_vertical else target.x)

    def select(self, motion: Motion) -> None:
        """Extend the selection (or start one) by moving its floating end."""
        lines = self.lines()
        location = self.location
        if isinstance(location, Cursor):
            anchor = location.position
            origin = location.position
            preferred_x = location.preferred_x
        elif isinstance(location, Selection):
            anchor = location.start
            origin = location.end
            preferred_x = location.sticky_x()
        else:
            assert_never(location)

        target = apply_motion(motion, lines, origin, preferred_x)
        sticky_x = preferred_x if motion.is_vertical else target.x
        if target == anchor:
            self.location = Cursor(target, sticky_x)
        else:
            self.location = Selection(anchor, target, sticky_x if motion.is_vertical else None)

    def select_all(self) -> None:
        lines = self.lines()
        start = navigation.beginning_of_file(lines)
        end = navigation.end_of_file(lines)
        self.location = Cursor.at(start) if start == end else Selection(start, end)

    def collapse_selection(self) -> None:
        location = self.location
        if isinstance(location, Cursor):
            return
        elif isinstance(location, Selection):
            self.location = Cursor.at(location.end)
        else:
            assert_never(location)

    # --- Editing ---

    def _edit(self, operation: Callable[[], Cursor]) -> bool:
        """Run an edit, replace the location, and report whether text changed."""
        before = self.buffer.text()
        self.location = operation()
        changed = self.buffer.text() != before
        if changed:
            self.buffer.mark_modified()
        return changed

    def insert(self, text: str) -> bool:
        location = self.location
        return self._edit(lambda: self.buffer.engine.insert(location, text))

    def backspace(self) -> bool:
        location = self.location
        return self._edit(lambda: self.buffer.engine.backspace(location))

    def enter(self) -> bool:
        location = self.location
        return self._edit(lambda: self.buffer.engine.enter(location))

    def replace_range(self, start: EditorPosition, end: EditorPosition, text: str) -> bool:
        """Replace an arbitrary range and leave the cursor after the new text."""
        def operation() -> Cursor:
            offset = min(self.buffer.position_to_offset(min(start, end)), len(self.buffer.text()))
            self.buffer.engine.replace_range(start, end, text)
            return Cursor.at(self.buffer.offset_to_position(offset + len(text)))
        return self._edit(operation)

    def read_range(self, start: EditorPosition, end: EditorPosition) -> str:
        return self.buffer.read_range(start, end)

    def selected_text(self) -> str:
        location = self.location
        if isinstance(location, Cursor):
            return ""
        elif isinstance(location, Selection):
            return self.read_range(location.smallest(), location.largest())
        else:
            assert_never(location)

    # --- Clipboard ---

    def copy(self) -> bool:
        """Copy the selection to the clipboard. Returns False without a selection."""
        if not self.has_selection():
            return False
        self.clipboard.copy_text(self.selected_text())
        return True

    def cut(self) -> bool:
        location = self.location
        if not isinstance(location, Selection):
            return False
        self.clipboard.copy_text(self.selected_text())
        return self._edit(lambda: self.buffer.engine.delete_selection(location))

    def paste(self) -> bool:
        text = self.clipboard.paste_text()
        if not text:
            return False
        return self.insert(text)

    # --- Persistence ---

    def is_modified(self) -> bool:
        return not self.buffer.pristine()

    def save(self) -> None:
        """Save to the associated storage (see Buffer.save for errors)."""
        self.buffer.save()

    def save_as(self, storage: Storage) -> None:
        self.buffer.set_storage(storage)
