"""Editor positions, cursors and selections."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True, order=True)
class EditorPosition:
    """A (line, column) pair ordered line first, then column.

    ``x`` counts from the first visible character of the line, so it is
    negative inside a hidden heading marker.
    """
    y: int = 0
    x: int = 0

    def __str__(self):
        return f"({self.y}, {self.x})"


@dataclass(frozen=True)
class Cursor:
    position: EditorPosition = field(default_factory=EditorPosition)
    preferred_x: int = 0

    @classmethod
    def at(cls, position: EditorPosition) -> "Cursor":
        """Cursor at ``position`` whose sticky column is its own column."""
        return cls(position, position.x)


class SelectionDirection(Enum):
    FORWARDS = "forwards"
    BACKWARDS = "backwards"


@dataclass(frozen=True)
class Selection:
    """A selection from an anchor (``start``) to a floating ``end``."""
    start: EditorPosition
    end: EditorPosition
    preferred_x: Optional[int] = None

    def direction(self) -> SelectionDirection:
        if self.end < self.start:
            return SelectionDirection.BACKWARDS
        return SelectionDirection.FORWARDS

    def smallest(self) -> EditorPosition:
        return min(self.start, self.end)

    def largest(self) -> EditorPosition:
        return max(self.start, self.end)

    def sticky_x(self) -> int:
        return self.end.x if self.preferred_x is None else self.preferred_x


EditLocation = Union[Cursor, Selection]
