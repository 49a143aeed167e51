"""Document buffer: raw text plus its association with storage."""

import logging
from typing import Optional, Protocol

from .editing import EditEngine
from .errors import MissingStorageError
from .lines import Line, LineModel
from .position import EditorPosition
from .store import RawStore

logger = logging.getLogger(__name__)


class Storage(Protocol):
    """Persistence collaborator: anything that can load and save raw text."""

    def load(self) -> str: ...

    def save(self, text: str) -> None: ...


class Buffer:
    """Owns the document text and tracks whether it has been saved."""

    def __init__(self, text: str = "", storage: Optional[Storage] = None):
        self.store = RawStore(text)
        self.line_model = LineModel(self.store)
        self.engine = EditEngine(self.store)
        self.storage = storage
        self._saved = True

    @classmethod
    def from_storage(cls, storage: Storage) -> "Buffer":
        """Load a buffer from storage; StorageError propagates to the caller."""
        return cls(storage.load(), storage)

    def text(self) -> str:
        return self.store.text()

    def is_empty(self) -> bool:
        return self.store.length() == 0

    def pristine(self) -> bool:
        """True if the content matches what was last loaded or saved."""
        return self._saved

    def mark_modified(self) -> None:
        self._saved = False

    def has_storage(self) -> bool:
        return self.storage is not None

    def save(self) -> None:
        """Write the content to the associated storage.

        Raises:
            MissingStorageError: no storage target is associated yet.
            StorageError: the write failed; content and saved state are unchanged.
        """
        if self.storage is None:
            raise MissingStorageError("No file associated with this document")
        self.storage.save(self.text())
        self._saved = True
        logger.info(f"Saved {self.store.length()} characters to {self.storage!r}")

    def set_storage(self, storage: Storage) -> None:
        """Associate a new storage target and save to it.

        The previous target is kept if the save fails.
        """
        previous = self.storage
        self.storage = storage
        try:
            self.save()
        except Exception:
            self.storage = previous
            raise

    # Line model passthroughs

    def lines(self) -> list[Line]:
        return self.line_model.lines()

    def line(self, index: int) -> Line:
        return self.line_model.line(index)

    def position_to_offset(self, position: EditorPosition) -> int:
        return self.line_model.position_to_offset(position)

    def offset_to_position(self, offset: int) -> EditorPosition:
        return self.line_model.offset_to_position(offset)

    def read_range(self, start: EditorPosition, end: EditorPosition) -> str:
        return self.engine.read_range(start, end)
