"""Exception types raised by the wordsmith core."""

from typing import Optional


class WordsmithError(Exception):
    """Base class for wordsmith errors."""


class UnwrappableLineError(WordsmithError):
    """A word is wider than the wrap width and the policy forbids breaking it."""

    def __init__(self, word: str, width: int):
        super().__init__(f"Cannot wrap {len(word)}-character word at width {width}")
        self.word = word
        self.width = width


class MissingStorageError(WordsmithError):
    """Save was requested but no storage target is associated with the buffer."""


class StorageError(WordsmithError):
    """The persistence collaborator failed to load or save.

    The original OSError is kept on ``cause`` so the UI can tell the user
    what went wrong.
    """

    def __init__(self, message: str, cause: Optional[OSError] = None):
        super().__init__(message)
        self.cause = cause
