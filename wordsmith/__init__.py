"""Wordsmith - a terminal editor for headings and paragraphs."""

from .buffer import Buffer
from .document import Document, Motion
from .editing import EditEngine
from .errors import MissingStorageError, StorageError, UnwrappableLineError, WordsmithError
from .lines import Line, LineKind, LineModel
from .position import Cursor, EditorPosition, Selection
from .store import RawStore
from .wrap import WrappedText, WrapPolicy

__all__ = [
    'Buffer',
    'Cursor',
    'Document',
    'EditEngine',
    'EditorPosition',
    'Line',
    'LineKind',
    'LineModel',
    'MissingStorageError',
    'Motion',
    'RawStore',
    'Selection',
    'StorageError',
    'UnwrappableLineError',
    'WordsmithError',
    'WrapPolicy',
    'WrappedText',
]
