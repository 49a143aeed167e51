"""File persistence for documents.

The document is stored verbatim: no header, no metadata.
"""

import errno
import logging
import os
import tempfile

from .constants import EditorConstants
from .errors import StorageError

logger = logging.getLogger(__name__)


class FileStorage:
    """A document file on disk."""

    def __init__(self, path: str):
        self.path = path

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def load(self) -> str:
        """Read the whole file.

        Returns:
            The file contents, or an empty string if the file does not exist yet.

        Raises:
            StorageError: if the file exists but cannot be read.
        """
        try:
            with open(self.path, 'r', encoding='utf-8', newline='') as f:
                return f.read()
        except FileNotFoundError:
            # New file - start with empty document
            return ""
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not load {self.path}: {e}")
            cause = e if isinstance(e, OSError) else None
            raise StorageError(f"Error: Cannot read {self.path}", cause) from e

    def save(self, text: str) -> None:
        """Save the text atomically.

        Writes to a temporary file in the same directory, fsyncs it and
        renames it over the target, so a failed save never leaves a
        truncated document behind.

        Raises:
            StorageError: if the file could not be written.
        """
        dir_name = os.path.dirname(self.path) or '.'
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', newline='',
                                             dir=dir_name,
                                             suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(text)
                temp_file.flush()
                os.fsync(temp_file.fileno())

            os.replace(temp_filename, self.path)
        except OSError as e:
            logger.warning(f"Could not save {self.path}: {e}")
            if temp_filename is not None and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    pass
            raise StorageError(self._describe(e), e) from e

    def _describe(self, error: OSError) -> str:
        if isinstance(error, PermissionError):
            return f"Error: Permission denied saving {self.path}"
        if error.errno == errno.ENOSPC:
            return "Error: No space left on device"
        return f"Error: Cannot save to {self.path}"

    def __repr__(self):
        return f"FileStorage({self.path!r})"
