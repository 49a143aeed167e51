"""Per-document settings that outlive an editing session.

Each document gets a small record, keyed by its absolute path, in a JSON
file under the platform's user config directory. The editor uses it to
reopen a document where the cursor was left and to remember a wrap width
chosen for that document.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .position import EditorPosition

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"


class SettingsKeys:
    """Keys stored for each document."""

    CURSOR_Y = "cursor_y"
    CURSOR_X = "cursor_x"
    WRAP_WIDTH = "wrap_width"


def _is_int(value: Any) -> bool:
    # bool is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


class SettingsPersistence:
    """JSON-backed store of settings records, one per document path.

    The file is read once and kept in memory; every change rewrites the
    whole file through a temporary file so a crash never leaves half a
    settings file behind.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = config_dir or Path(platformdirs.user_config_dir("wordsmith"))
        self._settings_file = self._config_dir / SETTINGS_FILENAME
        self._records: Optional[Dict[str, Dict[str, Any]]] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _read_records(self) -> Dict[str, Dict[str, Any]]:
        if self._records is not None:
            return self._records

        records: Dict[str, Dict[str, Any]] = {}
        if self._settings_file.exists():
            try:
                with open(self._settings_file, encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Ignoring unreadable settings file {self._settings_file}: {e}")
            else:
                if isinstance(data, dict):
                    records = data
                else:
                    logger.warning(f"Ignoring settings file {self._settings_file}: top level is not an object")
        self._records = records
        return records

    def _write_records(self, records: Dict[str, Dict[str, Any]]) -> bool:
        temp_file = self._settings_file.with_name(SETTINGS_FILENAME + ".tmp")
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(records, f, indent=2, sort_keys=True)
            os.replace(temp_file, self._settings_file)
        except OSError as e:
            logger.warning(f"Settings not saved to {self._settings_file}: {e}")
            if temp_file.exists():
                try:
                    temp_file.unlink()
                except OSError:
                    pass
            return False
        self._records = records
        return True

    def load_settings(self, document_path: Optional[str]) -> Dict[str, Any]:
        """Return the valid settings stored for a document.

        Unknown keys are passed through untouched; known keys with a bad
        value are dropped. A document without a record (or no document at
        all) gets an empty dict.
        """
        if document_path is None:
            return {}
        key = os.path.abspath(document_path)
        record = self._read_records().get(key, {})
        if not isinstance(record, dict):
            logger.warning(f"Ignoring malformed settings record for {key}")
            return {}
        return {name: value for name, value in record.items()
                if self.validate_setting(name, value)}

    def save_settings(self, document_path: Optional[str], settings: Dict[str, Any]) -> bool:
        """Merge ``settings`` into the document's record and write the file.

        Returns:
            False if there is no document path or the file could not be written.
        """
        if document_path is None:
            return False
        key = os.path.abspath(document_path)
        records = dict(self._read_records())
        record = records.get(key)
        records[key] = {**(record if isinstance(record, dict) else {}), **settings}
        return self._write_records(records)

    def validate_setting(self, key: str, value: Any) -> bool:
        if value is None:
            return True
        if key in (SettingsKeys.CURSOR_Y, SettingsKeys.CURSOR_X):
            return _is_int(value)
        if key == SettingsKeys.WRAP_WIDTH:
            return _is_int(value) and 20 <= value <= 200
        # Keys written by newer versions are kept
        return True

    def cursor_for(self, document_path: Optional[str]) -> Optional[EditorPosition]:
        """The cursor position last remembered for a document, if any."""
        settings = self.load_settings(document_path)
        y = settings.get(SettingsKeys.CURSOR_Y)
        x = settings.get(SettingsKeys.CURSOR_X)
        if y is None or x is None:
            return None
        return EditorPosition(y, x)

    def remember_cursor(self, document_path: Optional[str], position: EditorPosition) -> bool:
        return self.save_settings(document_path, {
            SettingsKeys.CURSOR_Y: position.y,
            SettingsKeys.CURSOR_X: position.x,
        })

    def wrap_width_for(self, document_path: Optional[str]) -> Optional[int]:
        return self.load_settings(document_path).get(SettingsKeys.WRAP_WIDTH)

    def clear_cache(self) -> None:
        """Forget the in-memory copy so the next read goes to disk."""
        self._records = None


_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Shared instance using the default config directory."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
