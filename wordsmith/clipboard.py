"""System clipboard integration."""

import logging

import pyperclip

logger = logging.getLogger(__name__)


class ClipboardManager:
    """Plain-text clipboard backed by pyperclip.

    When no system clipboard mechanism is available (headless sessions,
    missing xclip/xsel) the text is kept in an in-process clipboard so cut
    and paste keep working inside the editor.
    """

    def __init__(self):
        self._fallback = ""
        self._system_available = True

    def copy_text(self, text: str) -> None:
        self._fallback = text
        if not self._system_available:
            return
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            logger.warning(f"System clipboard unavailable, using internal clipboard: {e}")
            self._system_available = False

    def paste_text(self) -> str:
        if not self._system_available:
            return self._fallback
        try:
            text = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            logger.warning(f"System clipboard unavailable, using internal clipboard: {e}")
            self._system_available = False
            return self._fallback
        # Normalize line endings from other applications
        return text.replace('\r\n', '\n').replace('\r', '\n')
