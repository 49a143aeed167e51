"""Main editor controller."""

import logging
import os
import select
import signal
import sys
import termios
from typing import Optional

from .buffer import Buffer
from .commands import CommandRegistry
from .constants import EditorConstants
from .document import Document
from .errors import MissingStorageError, StorageError
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .settings_persistence import SettingsPersistence, get_persistence
from .storage import FileStorage
from .terminal import TerminalInterface
from .view import DocumentView

logger = logging.getLogger(__name__)

FILENAME_PROMPTS = ('save_filename', 'save_filename_quit')
CANCEL_KEYS = {(KeyType.SPECIAL, 'escape'), (KeyType.CTRL, 'g')}


class Editor:
    """Terminal word processor: wires input, the document and the view."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 settings: Optional[SettingsPersistence] = None):
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.settings = settings or get_persistence()
        self.VIEW_WIDTH = EditorConstants.WRAP_WIDTH
        self.document = Document()
        self.view = DocumentView(self.document, num_rows=self.terminal.height,
                                 num_columns=self.VIEW_WIDTH)
        self.command_registry = CommandRegistry()
        self.running = False
        self.error_mode = False  # True when terminal is too narrow
        self.filename: Optional[str] = None
        self.status_message: Optional[str] = None
        self.prompt_mode: Optional[str] = None  # None, 'save_filename', 'save_filename_quit' or 'quit_confirm'
        self.prompt_input = ""
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None

    def _set_document(self, document: Document) -> None:
        self.document = document
        self.view.document = document
        self.view.top_row = 0

    # --- Files ---

    def load_file(self, filename: str) -> bool:
        """Load a file into the editor; a missing file starts an empty document.

        Returns:
            True if the document was loaded, False if reading failed.
        """
        storage = FileStorage(filename)
        if not storage.exists():
            logger.info(f"{filename} does not exist yet, starting an empty document")
        try:
            buffer = Buffer.from_storage(storage)
        except StorageError as e:
            self.status_message = str(e)
            return False

        self.filename = filename
        self._set_document(Document(buffer, self.document.clipboard))
        wrap_width = self.settings.wrap_width_for(filename)
        if wrap_width is not None:
            self.VIEW_WIDTH = wrap_width
            self.view.num_columns = wrap_width
        cursor = self.settings.cursor_for(filename)
        if cursor is not None:
            self.document.set_cursor(cursor)
        return True

    def _remember_cursor(self) -> None:
        self.settings.remember_cursor(self.filename, self.document.cursor_position())

    def handle_save(self) -> None:
        """Save, prompting for a file name if none is associated yet."""
        try:
            self.document.save()
        except MissingStorageError:
            self.prompt_mode = 'save_filename'
            self.prompt_input = ""
            return
        except StorageError as e:
            self.status_message = str(e)
            return
        self.status_message = EditorConstants.SAVED_MESSAGE.format(self.filename)
        self._remember_cursor()

    def save_as(self, filename: str) -> bool:
        """Associate ``filename`` with the document and save to it."""
        try:
            self.document.save_as(FileStorage(filename))
        except StorageError as e:
            self.status_message = str(e)
            return False
        self.filename = filename
        self.status_message = EditorConstants.SAVED_MESSAGE.format(filename)
        self._remember_cursor()
        return True

    # --- Input ---

    def _handle_key_event(self, key_event: KeyEvent) -> None:
        """Route a key to the active prompt, or to the bound command."""
        if self.prompt_mode in FILENAME_PROMPTS:
            self._handle_filename_prompt(key_event)
        elif self.prompt_mode == 'quit_confirm':
            self._handle_quit_confirm(key_event)
        elif not self.error_mode:
            # A message stays up until the next key
            self.status_message = None
            self.command_registry.execute(self, key_event)

    def _close_prompt(self) -> None:
        self.prompt_mode = None
        self.prompt_input = ""

    def _handle_filename_prompt(self, key_event: KeyEvent) -> None:
        key = (key_event.key_type, key_event.value)
        if key in CANCEL_KEYS:
            self._close_prompt()
        elif key == (KeyType.SPECIAL, 'enter'):
            if not self.prompt_input:
                return
            quitting = self.prompt_mode == 'save_filename_quit'
            if self.save_as(self.prompt_input) and quitting:
                self.running = False
            self._close_prompt()
        elif key == (KeyType.SPECIAL, 'backspace'):
            self.prompt_input = self.prompt_input[:-1]
        elif key_event.key_type == KeyType.REGULAR and key_event.value.isprintable():
            self.prompt_input += key_event.value

    def _handle_quit_confirm(self, key_event: KeyEvent) -> None:
        if key_event.key_type != KeyType.REGULAR:
            return
        answer = key_event.value.lower()
        if answer == 'n':
            self.running = False
        elif answer == 'y' and not self.document.buffer.has_storage():
            self.prompt_mode = 'save_filename_quit'
            self.prompt_input = ""
        elif answer == 'y':
            self._close_prompt()
            self.handle_save()
            self.running = self.document.is_modified()
        else:
            self._close_prompt()

    # --- Drawing ---

    def _status_line(self) -> Optional[str]:
        if self.prompt_mode in FILENAME_PROMPTS:
            return EditorConstants.SAVE_PROMPT.format(self.prompt_input)
        if self.prompt_mode == 'quit_confirm':
            return EditorConstants.QUIT_PROMPT
        if self.status_message:
            return f" {self.status_message}"
        return None

    def _draw(self) -> None:
        self.view.num_rows = self.terminal.height
        needed = max(EditorConstants.MIN_TERMINAL_WIDTH, self.VIEW_WIDTH)
        if self.terminal.width < needed:
            self.error_mode = True
            self.terminal.draw_error_message(
                EditorConstants.TERMINAL_TOO_NARROW_MESSAGE.format(needed),
                EditorConstants.CURRENT_WIDTH_MESSAGE.format(self.terminal.width),
            )
            return
        self.error_mode = False
        self.view.render()
        left_margin = max(0, (self.terminal.width - self.VIEW_WIDTH) // 2)
        self.terminal.draw_lines(
            self.view.lines,
            self.view.visual_cursor_y,
            self.view.visual_cursor_x,
            left_margin=left_margin,
            view_width=self.VIEW_WIDTH,
            status_override=self._status_line(),
            selection_ranges=self.view.selection_ranges,
            heading_rows=self.view.heading_rows,
            prompt_active=self.prompt_mode is not None,
        )

    # --- Main loop ---

    def _handle_resize(self, signum, frame):
        """SIGWINCH handler: wake the main loop so it redraws."""
        del signum, frame  # Unused
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    @staticmethod
    def _disable_flow_control() -> Optional[list]:
        """Let Ctrl-S and Ctrl-Q through as keys; returns the settings to restore."""
        try:
            saved = termios.tcgetattr(sys.stdin)
            raw = list(saved)
            raw[0] &= ~(termios.IXON | termios.IXOFF)
            termios.tcsetattr(sys.stdin, termios.TCSANOW, raw)
        except (termios.error, OSError) as e:
            logger.debug(f"Flow control left enabled: {e}")
            return None
        return saved

    @staticmethod
    def _restore_tty(saved: Optional[list]) -> None:
        if saved is None:
            return
        try:
            termios.tcsetattr(sys.stdin, termios.TCSANOW, saved)
        except (termios.error, OSError) as e:
            logger.debug(f"Could not restore terminal settings: {e}")

    def _wait_for_key(self) -> Optional[KeyEvent]:
        """Block until a key arrives; None when woken by a resize."""
        ready, _, _ = select.select([sys.stdin, self._resize_pipe_r], [], [])
        if self._resize_pipe_r in ready:
            os.read(self._resize_pipe_r, 1024)
            return None
        return self.keyboard.get_key_event(timeout=0)

    def run(self) -> None:
        """Edit until the user quits."""
        logger.info(f"Editing {self.filename or 'a new document'}")
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        previous_winch = signal.signal(signal.SIGWINCH, self._handle_resize)
        self.terminal.setup()
        self.running = True
        saved_tty = None
        try:
            with self.terminal.term.cbreak():
                saved_tty = self._disable_flow_control()
                while self.running:
                    self._draw()
                    key_event = self._wait_for_key()
                    if key_event is not None:
                        self._handle_key_event(key_event)
        except KeyboardInterrupt:
            logger.info("Interrupted")
        finally:
            self._restore_tty(saved_tty)
            signal.signal(signal.SIGWINCH, previous_winch)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()
            if self.filename:
                self._remember_cursor()
