"""Screen output with blessed; key tokens from curtsies."""

import select
import sys
from typing import Optional

import blessed

HELP_TEXT = "Ctrl-S save  Ctrl-Q quit"


class TerminalInterface:
    """Full-screen drawing surface.

    The bottom row of the terminal is the status line, so ``height`` is one
    less than the terminal's.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._input = None  # curtsies.Input while the editor runs

    def setup(self):
        """Switch to the alternate screen and start reading keys."""
        print(self.term.enter_fullscreen + self.term.hide_cursor + self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._input is None:
            from curtsies import Input
            self._input = Input(keynames='curtsies')
            self._input.__enter__()

    def cleanup(self):
        """Leave the alternate screen; safe to call more than once."""
        if self.is_fullscreen:
            print(self.term.normal_cursor + self.term.exit_fullscreen, end='', flush=True)
            self.is_fullscreen = False
        if self._input is not None:
            try:
                self._input.__exit__(None, None, None)
            finally:
                self._input = None

    def clear_screen(self):
        print(self.term.home + self.term.clear, end='')

    def _compose_line(self, line: str, view_width: int,
                      selection: Optional[tuple[int, int]], bold: bool) -> str:
        """Pad a row to the view width and add bold/reverse attributes."""
        text = line[:view_width].ljust(view_width)
        base = self.term.bold if bold else ''
        if not selection:
            return base + text + self.term.normal
        lo, hi = selection
        return (base + text[:lo]
                + self.term.reverse + text[lo:hi] + self.term.normal
                + base + text[hi:] + self.term.normal)

    def draw_lines(self, lines: list[str], cursor_y: int, cursor_x: int,
                   left_margin: int = 0, view_width: int = 65,
                   status_override: Optional[str] = None,
                   selection_ranges: Optional[list] = None,
                   heading_rows: Optional[list[bool]] = None,
                   prompt_active: bool = False):
        """Paint one frame and leave the hardware cursor on the caret.

        Args:
            lines: Screen rows, top to bottom
            cursor_y: Caret row within ``lines``
            cursor_x: Caret column within its row
            left_margin: Columns of padding left of the text
            view_width: Columns each row is padded to
            status_override: Text for the status line (a prompt or message);
                the key help is shown when None
            selection_ranges: Per-row (start, end) columns to draw reversed
            heading_rows: Per-row flag, True to draw the row bold
            prompt_active: Leave the caret after the status text, where
                the prompt input is typed
        """
        self.clear_screen()

        for y, line in enumerate(lines):
            selection = selection_ranges[y] if selection_ranges and y < len(selection_ranges) else None
            bold = bool(heading_rows and y < len(heading_rows) and heading_rows[y])
            print(self.term.move(y, left_margin)
                  + self._compose_line(line, view_width, selection, bold), end='')

        status_row = self.term.height - 1
        print(self.term.move(status_row, 0), end='')
        if status_override:
            print(status_override.ljust(self.term.width), end='')
        else:
            print(HELP_TEXT.rjust(self.term.width - 1), end='')

        if prompt_active and status_override:
            position = self.term.move(status_row, len(status_override))
        else:
            position = self.term.move(cursor_y, cursor_x + left_margin)
        print(position + self.term.normal_cursor, end='', flush=True)

    def draw_error_message(self, message1: str, message2: str = ""):
        """Show one or two lines in a box in the middle of the screen."""
        self.clear_screen()
        messages = [m for m in (message1, message2) if m]
        inner = max(len(m) for m in messages) + 2
        left = max(0, (self.term.width - inner - 2) // 2)
        top = max(0, self.term.height // 2 - 2)

        rows = ["╔" + "═" * inner + "╗"]
        rows += ["║" + m.center(inner) + "║" for m in messages]
        rows.append("╚" + "═" * inner + "╝")
        for i, row in enumerate(rows):
            print(self.term.move(top + i, left) + row, end='')
        print('', end='', flush=True)

    def get_key(self, timeout=None):
        """Next curtsies key token as a string.

        ``timeout`` is in seconds; None blocks. Returns None when no key
        arrives in time or input has not been set up.
        """
        if self._input is None:
            return None
        if timeout is not None:
            ready, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not ready:
                return None
        return str(next(self._input))

    @property
    def width(self):
        return self.term.width

    @property
    def height(self):
        """Rows available for text (the status line excluded)."""
        return self.term.height - 1
