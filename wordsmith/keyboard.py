"""Turning curtsies key tokens into key events."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyType(Enum):
    REGULAR = "regular"  # text to insert
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"  # named keys: arrows, home/end, enter...
    SHIFT_SPECIAL = "shift_special"
    SHIFT_ALT = "shift_alt"
    CTRL_SPECIAL = "ctrl_special"
    SHIFT_CTRL_SPECIAL = "shift_ctrl_special"


@dataclass
class KeyEvent:
    """One key press, reduced to a type and a base key name."""
    key_type: KeyType
    value: str  # 'a', 'left', 'enter', ...
    raw: str  # token as received
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False
    is_sequence: bool = False


SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace', 'delete',
    'page_up', 'page_down', 'insert', 'f1',
}

# Alternative spellings found in curtsies and terminfo key names
KEY_ALIASES = {
    'pageup': 'page_up', 'ppage': 'page_up',
    'pagedown': 'page_down', 'npage': 'page_down',
    'bs': 'backspace', 'return': 'enter',
    'spacebar': 'space', 'spc': 'space', 'esc': 'escape',
}

# Terminfo names for shifted keys
SHIFTED_KEYS = {
    'sleft': 'left', 'sright': 'right', 'shome': 'home',
    'send': 'end', 'sr': 'up', 'sf': 'down',
}

# Named keys that are really text when unmodified
TEXT_KEYS = {'space': ' ', 'tab': '\t'}


def _special_type(shift: bool, alt: bool, ctrl: bool) -> KeyType:
    if shift and alt:
        return KeyType.SHIFT_ALT
    if shift and ctrl:
        return KeyType.SHIFT_CTRL_SPECIAL
    if shift:
        return KeyType.SHIFT_SPECIAL
    if alt:
        return KeyType.ALT
    if ctrl:
        return KeyType.CTRL_SPECIAL
    return KeyType.SPECIAL


class KeyboardHandler:
    """Reads tokens from the terminal and parses them into KeyEvents."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        token = self.terminal.get_key(timeout)
        if not token:
            return None
        return self.parse_key(token)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies token ('<LEFT>', '<Ctrl-x>') or raw character(s)."""
        token = str(key)
        if len(token) > 2 and token[0] == '<' and token[-1] == '>':
            return self._parse_named(token)
        if len(token) == 1:
            return self._parse_char(token)
        # Several characters at once: a paste
        return KeyEvent(KeyType.REGULAR, token, token)

    def _parse_char(self, char: str) -> KeyEvent:
        code = ord(char)
        if code in (8, 127):
            return KeyEvent(KeyType.SPECIAL, 'backspace', char)
        if code == 9:
            return KeyEvent(KeyType.REGULAR, '\t', char)
        if code in (10, 13):
            return KeyEvent(KeyType.SPECIAL, 'enter', char)
        if code == 27:
            return KeyEvent(KeyType.SPECIAL, 'escape', char)
        if 1 <= code <= 26:
            return KeyEvent(KeyType.CTRL, chr(ord('a') + code - 1), char, is_ctrl=True)
        return KeyEvent(KeyType.REGULAR, char, char)

    def _parse_named(self, token: str) -> KeyEvent:
        name = token[1:-1].lower().replace('+', '-')
        if name.startswith('key_'):
            name = name[len('key_'):]
        # A trailing '-' is the minus key itself, not a separator
        if name.endswith('-'):
            *modifiers, base = name[:-1].split('-') + ['-']
        else:
            *modifiers, base = name.split('-')
        modifiers = set(modifiers)

        base = KEY_ALIASES.get(base, base)
        if base in SHIFTED_KEYS:
            base = SHIFTED_KEYS[base]
            modifiers.add('shift')
        shift = 'shift' in modifiers
        alt = bool(modifiers & {'alt', 'meta', 'esc'})
        ctrl = 'ctrl' in modifiers

        if not (shift or alt or ctrl):
            if base in TEXT_KEYS:
                text = TEXT_KEYS[base]
                return KeyEvent(KeyType.REGULAR, text, text)
            if base == 'escape':
                return KeyEvent(KeyType.SPECIAL, 'escape', '\x1b')

        if base in SPECIAL_KEYS:
            return KeyEvent(_special_type(shift, alt, ctrl), base, token,
                            is_alt=alt, is_ctrl=ctrl, is_shift=shift, is_sequence=True)
        if len(base) == 1:
            if ctrl:
                if base in ('j', 'm'):
                    return KeyEvent(KeyType.SPECIAL, 'enter', token, is_sequence=True)
                return KeyEvent(KeyType.CTRL, base, token, is_ctrl=True)
            if alt:
                return KeyEvent(KeyType.ALT, base, token, is_alt=True)
        # Anything else is a key we do not bind; it must never insert text
        return KeyEvent(KeyType.SPECIAL, base, token, is_sequence=True)
