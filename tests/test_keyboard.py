"""Test keyboard input handling."""

import pytest

from wordsmith.keyboard import KeyboardHandler, KeyEvent, KeyType


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self._key_queue = []

    def get_key(self, timeout=None):
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key_str):
        self._key_queue.append(key_str)


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


def test_regular_character(handler):
    event = handler.parse_key('a')
    assert event.key_type == KeyType.REGULAR
    assert event.value == 'a'


@pytest.mark.parametrize("raw, expected", [
    ('\x7f', 'backspace'),
    ('\x08', 'backspace'),
    ('\x0d', 'enter'),
    ('\x0a', 'enter'),
    ('\x1b', 'escape'),
])
def test_control_bytes_map_to_special_keys(handler, raw, expected):
    event = handler.parse_key(raw)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == expected


def test_tab_inserts(handler):
    assert handler.parse_key('\t') == KeyEvent(KeyType.REGULAR, '\t', '\t')


def test_ctrl_letter(handler):
    event = handler.parse_key('\x13')
    assert event.key_type == KeyType.CTRL
    assert event.value == 's'
    assert event.is_ctrl


@pytest.mark.parametrize("token, key_type, value", [
    ('<LEFT>', KeyType.SPECIAL, 'left'),
    ('<KEY_RIGHT>', KeyType.SPECIAL, 'right'),
    ('<HOME>', KeyType.SPECIAL, 'home'),
    ('<PAGEUP>', KeyType.SPECIAL, 'page_up'),
    ('<BACKSPACE>', KeyType.SPECIAL, 'backspace'),
    ('<Ctrl-x>', KeyType.CTRL, 'x'),
    ('<Ctrl-j>', KeyType.SPECIAL, 'enter'),
    ('<Esc+f>', KeyType.ALT, 'f'),
    ('<Esc+<>', KeyType.ALT, '<'),
    ('<Esc+LEFT>', KeyType.ALT, 'left'),
    ('<Shift-LEFT>', KeyType.SHIFT_SPECIAL, 'left'),
    ('<KEY_SLEFT>', KeyType.SHIFT_SPECIAL, 'left'),
    ('<KEY_SR>', KeyType.SHIFT_SPECIAL, 'up'),
    ('<Ctrl-HOME>', KeyType.CTRL_SPECIAL, 'home'),
    ('<Ctrl-Shift-END>', KeyType.SHIFT_CTRL_SPECIAL, 'end'),
    ('<Shift-Esc+RIGHT>', KeyType.SHIFT_ALT, 'right'),
])
def test_named_keys(handler, token, key_type, value):
    event = handler.parse_key(token)
    assert event.key_type == key_type
    assert event.value == value


def test_named_space_and_escape(handler):
    assert handler.parse_key('<SPACE>').value == ' '
    assert handler.parse_key('<ESC>').value == 'escape'


def test_unknown_token_never_inserts(handler):
    event = handler.parse_key('<F12>')
    assert event.key_type == KeyType.SPECIAL


def test_get_key_event():
    terminal = MockTerminal()
    handler = KeyboardHandler(terminal)
    assert handler.get_key_event(timeout=0) is None
    terminal.add_key('<UP>')
    event = handler.get_key_event(timeout=0)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'up'
