"""Tests for the key-to-command mapping."""

import unittest
from unittest.mock import Mock

from wordsmith.buffer import Buffer
from wordsmith.commands import CommandRegistry, InsertTextCommand, MovementCommand
from wordsmith.document import Document, Motion
from wordsmith.keyboard import KeyEvent, KeyType
from wordsmith.position import Cursor, EditorPosition as P, Selection


def key(key_type, value):
    return KeyEvent(key_type=key_type, value=value, raw=value)


class TestCommandRegistry(unittest.TestCase):

    def setUp(self):
        self.registry = CommandRegistry()
        self.editor = Mock()
        self.editor.document = Document(Buffer("Hello world"), clipboard=Mock())
        self.editor.status_message = None
        self.editor.prompt_mode = None
        self.editor.running = True

    def test_arrow_moves_cursor(self):
        self.registry.execute(self.editor, key(KeyType.SPECIAL, 'right'))
        self.assertEqual(self.editor.document.location, Cursor.at(P(0, 1)))

    def test_shift_arrow_selects(self):
        self.registry.execute(self.editor, key(KeyType.SHIFT_SPECIAL, 'right'))
        self.registry.execute(self.editor, key(KeyType.SHIFT_SPECIAL, 'right'))
        self.assertEqual(self.editor.document.location, Selection(P(0, 0), P(0, 2)))

    def test_word_and_file_motions_are_bound(self):
        """Alt and Ctrl keys and the Emacs aliases reach word, line and file motions."""
        bindings = {
            (KeyType.ALT, 'right'): Motion.END_OF_WORD,
            (KeyType.ALT, 'f'): Motion.END_OF_WORD,
            (KeyType.ALT, 'b'): Motion.BEGINNING_OF_WORD,
            (KeyType.CTRL_SPECIAL, 'end'): Motion.END_OF_FILE,
            (KeyType.ALT, '<'): Motion.BEGINNING_OF_FILE,
            (KeyType.CTRL, 'e'): Motion.END_OF_LINE,
        }
        for (key_type, value), motion in bindings.items():
            with self.subTest(key=(key_type, value)):
                command = self.registry.get_command(key_type, value)
                self.assertIsInstance(command, MovementCommand)
                self.assertEqual(command.motion, motion)

    def test_typing_inserts_text(self):
        modified = self.registry.execute(self.editor, key(KeyType.REGULAR, 'X'))
        self.assertTrue(modified)
        self.assertEqual(self.editor.document.text(), "XHello world")

    def test_control_characters_are_not_inserted(self):
        """Stray control characters never end up in the text."""
        self.assertFalse(InsertTextCommand().execute(self.editor, key(KeyType.REGULAR, '\x01')))
        self.assertEqual(self.editor.document.text(), "Hello world")

    def test_unbound_special_key_is_ignored(self):
        """Named keys with no binding do nothing."""
        self.assertFalse(self.registry.execute(self.editor, key(KeyType.SPECIAL, 'f1')))
        self.assertEqual(self.editor.document.text(), "Hello world")

    def test_backspace_and_enter(self):
        self.editor.document.set_cursor(P(0, 5))
        self.registry.execute(self.editor, key(KeyType.SPECIAL, 'backspace'))
        self.registry.execute(self.editor, key(KeyType.SPECIAL, 'enter'))
        self.assertEqual(self.editor.document.text(), "Hell\n world")

    def test_select_all_and_escape(self):
        self.registry.execute(self.editor, key(KeyType.ALT, 'a'))
        self.assertTrue(self.editor.document.has_selection())
        self.registry.execute(self.editor, key(KeyType.SPECIAL, 'escape'))
        self.assertEqual(self.editor.document.location, Cursor.at(P(0, 11)))

    def test_copy_without_selection_reports(self):
        self.registry.execute(self.editor, key(KeyType.CTRL, 'c'))
        self.assertEqual(self.editor.status_message, "No selection")

    def test_cut_and_paste(self):
        clipboard = self.editor.document.clipboard
        self.editor.document.location = Selection(P(0, 0), P(0, 6))
        self.registry.execute(self.editor, key(KeyType.CTRL, 'x'))
        clipboard.copy_text.assert_called_once_with("Hello ")
        self.assertEqual(self.editor.document.text(), "world")
        self.assertEqual(self.editor.status_message, "Selection cut")

        clipboard.paste_text.return_value = "Hi "
        self.registry.execute(self.editor, key(KeyType.CTRL, 'v'))
        self.assertEqual(self.editor.document.text(), "Hi world")

    def test_quit_unmodified_stops(self):
        self.registry.execute(self.editor, key(KeyType.CTRL, 'q'))
        self.assertFalse(self.editor.running)

    def test_quit_modified_asks(self):
        """Quitting with unsaved changes opens the save-before-quit prompt."""
        self.editor.document.insert("x")
        self.registry.execute(self.editor, key(KeyType.CTRL, 'q'))
        self.assertEqual(self.editor.prompt_mode, 'quit_confirm')
        self.assertTrue(self.editor.running)

    def test_save_delegates_to_editor(self):
        self.registry.execute(self.editor, key(KeyType.CTRL, 's'))
        self.editor.handle_save.assert_called_once_with()


if __name__ == '__main__':
    unittest.main()
