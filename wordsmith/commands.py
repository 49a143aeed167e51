"""Key bindings: each key maps onto one named document or editor command."""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Tuple, TYPE_CHECKING

from .document import Document, Motion
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent

KeyBinding = Tuple[KeyType, str]


class EditorCommand(ABC):
    """Something a key can trigger."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Run against ``editor``.

        Returns:
            True if the document text changed
        """


class MovementCommand(EditorCommand):
    """Move the cursor by ``motion``; with ``extend`` grow the selection instead."""

    def __init__(self, motion: Motion, extend: bool = False):
        self.motion = motion
        self.extend = extend

    def execute(self, editor, key_event):
        if self.extend:
            editor.document.select(self.motion)
        else:
            editor.document.move(self.motion)
        return False


class DocumentCommand(EditorCommand):
    """Call one Document method that takes no arguments."""

    def __init__(self, action: Callable[[Document], Optional[bool]]):
        self.action = action

    def execute(self, editor, key_event):
        return bool(self.action(editor.document))


class InsertTextCommand(EditorCommand):
    """Insert the typed (or pasted-as-keys) text at the edit location."""

    def execute(self, editor, key_event):
        text = key_event.value
        if not text or (ord(text[0]) < 32 and text != '\t'):
            return False
        return editor.document.insert(text)


class CutCommand(EditorCommand):
    def execute(self, editor, key_event):
        changed = editor.document.cut()
        editor.status_message = "Selection cut" if changed else "No selection"
        return changed


class CopyCommand(EditorCommand):
    def execute(self, editor, key_event):
        copied = editor.document.copy()
        editor.status_message = "Selection copied" if copied else "No selection"
        return False


class QuitCommand(EditorCommand):
    """Stop the editor, first asking whether to save unsaved changes."""

    def execute(self, editor, key_event):
        if editor.document.is_modified():
            editor.prompt_mode = 'quit_confirm'
        else:
            editor.running = False
        return False


class SaveCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.handle_save()
        return False


MOTION_KEYS: Dict[KeyBinding, Motion] = {
    (KeyType.SPECIAL, 'left'): Motion.LEFT,
    (KeyType.SPECIAL, 'right'): Motion.RIGHT,
    (KeyType.SPECIAL, 'up'): Motion.UP,
    (KeyType.SPECIAL, 'down'): Motion.DOWN,
    (KeyType.SPECIAL, 'home'): Motion.BEGINNING_OF_LINE,
    (KeyType.SPECIAL, 'end'): Motion.END_OF_LINE,
    (KeyType.ALT, 'left'): Motion.BEGINNING_OF_WORD,
    (KeyType.ALT, 'right'): Motion.END_OF_WORD,
    (KeyType.CTRL_SPECIAL, 'home'): Motion.BEGINNING_OF_FILE,
    (KeyType.CTRL_SPECIAL, 'end'): Motion.END_OF_FILE,
}

# Shift-modified variant of each motion key type
EXTENDING_KEY_TYPES = {
    KeyType.SPECIAL: KeyType.SHIFT_SPECIAL,
    KeyType.ALT: KeyType.SHIFT_ALT,
    KeyType.CTRL_SPECIAL: KeyType.SHIFT_CTRL_SPECIAL,
}

# Emacs-style aliases
ALIAS_KEYS: Dict[KeyBinding, Motion] = {
    (KeyType.CTRL, 'a'): Motion.BEGINNING_OF_LINE,
    (KeyType.CTRL, 'e'): Motion.END_OF_LINE,
    (KeyType.ALT, 'b'): Motion.BEGINNING_OF_WORD,
    (KeyType.ALT, 'f'): Motion.END_OF_WORD,
    (KeyType.ALT, '<'): Motion.BEGINNING_OF_FILE,
    (KeyType.ALT, '>'): Motion.END_OF_FILE,
}


class CommandRegistry:
    """Maps (key type, key value) pairs to commands."""

    def __init__(self):
        self._commands: Dict[KeyBinding, EditorCommand] = {}
        self._register_defaults()

    def _register_defaults(self):
        for (key_type, value), motion in MOTION_KEYS.items():
            self.register((key_type, value), MovementCommand(motion))
            self.register((EXTENDING_KEY_TYPES[key_type], value), MovementCommand(motion, extend=True))
        for binding, motion in ALIAS_KEYS.items():
            self.register(binding, MovementCommand(motion))

        self.register((KeyType.ALT, 'a'), DocumentCommand(Document.select_all))
        self.register((KeyType.SPECIAL, 'escape'), DocumentCommand(Document.collapse_selection))
        self.register((KeyType.SPECIAL, 'backspace'), DocumentCommand(Document.backspace))
        self.register((KeyType.SPECIAL, 'enter'), DocumentCommand(Document.enter))
        self.register((KeyType.CTRL, 'x'), CutCommand())
        self.register((KeyType.CTRL, 'c'), CopyCommand())
        self.register((KeyType.CTRL, 'v'), DocumentCommand(Document.paste))
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())

    def register(self, key: KeyBinding, command: EditorCommand):
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Run the command bound to ``key_event``; unbound regular keys insert text.

        Returns:
            True if the document text changed
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command is not None:
            return command.execute(editor, key_event)
        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(editor, key_event)
        return False
