"""Constants and configuration for the wordsmith editor."""


class EditorConstants:
    """Central configuration constants for the editor."""

    # Document layout
    WRAP_WIDTH = 65  # Column width used for soft wrapping
    MAX_HEADLINE_LEVEL = 6  # Deepest ATX heading level (######)

    # Terminal requirements
    MIN_TERMINAL_WIDTH = 65  # Minimum terminal width required for display
    CONTEXT_ROWS = 2  # Rows kept visible above/below the cursor when scrolling

    # File operations
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Status messages
    TERMINAL_TOO_NARROW_MESSAGE = "Terminal too narrow! Need at least {} columns."
    CURRENT_WIDTH_MESSAGE = "Current width: {} columns."
    SAVED_MESSAGE = "Saved to {}"
    SAVE_PROMPT = " File to save in: {}"
    QUIT_PROMPT = " Save file? (y, n) "
