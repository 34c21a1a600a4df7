"""tabvi: a small modal terminal text editor.

The core is a grapheme-aware line model with tab stops, a cursor that only
rests on renderable columns, a wrapping viewport and a Normal/Insert/Command
mode state machine.
"""

__version__ = "0.1.0"

# Text model
from tabvi.buffer import Buffer
from tabvi.line import TAB_WIDTH, Line, LineIndexError

# Cursor navigation
from tabvi.cursor import Cursor, move_down, move_left, move_right, move_up, pos

# Screen mapping
from tabvi.viewport import TermSize, Viewport, line_rows

# Modes and editing
from tabvi.editor import Editor
from tabvi.modes import Mode

# Files
from tabvi.files import load_buffer, save_buffer

# Configuration
from tabvi.config import EditorConfig, load_config

# Input decoding
from tabvi.keys import Key, KeyId, key_text, parse_key
from tabvi.stdin_buffer import StdinBuffer

# Terminal
from tabvi.terminal import ProcessTerminal, Terminal

__all__ = [
    "__version__",
    # Text model
    "Buffer",
    "Line",
    "LineIndexError",
    "TAB_WIDTH",
    # Cursor navigation
    "Cursor",
    "move_down",
    "move_left",
    "move_right",
    "move_up",
    "pos",
    # Screen mapping
    "TermSize",
    "Viewport",
    "line_rows",
    # Modes and editing
    "Editor",
    "Mode",
    # Files
    "load_buffer",
    "save_buffer",
    # Configuration
    "EditorConfig",
    "load_config",
    # Input decoding
    "Key",
    "KeyId",
    "key_text",
    "parse_key",
    "StdinBuffer",
    # Terminal
    "ProcessTerminal",
    "Terminal",
]
