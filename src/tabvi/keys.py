"""Decoding raw terminal input into key identifiers.

A key identifier is a short string: a printable character as typed
(``"a"``, ``"A"``, ``"ñ"``), a named key (``"enter"``, ``"escape"``,
``"left"``), or a modified key (``"ctrl+c"``, ``"alt+x"``, ``"ctrl+left"``).
Only the legacy xterm/VT sequences are understood; the editor never turns
on an extended keyboard protocol.
"""

from __future__ import annotations

KeyId = str


class Key:
    """Named key constants."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    home = "home"
    end = "end"
    up = "up"
    down = "down"
    left = "left"
    right = "right"


# ---------------------------------------------------------------------------
# Escape sequence tables
# ---------------------------------------------------------------------------

LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
    "\x1bOP": "f1",
    "\x1bOQ": "f2",
    "\x1bOR": "f3",
    "\x1bOS": "f4",
    "\x1b[15~": "f5",
    "\x1b[17~": "f6",
    "\x1b[18~": "f7",
    "\x1b[19~": "f8",
    "\x1b[20~": "f9",
    "\x1b[21~": "f10",
    "\x1b[23~": "f11",
    "\x1b[24~": "f12",
}

# xterm encodes modifiers as a parameter: CSI 1;<mod> <final> or CSI <n>;<mod> ~
_MODIFIER_PREFIXES: dict[int, str] = {
    2: "shift+",
    3: "alt+",
    4: "shift+alt+",
    5: "ctrl+",
    6: "ctrl+shift+",
    7: "ctrl+alt+",
    8: "ctrl+shift+alt+",
}


def _parse_modified_sequence(data: str) -> str | None:
    """Parse ``ESC[1;5D``-style sequences carrying a modifier parameter."""
    if not data.startswith("\x1b[") or ";" not in data:
        return None
    params, final = data[2:-1], data[-1]
    first, _, mod = params.partition(";")
    if not mod.isdigit():
        return None
    prefix = _MODIFIER_PREFIXES.get(int(mod))
    if prefix is None:
        return None
    base = LEGACY_KEY_SEQUENCES.get(f"\x1b[{first}~" if final == "~" else f"\x1b[{final}")
    if base is None:
        return None
    return prefix + base


# ---------------------------------------------------------------------------
# parse_key
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyId | None:
    """Parse one complete input sequence and return its key identifier.

    Returns ``None`` for empty input and sequences that aren't recognised.
    """
    if not data:
        return None

    if data in LEGACY_KEY_SEQUENCES:
        return LEGACY_KEY_SEQUENCES[data]

    modified = _parse_modified_sequence(data)
    if modified is not None:
        return modified

    # --- Simple single-byte keys ---
    if data == "\x1b":
        return "escape"
    if data == "\r" or data == "\n":
        return "enter"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data == "\x7f" or data == "\x08":
        return "backspace"
    if data == "\x00":
        return "ctrl+space"
    if data == "\x1b[Z":
        return "shift+tab"

    # --- Ctrl + letter (0x01 - 0x1a) ---
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # --- Alt + key (ESC prefix) ---
    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        if ch == "\x1b":
            return "alt+escape"
        if ch == "\r" or ch == "\n":
            return "alt+enter"
        if ch == "\x7f" or ch == "\x08":
            return "alt+backspace"
        if ch.isprintable():
            return "alt+" + ch

    # --- Plain printable character ---
    if len(data) == 1 and data.isprintable():
        return data

    return None


def key_text(key: KeyId) -> str | None:
    """Return the text a key types, or ``None`` for non-printing keys."""
    if key == Key.space:
        return " "
    if key == Key.tab:
        return "\t"
    if len(key) == 1 and key.isprintable():
        return key
    return None
