"""The control loop: draw a frame, read one key, apply it, repeat."""

from __future__ import annotations

import logging
from collections import deque

from tabvi.editor import Editor
from tabvi.keys import parse_key
from tabvi.screen import render_frame
from tabvi.terminal import Terminal

logger = logging.getLogger(__name__)


def run(editor: Editor, terminal: Terminal) -> None:
    """Drive *editor* from *terminal* until it quits or input ends.

    Every key is applied completely, and a fresh frame drawn, before the
    next key is looked at.
    """
    pending: deque[str] = deque()
    while not editor.quit_requested:
        terminal.write(render_frame(editor, terminal.size))

        if not pending:
            pending.extend(terminal.read_sequences())
            if not pending:
                logger.info("input closed, leaving the editor")
                return

        data = pending.popleft()
        key = parse_key(data)
        if key is None:
            logger.debug("ignoring unrecognised input %r", data)
            continue
        editor.handle_key(key)

    logger.info("quit requested")
