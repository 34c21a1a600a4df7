"""CLI entry point for the tabvi editor."""

from __future__ import annotations

import argparse
import logging
import sys

from tabvi import __version__
from tabvi.app import run
from tabvi.config import LOG_LEVELS, EditorConfig, load_config
from tabvi.editor import Editor
from tabvi.terminal import ProcessTerminal

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tabvi",
        description="A small modal terminal text editor",
    )
    parser.add_argument("file", nargs="?", help="File to edit (created on first save if missing)")
    parser.add_argument("--tab-width", type=int, help="Columns per tab stop (default: 4)")
    parser.add_argument("--log-file", help="Write debug logs to this file")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Log level (default: warning)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def setup_logging(config: EditorConfig) -> None:
    """Send records to the log file; with none, drop them.

    The terminal is in raw mode while the editor runs, so nothing may be
    logged to stderr.
    """
    if config.log_file:
        # basicConfig does nothing once the root logger has handlers
        handler = logging.FileHandler(config.log_file, encoding="utf-8")
        logging.basicConfig(
            handlers=[handler],
            level=getattr(logging, config.log_level.upper()),
            format=LOG_FORMAT,
        )
    else:
        logging.getLogger("tabvi").addHandler(logging.NullHandler())


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(
            overrides={
                "tab_width": args.tab_width,
                "log_file": args.log_file,
                "log_level": args.log_level,
            }
        )
    except ValueError as e:
        print(f"tabvi: {e}", file=sys.stderr)
        return 2

    try:
        setup_logging(config)
    except OSError as e:
        print(f"tabvi: can't open log file {config.log_file}: {e}", file=sys.stderr)
        return 2

    if args.file:
        try:
            editor = Editor.open(args.file, config.tab_width)
        except (OSError, UnicodeDecodeError) as e:
            print(f"tabvi: can't open {args.file}: {e}", file=sys.stderr)
            return 1
    else:
        editor = Editor(tab_width=config.tab_width)

    try:
        with ProcessTerminal() as terminal:
            run(editor, terminal)
    except Exception as e:
        logger.exception("editor stopped on an unexpected error")
        print(f"tabvi: internal error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
