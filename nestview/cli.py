"""Command-line front door for nestview.

Parses CLI options, resolves the root path and settings, then either renders
one frame to stdout or runs the interactive browser and prints the selected
path.
"""

from __future__ import annotations

import argparse
import logging
import os
import shutil
import sys
from pathlib import Path

from .config import load_settings
from .navigation import NavigationState
from .render import render_frame
from .runtime import create_session, run_browser
from .terminal import TerminalError
from .ui_theme import available_theme_names

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _non_negative_int(value: str) -> int:
    """argparse type for integer values >= 0."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    parsed = _non_negative_int(value)
    if parsed == 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _stdin_is_tty() -> bool:
    try:
        return os.isatty(sys.stdin.fileno())
    except (OSError, ValueError):
        return False


def _screen_fd() -> int:
    """Descriptor for drawing; stdout stays clean for the selected path when piped."""
    try:
        if os.isatty(sys.stdout.fileno()):
            return sys.stdout.fileno()
    except (OSError, ValueError):
        pass
    return sys.stderr.fileno()


def _configure_logging(log_file: str | None) -> None:
    if log_file is None:
        return
    logging.basicConfig(filename=log_file, level=logging.DEBUG, format=LOG_FORMAT)


def render_once(path: Path, width: int, height: int, theme: str | None, no_color: bool, preload_depth: int | None) -> str:
    """Render the root view of ``path`` as text rows, without git status."""
    settings = load_settings(theme=theme, no_color=no_color, preload_depth=preload_depth, git_status=False)
    session = create_session(path, settings)
    screen = render_frame(session.root, NavigationState(), width, height, session.theme)
    if no_color:
        return "\n".join(line.rstrip() for line in screen.to_lines()) + "\n"
    return screen.to_ansi().replace("\r\n", "\n") + "\n"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nestview",
        description="Browse a directory as nested panels colored by git status.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to browse. Defaults to current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--preload-depth",
        type=_non_negative_int,
        default=None,
        help="Directory levels to load ahead of navigation (default: 3).",
    )
    parser.add_argument("--no-git", action="store_true", help="Skip the git status overlay.")
    parser.add_argument("--log-file", metavar="FILE", default=None, help="Write debug logs to FILE.")
    parser.add_argument("--render", action="store_true", help="Print one frame of the root view and exit.")
    parser.add_argument("--width", type=_positive_int, default=None, help="Frame width for --render.")
    parser.add_argument("--height", type=_positive_int, default=None, help="Frame height for --render.")
    return parser


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch nestview.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. On selection the chosen path is printed to stdout.
    """
    args = build_parser().parse_args()
    _configure_logging(args.log_file)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path) if args.path is not None else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")

    if args.render:
        term = shutil.get_terminal_size((80, 24))
        width = args.width if args.width is not None else max(1, term.columns)
        height = args.height if args.height is not None else max(1, term.lines)
        sys.stdout.write(render_once(path, width, height, args.theme, args.no_color, args.preload_depth))
        return

    if not _stdin_is_tty():
        raise SystemExit("nestview needs an interactive terminal (use --render for plain output).")

    settings = load_settings(
        theme=args.theme,
        no_color=args.no_color,
        preload_depth=args.preload_depth,
        git_status=not args.no_git,
    )
    screen_fd = _screen_fd()
    try:
        selected = run_browser(path, settings, stdout_fd=screen_fd)
    except TerminalError as exc:
        raise SystemExit(f"nestview: {exc}") from exc

    if selected is not None:
        sys.stdout.write(f"{selected}\n")
        sys.stdout.flush()


if __name__ == "__main__":
    main()
