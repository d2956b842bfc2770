"""Main interactive event loop for the panel browser.

Each iteration merges a newly arrived git snapshot, redraws when something
changed, then waits briefly for one key and dispatches it.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Protocol

from ..config import Settings, save_theme_name
from ..file_tree_model import build_root, preload
from ..git_status import GitStatusSnapshot, StatusOverlayJob, apply_status_overlay
from ..input import Command, command_for_key, read_key
from ..navigation import NavigationState
from ..render import render_frame, write_frame
from ..terminal import TerminalController
from ..ui_theme import available_theme_names, resolve_theme
from .state import BrowserSession, SessionResult

logger = logging.getLogger(__name__)

IDLE_POLL_MS = 100


class OverlayJob(Protocol):
    @property
    def finished(self) -> bool: ...

    def start(self) -> None: ...

    def poll(self) -> GitStatusSnapshot | None: ...


def create_session(root_path: Path, settings: Settings) -> BrowserSession:
    """Build and preload the tree rooted at ``root_path``."""
    root = build_root(root_path)
    preload(root, settings.preload_depth)
    return BrowserSession(
        root=root,
        nav=NavigationState(),
        theme=resolve_theme(settings.theme, no_color=settings.no_color),
        settings=settings,
    )


def poll_status_overlay(session: BrowserSession, job: OverlayJob) -> bool:
    """Merge the overlay snapshot if it arrived since the last poll."""
    snapshot = job.poll()
    if snapshot is None:
        return False
    session.status_snapshot = snapshot
    updated = apply_status_overlay(session.root, snapshot)
    logger.debug("git status applied to %d nodes", updated)
    session.dirty = True
    return True


def _cycle_theme(session: BrowserSession) -> bool:
    if session.settings.no_color:
        return False
    names = available_theme_names()
    current = session.theme.name
    next_name = names[(names.index(current) + 1) % len(names)] if current in names else names[0]
    session.theme = resolve_theme(next_name)
    save_theme_name(next_name)
    return True


def handle_command(session: BrowserSession, command: Command) -> SessionResult | None:
    """Apply one command; returns a result when the session should end."""
    nav = session.nav
    root = session.root
    if command is Command.QUIT:
        return SessionResult(selected_path=None)
    if command is Command.SELECT:
        return SessionResult(selected_path=nav.confirm_path(root))

    changed = False
    if command is Command.UP:
        changed = nav.move_up(root)
    elif command is Command.DOWN:
        changed = nav.move_down(root)
    elif command is Command.INTO:
        entered = nav.move_into(root, session.settings.preload_depth)
        if entered is not None and session.status_snapshot is not None:
            # Nodes materialized after the merge get the same snapshot.
            apply_status_overlay(entered, session.status_snapshot)
        changed = entered is not None
    elif command is Command.OUT:
        changed = nav.move_out()
    elif command is Command.CYCLE_THEME:
        changed = _cycle_theme(session)

    if changed:
        session.dirty = True
    return None


def run_browser(
    root_path: Path,
    settings: Settings,
    *,
    terminal: TerminalController | None = None,
    job: OverlayJob | None = None,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> Path | None:
    """Run the interactive browser; returns the selected path or ``None``."""
    if stdin_fd is None:
        stdin_fd = sys.stdin.fileno()
    if stdout_fd is None:
        stdout_fd = sys.stdout.fileno()

    # The scan runs while the tree is preloaded.
    if job is None and settings.git_status:
        job = StatusOverlayJob(root_path.resolve())
    if job is not None:
        job.start()
    session = create_session(root_path, settings)
    if terminal is None:
        terminal = TerminalController(stdin_fd, stdout_fd)

    with terminal.raw_mode():
        while True:
            if job is not None:
                poll_status_overlay(session, job)
                if job.finished:
                    job = None

            size = terminal.size()
            if size != session.last_size:
                session.last_size = size
                session.dirty = True
            if session.dirty:
                columns, lines = size
                write_frame(render_frame(session.root, session.nav, columns, lines, session.theme), stdout_fd)
                session.dirty = False

            key = read_key(stdin_fd, timeout_ms=IDLE_POLL_MS)
            if not key:
                continue
            command = command_for_key(key)
            if command is None:
                continue
            result = handle_command(session, command)
            if result is not None:
                return result.selected_path
