"""Public runtime orchestration entry points.

This package groups the interactive browser bootstrap (`run_browser`) and
the session/command helpers used by tests and composition code.
"""

from __future__ import annotations

from .loop import IDLE_POLL_MS, create_session, handle_command, poll_status_overlay, run_browser
from .state import BrowserSession, SessionResult

__all__ = [
    "IDLE_POLL_MS",
    "BrowserSession",
    "SessionResult",
    "create_session",
    "handle_command",
    "poll_status_overlay",
    "run_browser",
]
