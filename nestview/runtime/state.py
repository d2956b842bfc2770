from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..config import Settings
from ..file_tree_model import Node
from ..git_status import GitStatusSnapshot
from ..navigation import NavigationState
from ..ui_theme import UITheme


@dataclass
class BrowserSession:
    root: Node
    nav: NavigationState
    theme: UITheme
    settings: Settings
    status_snapshot: GitStatusSnapshot | None = None
    dirty: bool = True
    last_size: tuple[int, int] = (0, 0)


@dataclass(frozen=True)
class SessionResult:
    """How the session ended; ``selected_path`` is ``None`` on quit."""

    selected_path: Path | None = None
