"""Git status overlay for tree coloring.

Collects raw porcelain flags once in a background thread and hands the
finished snapshot to the interactive loop through a single-slot queue.
The loop merges it into the tree as a reduced ``FileStatus`` per node.
"""

from __future__ import annotations

import enum
import logging
import subprocess
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from queue import Empty, Full, Queue

from .file_tree_model import FileStatus, Node, iter_nodes

logger = logging.getLogger(__name__)

GIT_STATUS_TIMEOUT_SECONDS = 30.0


class RawStatus(enum.IntFlag):
    """Per-path git flags, split by index and working tree."""

    CURRENT = 0
    INDEX_NEW = enum.auto()
    INDEX_MODIFIED = enum.auto()
    INDEX_DELETED = enum.auto()
    INDEX_RENAMED = enum.auto()
    INDEX_TYPECHANGE = enum.auto()
    WT_NEW = enum.auto()
    WT_MODIFIED = enum.auto()
    WT_DELETED = enum.auto()
    WT_TYPECHANGE = enum.auto()
    WT_RENAMED = enum.auto()
    CONFLICTED = enum.auto()
    IGNORED = enum.auto()


_INDEX_CODES = {
    "A": RawStatus.INDEX_NEW,
    "M": RawStatus.INDEX_MODIFIED,
    "D": RawStatus.INDEX_DELETED,
    "R": RawStatus.INDEX_RENAMED,
    "C": RawStatus.INDEX_NEW,
    "T": RawStatus.INDEX_TYPECHANGE,
}
_WORKTREE_CODES = {
    "M": RawStatus.WT_MODIFIED,
    "D": RawStatus.WT_DELETED,
    "R": RawStatus.WT_RENAMED,
    "T": RawStatus.WT_TYPECHANGE,
}
# Unmerged XY pairs from git-status(1).
_CONFLICT_CODES = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}


@dataclass(frozen=True)
class GitStatusSnapshot:
    """Raw flags keyed by POSIX path relative to ``repo_root``."""

    repo_root: Path
    entries: dict[str, RawStatus]


def _run_git(cwd: Path, args: list[str], timeout_seconds: float) -> subprocess.CompletedProcess[str] | None:
    try:
        return subprocess.run(
            ["git", "-C", str(cwd), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("git %s failed: %s", " ".join(args), exc)
        return None


def discover_repo_root(path: Path, timeout_seconds: float = GIT_STATUS_TIMEOUT_SECONDS) -> Path | None:
    """Return the work tree containing ``path``, or ``None`` outside git."""
    cwd = path if path.is_dir() else path.parent
    proc = _run_git(cwd, ["rev-parse", "--show-toplevel"], timeout_seconds)
    if proc is None or proc.returncode != 0:
        return None
    top = proc.stdout.strip()
    if not top:
        return None
    return Path(top).resolve()


def _flags_for_code(code: str) -> RawStatus:
    if code == "??":
        return RawStatus.WT_NEW
    if code == "!!":
        return RawStatus.IGNORED
    if code in _CONFLICT_CODES:
        return RawStatus.CONFLICTED
    flags = RawStatus.CURRENT
    flags |= _INDEX_CODES.get(code[0], RawStatus.CURRENT)
    flags |= _WORKTREE_CODES.get(code[1], RawStatus.CURRENT)
    return flags


def parse_porcelain_status(output: str) -> dict[str, RawStatus]:
    """Parse ``git status --porcelain=v1 -z`` output into raw flags."""
    entries: dict[str, RawStatus] = {}
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if len(token) < 4 or token[2] != " ":
            continue

        code = token[:2]
        rel_path = token[3:].rstrip("/")
        if rel_path:
            entries[rel_path] = entries.get(rel_path, RawStatus.CURRENT) | _flags_for_code(code)

        # Rename/copy records carry the source path as an extra token.
        if "R" in code or "C" in code:
            index += 1
    return entries


def collect_git_status(root: Path, timeout_seconds: float = GIT_STATUS_TIMEOUT_SECONDS) -> GitStatusSnapshot | None:
    """Scan the repository enclosing ``root``.

    Returns ``None`` when there is no repository or git cannot report status.
    """
    repo_root = discover_repo_root(root, timeout_seconds)
    if repo_root is None:
        logger.debug("no git repository encloses %s", root)
        return None

    proc = _run_git(
        repo_root,
        ["status", "--porcelain=v1", "-z", "--untracked-files=normal"],
        timeout_seconds,
    )
    if proc is None or proc.returncode != 0:
        logger.debug("git status failed in %s", repo_root)
        return None
    return GitStatusSnapshot(repo_root=repo_root, entries=parse_porcelain_status(proc.stdout))


def classify_status(flags: RawStatus) -> FileStatus:
    """Reduce raw flags to one display state, new beating modified beating deleted."""
    if flags & (RawStatus.INDEX_NEW | RawStatus.WT_NEW):
        return FileStatus.ADDED
    if flags & (RawStatus.INDEX_MODIFIED | RawStatus.WT_MODIFIED):
        return FileStatus.MODIFIED
    if flags & (RawStatus.INDEX_DELETED | RawStatus.WT_DELETED):
        return FileStatus.DELETED
    return FileStatus.UNTOUCHED


def apply_status_overlay(node: Node, snapshot: GitStatusSnapshot) -> int:
    """Set ``status`` on every materialized node listed in ``snapshot``.

    Returns the number of nodes updated; unlisted nodes are left alone.
    """
    updated = 0
    for current in iter_nodes(node):
        try:
            rel_path = current.path.relative_to(snapshot.repo_root).as_posix()
        except ValueError:
            continue
        flags = snapshot.entries.get(rel_path)
        if flags is None:
            continue
        current.status = classify_status(flags)
        updated += 1
    return updated


StatusProvider = Callable[[Path], GitStatusSnapshot | None]


class StatusOverlayJob:
    """One-shot background status scan with a non-blocking result handoff."""

    def __init__(self, root: Path, provider: StatusProvider = collect_git_status) -> None:
        self._root = root
        self._provider = provider
        self._results: Queue[GitStatusSnapshot] = Queue(maxsize=1)
        self._thread: threading.Thread | None = None
        self._delivered = False

    def _worker(self) -> None:
        try:
            snapshot = self._provider(self._root)
        except Exception:
            logger.exception("status scan failed for %s", self._root)
            return
        if snapshot is None:
            return
        try:
            self._results.put_nowait(snapshot)
        except Full:
            logger.debug("status snapshot already queued")

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._worker,
            name="nestview-git-status",
            daemon=True,
        )
        self._thread.start()

    @property
    def finished(self) -> bool:
        """Whether the worker has exited (or nothing more will arrive)."""
        if self._delivered:
            return True
        return self._thread is not None and not self._thread.is_alive() and self._results.empty()

    def poll(self) -> GitStatusSnapshot | None:
        """Return the snapshot the first time it is available, else ``None``."""
        if self._delivered:
            return None
        try:
            snapshot = self._results.get_nowait()
        except Empty:
            return None
        self._delivered = True
        return snapshot


__all__ = [
    "GIT_STATUS_TIMEOUT_SECONDS",
    "RawStatus",
    "GitStatusSnapshot",
    "StatusProvider",
    "StatusOverlayJob",
    "apply_status_overlay",
    "classify_status",
    "collect_git_status",
    "discover_repo_root",
    "parse_porcelain_status",
]
