"""Metadata shown in the info bar for the highlighted entry."""

from __future__ import annotations

import logging
import stat
from dataclasses import dataclass
from pathlib import Path

from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

from .file_tree_model import FileStatus

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class EntryInfo:
    name: str
    kind: str
    permissions: str
    size: int | None = None
    language: str | None = None


def detect_language(path: Path) -> str | None:
    """Pygments language name guessed from the file name, if any."""
    try:
        return get_lexer_for_filename(path.name).name
    except ClassNotFound:
        return None


def _relative_name(path: Path, root: Path) -> str:
    try:
        relative = path.relative_to(root)
    except ValueError:
        return str(path)
    return str(relative) if relative.parts else str(path)


def describe_entry(path: Path, root: Path) -> EntryInfo:
    """Stat ``path`` for the info bar; failures become ``Unknown`` fields."""
    name = _relative_name(path, root)
    try:
        st = path.stat()
    except OSError as exc:
        logger.debug("cannot stat %s: %s", path, exc)
        return EntryInfo(name=name, kind=UNKNOWN, permissions=UNKNOWN)

    is_directory = stat.S_ISDIR(st.st_mode)
    # Any write bit counts, regardless of the current user.
    writable = bool(st.st_mode & 0o222)
    return EntryInfo(
        name=name,
        kind="Directory" if is_directory else "File",
        permissions="Writable" if writable else "Read-only",
        size=None if is_directory else int(st.st_size),
        language=None if is_directory else detect_language(path),
    )


def format_entry_info(info: EntryInfo, status: FileStatus | None = None) -> str:
    """One-line info bar text."""
    kind = info.kind if info.language is None else f"{info.kind} ({info.language})"
    text = f"Name: {info.name} | Type: {kind} | Permissions: {info.permissions}"
    if info.size is not None:
        text += f" {info.size} bytes"
    if status is not None and status is not FileStatus.UNTOUCHED:
        text += f" | Git: {status.label}"
    return text


__all__ = [
    "UNKNOWN",
    "EntryInfo",
    "describe_entry",
    "detect_language",
    "format_entry_info",
]
