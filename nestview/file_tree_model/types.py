"""Domain datatypes for the lazily loaded filesystem tree."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Rect:
    """Cell-based rectangle on the terminal grid."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height


class FileStatus(enum.Enum):
    """Reduced version-control state used for coloring."""

    UNTOUCHED = "untouched"
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(eq=False)
class Node:
    """One filesystem entry; directories own their children exclusively.

    ``children`` stays empty until ``loaded`` is set. ``rect`` is only
    meaningful for nodes laid out during the current frame.
    """

    name: str
    path: Path
    is_directory: bool
    loaded: bool = False
    children: list["Node"] = field(default_factory=list)
    rect: Rect = field(default_factory=Rect)
    status: FileStatus = FileStatus.UNTOUCHED


__all__ = [
    "Rect",
    "FileStatus",
    "Node",
]
