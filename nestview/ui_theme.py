"""UI theme definitions and selection helpers.

Themes are ANSI SGR palettes for panel borders, the highlighted entry, the
info bar, and the four git status colors.
"""

from __future__ import annotations

from dataclasses import dataclass

from .file_tree_model import FileStatus


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    frame: str
    panel: str
    highlight: str
    info: str
    file_untouched: str
    file_added: str
    file_modified: str
    file_deleted: str

    def status_style(self, status: FileStatus) -> str:
        if status is FileStatus.ADDED:
            return self.file_added
        if status is FileStatus.MODIFIED:
            return self.file_modified
        if status is FileStatus.DELETED:
            return self.file_deleted
        return self.file_untouched


DEFAULT_THEME = UITheme(
    name="default",
    frame="\033[37m",
    panel="\033[37m",
    highlight="\033[35m",
    info="\033[37m",
    file_untouched="\033[37m",
    file_added="\033[32m",
    file_modified="\033[33m",
    file_deleted="\033[31m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    frame="\033[1;38;5;45m",
    panel="\033[38;5;31m",
    highlight="\033[1;38;5;213m",
    info="\033[38;5;153m",
    file_untouched="\033[38;5;252m",
    file_added="\033[38;5;84m",
    file_modified="\033[38;5;215m",
    file_deleted="\033[38;5;203m",
)

PLAIN_THEME = UITheme(
    name="plain",
    frame="",
    panel="",
    highlight="",
    info="",
    file_untouched="",
    file_added="",
    file_modified="",
    file_deleted="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
