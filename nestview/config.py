"""Persistent JSON config helpers.

Stores the UI theme name and the directory preload depth.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .file_tree_model import DEFAULT_PRELOAD_DEPTH
from .ui_theme import DEFAULT_THEME, normalize_theme_name

logger = logging.getLogger(__name__)

APP_NAME = "nestview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class Settings:
    """Effective runtime settings after config and CLI overrides."""

    theme: str = DEFAULT_THEME.name
    no_color: bool = False
    preload_depth: int = DEFAULT_PRELOAD_DEPTH
    git_status: bool = True


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON; write errors are ignored."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.debug("cannot write config %s: %s", CONFIG_PATH, exc)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def load_preload_depth() -> int:
    """Return persisted preload depth; booleans and negatives fall back."""
    value = load_config().get("preload_depth")
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return DEFAULT_PRELOAD_DEPTH
    return value


def load_settings(
    *,
    theme: str | None = None,
    no_color: bool = False,
    preload_depth: int | None = None,
    git_status: bool = True,
) -> Settings:
    """Merge persisted config with explicit overrides."""
    theme_name = normalize_theme_name(theme if theme is not None else load_theme_name())
    depth = preload_depth if preload_depth is not None else load_preload_depth()
    return Settings(
        theme=theme_name,
        no_color=no_color,
        preload_depth=max(0, depth),
        git_status=git_status,
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "Settings",
    "load_config",
    "save_config",
    "load_theme_name",
    "save_theme_name",
    "load_preload_depth",
    "load_settings",
]
