"""Theme preferences stored in local slots."""

from __future__ import annotations

from typing import Any, Dict

from moodmemories.core.storage import COLOR_THEME_SLOT, THEME_SLOT, read_slot, write_slot
from moodmemories.core.text_service import resolve_api_key

THEMES = ("light", "dark")
COLOR_THEMES = ("default", "neon", "sunset")

DEFAULT_PREFS: Dict[str, Any] = {
    "theme": "light",
    "color_theme": "default",
}


def get_theme() -> str:
    saved = read_slot(THEME_SLOT)
    return saved if saved in THEMES else DEFAULT_PREFS["theme"]


def toggle_theme() -> str:
    theme = "light" if get_theme() == "dark" else "dark"
    write_slot(THEME_SLOT, theme)
    return theme


def get_color_theme() -> str:
    saved = read_slot(COLOR_THEME_SLOT)
    return saved if saved in COLOR_THEMES else DEFAULT_PREFS["color_theme"]


def set_color_theme(color_theme: str) -> str:
    if color_theme not in COLOR_THEMES:
        raise ValueError("validation_error")
    write_slot(COLOR_THEME_SLOT, color_theme)
    return color_theme


def get_preferences() -> Dict[str, Any]:
    """Merge stored preferences with defaults."""
    return {
        "theme": get_theme(),
        "color_theme": get_color_theme(),
        "has_api_key": resolve_api_key() is not None,
    }
