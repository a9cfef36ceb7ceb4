"""Persistent JSON config helpers.

Stores the syntax style, UI theme, and address-column visibility.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "memviz"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem/serialization errors are ignored so an unwritable config never
    interrupts a viewing session.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError):
        pass


def _load_name(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _save_name(key: str, name: str) -> None:
    stripped = str(name).strip()
    if not stripped:
        return
    config = load_config()
    config[key] = stripped
    save_config(config)


def load_style_name() -> str | None:
    """Load persisted Pygments style name, returning ``None`` when unset/invalid."""
    return _load_name("style")


def save_style_name(style: str) -> None:
    _save_name("style", style)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_name("theme")


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    _save_name("theme", theme_name)


def load_show_addresses() -> bool:
    """Return persisted address-column visibility.

    Only explicit boolean values are accepted; anything else means ``True``.
    """
    value = load_config().get("show_addresses")
    return value if isinstance(value, bool) else True


def save_show_addresses(show_addresses: bool) -> None:
    config = load_config()
    config["show_addresses"] = bool(show_addresses)
    save_config(config)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "load_config",
    "save_config",
    "load_style_name",
    "save_style_name",
    "load_theme_name",
    "save_theme_name",
    "load_show_addresses",
    "save_show_addresses",
]
