"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (columns, markers, chrome). Syntax
highlighting style for source code remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    file_header_badge: str
    file_header_path: str
    line_number: str
    function_line: str
    unavailable: str
    checkpoint_hit: str
    checkpoint_miss: str
    checkpoint_title: str
    address: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    file_header_badge="\033[30;42m",
    file_header_path="\033[1;3m",
    line_number="\033[3;48;5;238m",
    function_line="\033[3;38;5;250m",
    unavailable="\033[3;38;5;245m",
    checkpoint_hit="\033[1;38;5;42m",
    checkpoint_miss="\033[2;38;5;240m",
    checkpoint_title="\033[1;38;5;81m",
    address="\033[38;5;109m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    file_header_badge="\033[30;46m",
    file_header_path="\033[1;38;5;45m",
    line_number="\033[3;38;5;153;48;5;24m",
    function_line="\033[3;38;5;110m",
    unavailable="\033[3;38;5;73m",
    checkpoint_hit="\033[1;38;5;45m",
    checkpoint_miss="\033[2;38;5;24m",
    checkpoint_title="\033[1;38;5;39m",
    address="\033[38;5;117m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="",
    reset="",
    file_header_badge="",
    file_header_path="",
    line_number="",
    function_line="",
    unavailable="",
    checkpoint_hit="",
    checkpoint_miss="",
    checkpoint_title="",
    address="",
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
