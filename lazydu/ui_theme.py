"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the listing, chrome bars, and popups.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    header: str
    path_line: str
    footer: str
    row: str
    row_cursor: str
    row_selected: str
    row_selected_cursor: str
    row_error: str
    row_error_cursor: str
    row_warning: str
    row_warning_cursor: str
    popup_title: str
    popup_text: str
    popup_option: str
    popup_option_selected: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    header="\033[30;47m",
    path_line="\033[37;40m",
    footer="\033[30;47m",
    row="\033[37;40m",
    row_cursor="\033[30;47m",
    row_selected="\033[93;40m",
    row_selected_cursor="\033[30;103m",
    row_error="\033[31;40m",
    row_error_cursor="\033[30;41m",
    row_warning="\033[33;40m",
    row_warning_cursor="\033[30;43m",
    popup_title="\033[31;47m",
    popup_text="\033[30;47m",
    popup_option="\033[30;47m",
    popup_option_selected="\033[37;40m",
)

MONO_THEME = UITheme(
    name="mono",
    reset="\033[0m",
    header="\033[7m",
    path_line="\033[0m",
    footer="\033[7m",
    row="\033[0m",
    row_cursor="\033[7m",
    row_selected="\033[1m",
    row_selected_cursor="\033[1;7m",
    row_error="\033[0m",
    row_error_cursor="\033[7m",
    row_warning="\033[0m",
    row_warning_cursor="\033[7m",
    popup_title="\033[1;7m",
    popup_text="\033[7m",
    popup_option="\033[7m",
    popup_option_selected="\033[0m",
)

THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    MONO_THEME.name: MONO_THEME,
}


def available_theme_names() -> list[str]:
    return sorted(THEMES)


def resolve_theme(name: str | None, no_color: bool = False) -> UITheme:
    """Return the named theme; ``no_color`` or an unknown name fall back safely."""
    if no_color:
        return MONO_THEME
    if name is None:
        return DEFAULT_THEME
    return THEMES.get(name.strip().lower(), DEFAULT_THEME)
