"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the dashboard chrome: title block, section
headings, change indicators and shortcut keys.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reverse: str
    reset: str
    title: str
    root_path: str
    description: str
    heading: str
    shortcut: str
    hint: str
    dim: str
    file_tag: str
    change_modified: str
    change_added: str
    change_deleted: str
    change_renamed: str
    change_copied: str
    change_unknown: str
    status_error: str


DEFAULT_THEME = UITheme(
    name="default",
    reverse="\033[7m",
    reset="\033[0m",
    title="\033[1;38;5;81m",
    root_path="\033[2;38;5;250m",
    description="\033[38;5;252m",
    heading="\033[1;34m",
    shortcut="\033[38;5;229m",
    hint="\033[2;38;5;250m",
    dim="\033[2m",
    file_tag="\033[38;5;109m",
    change_modified="\033[38;5;214m",
    change_added="\033[38;5;42m",
    change_deleted="\033[38;5;203m",
    change_renamed="\033[38;5;110m",
    change_copied="\033[38;5;110m",
    change_unknown="\033[38;5;244m",
    status_error="\033[1;38;5;203m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reverse="\033[7m",
    reset="\033[0m",
    title="\033[1;38;5;45m",
    root_path="\033[2;38;5;110m",
    description="\033[38;5;153m",
    heading="\033[1;38;5;39m",
    shortcut="\033[38;5;153m",
    hint="\033[2;38;5;110m",
    dim="\033[2;38;5;24m",
    file_tag="\033[38;5;73m",
    change_modified="\033[38;5;215m",
    change_added="\033[38;5;84m",
    change_deleted="\033[38;5;210m",
    change_renamed="\033[38;5;117m",
    change_copied="\033[38;5;117m",
    change_unknown="\033[38;5;110m",
    status_error="\033[1;38;5;210m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reverse="",
    reset="",
    title="",
    root_path="",
    description="",
    heading="",
    shortcut="",
    hint="",
    dim="",
    file_tag="",
    change_modified="",
    change_added="",
    change_deleted="",
    change_renamed="",
    change_copied="",
    change_unknown="",
    status_error="",
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
