"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the browser chrome and listing rows. Colour codes
come from ``pygments.console`` so palettes stay readable as names.
"""

from __future__ import annotations

from dataclasses import dataclass

from pygments.console import codes


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    border: str
    header: str
    instructions: str
    selected: str
    marker: str
    status_error: str
    status_info: str


DEFAULT_THEME = UITheme(
    name="default",
    reset=codes["reset"],
    border=codes["faint"],
    header=codes["bold"],
    instructions=codes["faint"],
    selected=codes["green"],
    marker=codes["green"],
    status_error=codes["brightred"],
    status_info=codes["yellow"],
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset=codes["reset"],
    border=codes["blue"],
    header=codes["bold"] + codes["brightcyan"],
    instructions=codes["cyan"],
    selected=codes["brightcyan"],
    marker=codes["brightblue"],
    status_error=codes["brightred"],
    status_info=codes["brightyellow"],
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    border="",
    header="",
    instructions="",
    selected="",
    marker="",
    status_error="",
    status_info="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and colour mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]
