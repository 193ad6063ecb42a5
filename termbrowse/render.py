"""Frame rendering for the centered browser box.

Every frame is a full clear-and-redraw. Frame composition is pure; only
``render_frame`` writes to the terminal.
"""

from __future__ import annotations

import os

from .ansi import CLEAR_SCREEN, HIDE_CURSOR, SHOW_CURSOR, clip_text, display_width, move_to, printable_name
from .layout import ViewportGeometry
from .navigation import BrowserState, MovePicker, StatusMessage
from .ui_theme import UITheme

BROWSE_INSTRUCTIONS: tuple[str, ...] = (
    "Up/Down  Enter",
    "b back  r rename",
    "m move  q quit",
)

PICKER_INSTRUCTIONS: tuple[str, ...] = (
    "Up/Down  Enter",
    "m move here",
    "b cancel  q quit",
)

SELECTED_MARKER = "> "
UNSELECTED_MARKER = "  "


def _horizontal_border(left: str, fill: str, right: str, width: int) -> str:
    if width <= 1:
        return left[:width]
    return left + fill * (width - 2) + right


def _styled(text: str, style: str, theme: UITheme) -> str:
    if not style or not text:
        return text
    return f"{style}{text}{theme.reset}"


def _box_row(content: str, content_width: int, theme: UITheme, geometry: ViewportGeometry) -> str:
    """Wrap already-clipped ``content`` in side borders, padding to the inner width."""
    inner = geometry.inner_width
    if geometry.ui_width < 4:
        return _styled("│" * min(geometry.ui_width, 2), theme.border, theme)
    padding = " " * max(0, inner - content_width)
    return f"{_styled('│', theme.border, theme)} {content}{padding} {_styled('│', theme.border, theme)}"


def _plain_row(text: str, style: str, theme: UITheme, geometry: ViewportGeometry) -> str:
    clipped = clip_text(text, geometry.inner_width)
    return _box_row(_styled(clipped, style, theme), display_width(clipped), theme, geometry)


def _listing_row(name: str, selected: bool, theme: UITheme, geometry: ViewportGeometry) -> str:
    marker = SELECTED_MARKER if selected else UNSELECTED_MARKER
    marker = clip_text(marker, geometry.inner_width)
    clipped = clip_text(printable_name(name), geometry.inner_width - display_width(marker))
    width = display_width(marker) + display_width(clipped)
    if selected:
        content = _styled(marker.rstrip(), theme.marker, theme) + marker[len(marker.rstrip()):]
        content += _styled(clipped, theme.selected, theme)
    else:
        content = marker + clipped
    return _box_row(content, width, theme, geometry)


def _status_row(status: StatusMessage | None, theme: UITheme, geometry: ViewportGeometry) -> str:
    if status is None:
        return _plain_row("", "", theme, geometry)
    style = theme.status_error if status.is_error else theme.status_info
    return _plain_row(status.text, style, theme, geometry)


def _frame_content(state: BrowserState) -> tuple[str, tuple[str, ...], list[str], int]:
    picker: MovePicker | None = state.picker
    if picker is not None:
        header = f"Move '{printable_name(picker.name)}' to: {picker.stack.display()}"
        return header, PICKER_INSTRUCTIONS, picker.entries, picker.selection
    header = f"Current Directory: {state.stack.display()}"
    return header, BROWSE_INSTRUCTIONS, state.listing, state.selection


def build_frame_rows(geometry: ViewportGeometry, state: BrowserState, theme: UITheme) -> list[str]:
    """Compose the box rows from top border to bottom border.

    Listing rows that do not fit above the status line are dropped; the result
    never has more rows than ``geometry.ui_height``.
    """
    header, instructions, entries, selection = _frame_content(state)

    inner_rows: list[str] = [_plain_row(header, theme.header, theme, geometry)]
    inner_rows.append(_plain_row("", "", theme, geometry))
    inner_rows.extend(_plain_row(line, theme.instructions, theme, geometry) for line in instructions)
    inner_rows.append(_plain_row("", "", theme, geometry))

    # The last inner row is reserved for the status line.
    listing_capacity = max(0, geometry.inner_height - len(inner_rows) - 1)
    for idx, name in enumerate(entries[:listing_capacity]):
        inner_rows.append(_listing_row(name, idx == selection, theme, geometry))
    while len(inner_rows) < geometry.inner_height - 1:
        inner_rows.append(_plain_row("", "", theme, geometry))
    inner_rows = inner_rows[: max(0, geometry.inner_height - 1)]
    if geometry.inner_height > 0:
        inner_rows.append(_status_row(state.status, theme, geometry))

    top = _styled(_horizontal_border("┌", "─", "┐", geometry.ui_width), theme.border, theme)
    bottom = _styled(_horizontal_border("└", "─", "┘", geometry.ui_width), theme.border, theme)
    rows = [top, *inner_rows]
    if geometry.ui_height > 1:
        rows.append(bottom)
    return rows[: geometry.ui_height]


def prompt_position(geometry: ViewportGeometry) -> tuple[int, int]:
    """Return the ``(row, col)`` just below the box used for the cursor and prompts."""
    return geometry.offset_y + geometry.ui_height, geometry.offset_x


def build_frame(geometry: ViewportGeometry, state: BrowserState, theme: UITheme) -> str:
    """Return the full escape-sequence payload for one frame."""
    out: list[str] = [HIDE_CURSOR, CLEAR_SCREEN]
    for idx, row in enumerate(build_frame_rows(geometry, state, theme)):
        out.append(move_to(geometry.offset_y + idx, geometry.offset_x))
        out.append(row)
    row, col = prompt_position(geometry)
    out.append(move_to(row, col))
    out.append(SHOW_CURSOR)
    return "".join(out)


def render_frame(stdout_fd: int, geometry: ViewportGeometry, state: BrowserState, theme: UITheme) -> None:
    """Write one full frame to ``stdout_fd``."""
    os.write(stdout_fd, build_frame(geometry, state, theme).encode("utf-8", errors="replace"))
