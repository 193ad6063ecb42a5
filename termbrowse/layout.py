"""Viewport geometry for the centered browser box.

Terminal size is queried live every frame because the terminal may be resized
between keystrokes. Size-query failures fall back to 80x24.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_TERMINAL_SIZE = (80, 24)
DEFAULT_UI_WIDTH = 60
DEFAULT_UI_HEIGHT = 20
MIN_UI_WIDTH = 20
MIN_UI_HEIGHT = 10


def query_terminal_size(
    fallback: tuple[int, int] = DEFAULT_TERMINAL_SIZE,
) -> tuple[int, int]:
    """Return ``(columns, rows)`` for the controlling terminal.

    ``shutil.get_terminal_size`` already falls back when stdout is not a
    terminal; a zero or failing query is also replaced with ``fallback``.
    """
    try:
        size = shutil.get_terminal_size(fallback)
    except (OSError, ValueError) as exc:
        logger.warning("terminal size query failed: %s", exc)
        return fallback
    if size.columns <= 0 or size.lines <= 0:
        return fallback
    return size.columns, size.lines


def compute_layout(term_cols: int, term_rows: int, ui_width: int, ui_height: int) -> tuple[int, int]:
    """Return ``(offset_x, offset_y)`` centering the UI box, never negative."""
    offset_x = max(0, (term_cols - ui_width) // 2)
    offset_y = max(0, (term_rows - ui_height) // 2)
    return offset_x, offset_y


@dataclass(frozen=True)
class ViewportGeometry:
    """Per-frame terminal size, box size, and centering offsets."""

    term_cols: int
    term_rows: int
    ui_width: int
    ui_height: int
    offset_x: int
    offset_y: int

    @property
    def inner_width(self) -> int:
        """Columns available between the left and right border."""
        return max(0, self.ui_width - 4)

    @property
    def inner_height(self) -> int:
        """Rows available between the top and bottom border."""
        return max(0, self.ui_height - 2)

    @classmethod
    def from_sizes(cls, term_cols: int, term_rows: int, ui_width: int, ui_height: int) -> ViewportGeometry:
        """Build geometry for known sizes; the box shrinks to fit small terminals."""
        box_width = max(1, min(ui_width, term_cols))
        # Keep one row under the box for the parked cursor.
        box_height = max(1, min(ui_height, term_rows - 1))
        offset_x, offset_y = compute_layout(term_cols, term_rows, box_width, box_height)
        return cls(
            term_cols=term_cols,
            term_rows=term_rows,
            ui_width=box_width,
            ui_height=box_height,
            offset_x=offset_x,
            offset_y=offset_y,
        )

    @classmethod
    def current(cls, ui_width: int = DEFAULT_UI_WIDTH, ui_height: int = DEFAULT_UI_HEIGHT) -> ViewportGeometry:
        """Query the live terminal size and compute this frame's geometry."""
        term_cols, term_rows = query_terminal_size()
        return cls.from_sizes(term_cols, term_rows, ui_width, ui_height)

