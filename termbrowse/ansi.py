"""Terminal text measurement and escape-sequence helpers.

Provides display-width aware clipping so names never spill past the box border.
Cursor and screen control sequences used by the renderer live here too.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")

CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"

INVALID_NAME_PLACEHOLDER = "Invalid UTF-8"


def move_to(row: int, col: int) -> str:
    """Return a CSI cursor-position sequence for 0-based ``row``/``col``."""
    return f"\x1b[{max(0, row) + 1};{max(0, col) + 1}H"


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks and control characters consume no columns and East Asian
    wide/fullwidth characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.category(ch) == "Cc":
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return visible width of ``text`` with escape sequences ignored."""
    plain = ANSI_ESCAPE_RE.sub("", text)
    return sum(char_display_width(ch) for ch in plain)


def clip_text(text: str, max_cols: int) -> str:
    """Trim plain text to at most ``max_cols`` display columns."""
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
    return "".join(out)


def printable_name(name: str) -> str:
    """Return ``name`` or a placeholder when it cannot be encoded as UTF-8.

    Undecodable bytes from the filesystem surface as lone surrogates; writing
    those to the terminal would fail, so they are shown as a fixed label.
    Control characters are replaced so a name cannot move the cursor.
    """
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return INVALID_NAME_PLACEHOLDER
    if any(unicodedata.category(ch) == "Cc" for ch in name):
        return "".join("?" if unicodedata.category(ch) == "Cc" else ch for ch in name)
    return name
