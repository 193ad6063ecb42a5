"""Interactive runtime loop wiring terminal, renderer, decoder and navigator.

The loop is intentionally thin: geometry, render, read one command, apply it.
Terminal restoration is guaranteed by the controller's context manager; the
final screen clear happens after the terminal mode is restored.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from .ansi import move_to
from .config import BrowserConfig
from .fs import DirectoryLister, FileOperations, FileOperationsProvider, ListingProvider
from .input import Command, read_command, read_line
from .layout import ViewportGeometry
from .navigation import ROOT, Navigator
from .render import prompt_position, render_frame
from .terminal import TerminalController
from .ui_theme import resolve_theme

logger = logging.getLogger(__name__)

CLEAR_LINE = "\x1b[2K"


def make_line_prompt(
    terminal: TerminalController,
    geometry_for_frame: Callable[[], ViewportGeometry],
) -> Callable[[str], str | None]:
    """Return a prompt that reads one line with raw mode suspended."""

    def prompt_line(message: str) -> str | None:
        row, col = prompt_position(geometry_for_frame())
        with terminal.suspended():
            terminal.write(f"{move_to(row, col)}{CLEAR_LINE}{message}")
            return read_line(terminal.stdin_fd)

    return prompt_line


def run_browser(
    stdin_fd: int,
    stdout_fd: int,
    config: BrowserConfig | None = None,
    *,
    root: Path = ROOT,
    lister: ListingProvider | None = None,
    file_ops: FileOperationsProvider | None = None,
    terminal: TerminalController | None = None,
) -> None:
    """Run the browser until the user quits."""
    config = config or BrowserConfig()
    theme = resolve_theme(config.theme, no_color=config.no_color)
    terminal = terminal or TerminalController(stdin_fd, stdout_fd)

    def geometry_for_frame() -> ViewportGeometry:
        return ViewportGeometry.current(config.ui_width, config.ui_height)

    navigator = Navigator(
        lister or DirectoryLister(),
        file_ops or FileOperations(),
        root=root,
        prompt_line=make_line_prompt(terminal, geometry_for_frame),
    )

    try:
        with terminal.raw_mode():
            logger.info("browsing from %s", root)
            while True:
                render_frame(stdout_fd, geometry_for_frame(), navigator.state, theme)
                command = read_command(stdin_fd)
                if command is not Command.NOOP:
                    logger.debug("command %s in %s", command.value, navigator.current_path)
                if not navigator.apply(command):
                    break
    except KeyboardInterrupt:
        # Ctrl-C ends the session like Quit.
        logger.info("interrupted")
    terminal.clear_screen()
    logger.info("session ended")
