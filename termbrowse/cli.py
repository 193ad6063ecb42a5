"""Command-line front door for termbrowse.

Checks that the standard streams are a terminal, configures file logging,
then hands over to the interactive runtime loop rooted at ``.``.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .app import run_browser
from .config import APP_NAME, LOG_PATH, BrowserConfig, load_config
from .terminal import terminal_is_interactive

logger = logging.getLogger(__name__)


def configure_logging(config: BrowserConfig) -> None:
    """Send package logs to the per-user log file, never to the terminal.

    When the log directory cannot be created logging stays silent. Calling
    it again only updates the level.
    """
    package_logger = logging.getLogger(APP_NAME)
    package_logger.setLevel(config.log_level)
    package_logger.propagate = False
    if any(not isinstance(handler, logging.NullHandler) for handler in package_logger.handlers):
        return
    try:
        LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(LOG_PATH, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(handler)


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and launch the browser on the current directory."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=(
            "Browse the current directory in the terminal. "
            "Up/Down navigate, Enter opens, b goes back, r renames, m moves, q quits."
        ),
    )
    parser.parse_args(argv)

    not_a_terminal = f"{APP_NAME}: standard input and output must be a terminal"
    try:
        stdin_fd = sys.stdin.fileno()
        stdout_fd = sys.stdout.fileno()
    except (AttributeError, OSError, ValueError) as exc:
        raise SystemExit(not_a_terminal) from exc
    if not terminal_is_interactive(stdin_fd, stdout_fd):
        raise SystemExit(not_a_terminal)

    config = load_config()
    configure_logging(config)
    try:
        run_browser(stdin_fd, stdout_fd, config)
    except Exception:
        logger.exception("browser session failed")
        raise
