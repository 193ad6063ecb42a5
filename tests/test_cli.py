"""CLI entrypoint behaviour tests.

Verifies the TTY requirement, logging setup and hand-off to the runtime loop.
"""

from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from termbrowse import cli
from termbrowse.config import BrowserConfig


class CliTests(unittest.TestCase):
    def tearDown(self) -> None:
        package_logger = logging.getLogger("termbrowse")
        for handler in list(package_logger.handlers):
            if not isinstance(handler, logging.NullHandler):
                package_logger.removeHandler(handler)
                handler.close()
        package_logger.propagate = True
        package_logger.setLevel(logging.NOTSET)

    def test_requires_a_terminal(self) -> None:
        with mock.patch("termbrowse.cli.terminal_is_interactive", return_value=False), mock.patch(
            "termbrowse.cli.run_browser"
        ) as run_browser:
            with self.assertRaises(SystemExit) as ctx:
                cli.main([])

        self.assertNotEqual(ctx.exception.code, 0)
        run_browser.assert_not_called()

    def test_rejects_unknown_flags(self) -> None:
        with mock.patch("termbrowse.cli.run_browser") as run_browser:
            with self.assertRaises(SystemExit):
                cli.main(["--path", "x"])
        run_browser.assert_not_called()

    def test_launches_browser_with_loaded_config(self) -> None:
        loaded = BrowserConfig(theme="ocean")
        with tempfile.TemporaryDirectory() as tmp, mock.patch(
            "termbrowse.cli.terminal_is_interactive", return_value=True
        ), mock.patch("termbrowse.cli.load_config", return_value=loaded), mock.patch(
            "termbrowse.cli.LOG_PATH", Path(tmp) / "logs" / "termbrowse.log"
        ), mock.patch("termbrowse.cli.run_browser") as run_browser, mock.patch(
            "termbrowse.cli.sys.stdin"
        ) as stdin, mock.patch("termbrowse.cli.sys.stdout") as stdout:
            stdin.fileno.return_value = 0
            stdout.fileno.return_value = 1
            cli.main([])
            self.assertTrue((Path(tmp) / "logs").is_dir())

        run_browser.assert_called_once_with(0, 1, loaded)

    def test_configure_logging_writes_to_file_not_terminal(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "termbrowse.log"
            with mock.patch("termbrowse.cli.LOG_PATH", log_path):
                cli.configure_logging(BrowserConfig(log_level=logging.INFO))
            logging.getLogger("termbrowse.fs").info("renamed a -> b")
            for handler in logging.getLogger("termbrowse").handlers:
                handler.flush()
            self.assertIn("renamed a -> b", log_path.read_text(encoding="utf-8"))
            self.assertFalse(logging.getLogger("termbrowse").propagate)
            self.tearDown()

    def test_configure_logging_twice_keeps_one_file_handler(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("termbrowse.cli.LOG_PATH", Path(tmp) / "termbrowse.log"):
                cli.configure_logging(BrowserConfig())
                cli.configure_logging(BrowserConfig(log_level=logging.DEBUG))
            package_logger = logging.getLogger("termbrowse")
            file_handlers = [h for h in package_logger.handlers if isinstance(h, logging.FileHandler)]
            self.assertEqual(len(file_handlers), 1)
            self.assertEqual(package_logger.level, logging.DEBUG)
            self.tearDown()


if __name__ == "__main__":
    unittest.main()
