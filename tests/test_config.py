from __future__ import annotations

import json
import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from termbrowse import config
from termbrowse.layout import DEFAULT_UI_HEIGHT, DEFAULT_UI_WIDTH


class ConfigBehaviorTests(unittest.TestCase):
    def _load(self, payload: str | None, environ: dict[str, str] | None = None) -> config.BrowserConfig:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            if payload is not None:
                config_path.write_text(payload, encoding="utf-8")
            with mock.patch("termbrowse.config.CONFIG_PATH", config_path):
                return config.load_config(environ or {})

    def test_missing_config_uses_defaults(self) -> None:
        loaded = self._load(None)
        self.assertEqual(loaded, config.BrowserConfig())
        self.assertEqual((loaded.ui_width, loaded.ui_height), (DEFAULT_UI_WIDTH, DEFAULT_UI_HEIGHT))

    def test_malformed_config_uses_defaults(self) -> None:
        self.assertEqual(self._load("{not json"), config.BrowserConfig())
        self.assertEqual(self._load("[1, 2]"), config.BrowserConfig())

    def test_valid_values_are_applied(self) -> None:
        loaded = self._load(json.dumps({"theme": "Ocean", "ui_width": 72, "ui_height": 30, "log_level": "debug"}))
        self.assertEqual(loaded.theme, "ocean")
        self.assertEqual((loaded.ui_width, loaded.ui_height), (72, 30))
        self.assertEqual(loaded.log_level, logging.DEBUG)

    def test_invalid_values_fall_back_individually(self) -> None:
        loaded = self._load(json.dumps({"theme": 3, "ui_width": 5, "ui_height": True, "log_level": "loud"}))
        self.assertEqual(loaded.theme, "default")
        self.assertEqual((loaded.ui_width, loaded.ui_height), (DEFAULT_UI_WIDTH, DEFAULT_UI_HEIGHT))
        self.assertEqual(loaded.log_level, logging.WARNING)

    def test_no_color_from_environment_or_config(self) -> None:
        self.assertTrue(self._load(None, {"NO_COLOR": "1"}).no_color)
        self.assertTrue(self._load(json.dumps({"color": False})).no_color)
        self.assertFalse(self._load(None, {"NO_COLOR": ""}).no_color)


if __name__ == "__main__":
    unittest.main()
