from __future__ import annotations

import unittest

from termbrowse import ui_theme


class UIThemeTests(unittest.TestCase):
    def test_unknown_names_fall_back_to_default(self) -> None:
        self.assertEqual(ui_theme.normalize_theme_name(None), "default")
        self.assertEqual(ui_theme.normalize_theme_name("  OCEAN "), "ocean")
        self.assertEqual(ui_theme.normalize_theme_name("neon"), "default")

    def test_no_color_always_resolves_plain(self) -> None:
        self.assertIs(ui_theme.resolve_theme("ocean", no_color=True), ui_theme.PLAIN_THEME)

    def test_selected_rows_use_green_by_default(self) -> None:
        self.assertEqual(ui_theme.DEFAULT_THEME.selected, "\x1b[32m")

    def test_plain_theme_is_not_selectable_by_name(self) -> None:
        self.assertIs(ui_theme.resolve_theme("plain"), ui_theme.DEFAULT_THEME)


if __name__ == "__main__":
    unittest.main()
