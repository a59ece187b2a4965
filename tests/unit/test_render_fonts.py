#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.


import os
import unittest
from pathlib import Path
from unittest import mock

from PIL import ImageFont

from copybook.core.errors import ConfigurationError
from copybook.render import fonts as fonts_module
from copybook.render.fonts import (
    FONT_FACES,
    FontRegistry,
    available_font_types,
    build_font_family,
    fallback_fonts,
    font_display_name,
    is_valid_font_type,
)
from tests.test_support import temp_directory, temp_env


class TestFontCatalog(unittest.TestCase):
    def test_font_types(self) -> None:
        self.assertEqual(available_font_types(), ["serif", "sans-serif", "cursive", "fantasy"])
        self.assertTrue(is_valid_font_type("fantasy"))
        self.assertFalse(is_valid_font_type("monospace"))
        self.assertFalse(is_valid_font_type(None))

    def test_catalog_is_read_only(self) -> None:
        with self.assertRaises(TypeError):
            FONT_FACES["mono"] = FONT_FACES["serif"]  # type: ignore[index]

    def test_display_names_and_fallbacks(self) -> None:
        self.assertEqual(font_display_name("serif"), "宋体 (Serif)")
        self.assertEqual(font_display_name("unknown"), "unknown")
        self.assertEqual(fallback_fonts("cursive")[-1], "cursive")
        self.assertEqual(fallback_fonts("unknown"), ())

    def test_css_family_stack(self) -> None:
        stack = build_font_family("serif")
        self.assertTrue(stack.startswith('"Noto Serif SC"'))
        self.assertIn('"Times New Roman"', stack)
        self.assertTrue(stack.endswith("serif"))
        self.assertEqual(build_font_family("nope"), build_font_family("serif"))


class TestFontRegistry(unittest.TestCase):
    def test_fallback_only(self) -> None:
        registry = FontRegistry.fallback_only()
        self.assertEqual(list(registry.font_info()), available_font_types())
        for key in available_font_types():
            with self.subTest(key=key):
                resolved = registry.resolve(key)
                self.assertFalse(resolved.loaded)
                self.assertEqual(registry.family(key), FONT_FACES[key].generic_family)
        self.assertIsNone(registry.unicode_font_path())

    def test_unknown_font_type(self) -> None:
        registry = FontRegistry.fallback_only()
        self.assertNotIn("mono", registry)
        with self.assertRaises(ConfigurationError):
            registry.resolve("mono")
        with self.assertRaises(ConfigurationError):
            registry.load("mono", 12)

    def test_load_default_font(self) -> None:
        font = FontRegistry.fallback_only().load("serif", 48)
        self.assertIsInstance(font, (ImageFont.ImageFont, ImageFont.FreeTypeFont))

    def test_discover_prefers_user_directory(self) -> None:
        with temp_directory() as tmp:
            (tmp / "serif.ttf").write_bytes(b"not a real font")
            (tmp / "nested").mkdir()
            (tmp / "nested" / "ZCOOLKuaiLe-Regular.ttf").write_bytes(b"x")
            registry = FontRegistry.discover([tmp], include_system=False)

            serif = registry.resolve("serif")
            self.assertEqual(serif.path, tmp / "serif.ttf")
            self.assertEqual(serif.family, "Noto Serif CJK SC Light")
            self.assertEqual(registry.family("cursive"), "ZCOOL KuaiLe")
            self.assertFalse(registry.resolve("fantasy").loaded)
            self.assertEqual(registry.unicode_font_path(), tmp / "serif.ttf")

            with self.assertRaises(ConfigurationError):
                registry.load("serif", 20)

    def test_discover_uses_system_file_names(self) -> None:
        with temp_directory() as tmp:
            (tmp / "NotoSansCJK-Regular.ttc").write_bytes(b"x")
            with mock.patch.object(fonts_module, "system_font_dirs", return_value=[tmp]):
                registry = FontRegistry.discover()
            resolved = registry.resolve("sans-serif")
            self.assertEqual(resolved.family, "Noto Sans CJK SC")
            # collections are not embeddable in the PDF writer
            self.assertIsNone(registry.unicode_font_path())

    def test_missing_directories_are_ignored(self) -> None:
        registry = FontRegistry.discover([Path("/nonexistent/copybook")], include_system=False)
        self.assertFalse(any(registry.resolve(key).loaded for key in available_font_types()))

    def test_font_info(self) -> None:
        info = FontRegistry.fallback_only().font_info()
        self.assertEqual(
            info["serif"],
            {"display_name": "宋体 (Serif)", "family": "serif", "path": None, "loaded": False},
        )


class TestSystemFontDirs(unittest.TestCase):
    def test_linux_honours_xdg_data_home(self) -> None:
        with mock.patch.object(fonts_module.sys, "platform", "linux"):
            with temp_env({"XDG_DATA_HOME": "/tmp/data"}):
                dirs = fonts_module.system_font_dirs()
        self.assertIn(Path("/usr/share/fonts"), dirs)
        self.assertIn(Path("/tmp/data/fonts"), dirs)

    def test_windows_fonts(self) -> None:
        with mock.patch.object(fonts_module.sys, "platform", "win32"):
            with temp_env({"WINDIR": "C:\\Windows"}):
                os.environ.pop("LOCALAPPDATA", None)
                dirs = fonts_module.system_font_dirs()
        self.assertEqual(dirs, [Path("C:\\Windows") / "Fonts"])


if __name__ == "__main__":
    unittest.main()
