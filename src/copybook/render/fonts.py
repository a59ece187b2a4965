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

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from PIL import ImageFont

from ..core.errors import ConfigurationError

DEFAULT_FONT_TYPE = "serif"
FONT_FILE_SUFFIXES = (".ttf", ".otf", ".ttc", ".otc")


@dataclass(frozen=True)
class FontFace:
    key: str
    display_name: str
    description: str
    family: str
    files: tuple[str, ...]
    system_files: tuple[tuple[str, str], ...]
    google_fonts: tuple[str, ...]
    system_fonts: tuple[str, ...]
    fallbacks: tuple[str, ...]
    weight: str = "normal"

    @property
    def generic_family(self) -> str:
        return self.fallbacks[-1]


FONT_FACES: Mapping[str, FontFace] = MappingProxyType(
    {
        "serif": FontFace(
            key="serif",
            display_name="宋体 (Serif)",
            description="传统宋体，笔画清晰，适合正式练字",
            family="Noto Serif CJK SC Light",
            files=("serif.ttf", "NotoSerifSC-Regular.ttf", "NotoSerifSC-Regular.otf"),
            system_files=(
                ("NotoSerifCJK-Light.ttc", "Noto Serif CJK SC Light"),
                ("NotoSerifCJK-Regular.ttc", "Noto Serif CJK SC"),
                ("NotoSerifSC-Regular.otf", "Noto Serif SC"),
                ("simsun.ttc", "SimSun"),
                ("Songti.ttc", "Songti SC"),
            ),
            google_fonts=("Noto Serif SC", "Source Han Serif SC"),
            system_fonts=("SimSun", "宋体", "Times New Roman"),
            fallbacks=("SimSun", "宋体", "serif"),
        ),
        "sans-serif": FontFace(
            key="sans-serif",
            display_name="黑体 (Sans-serif)",
            description="现代黑体，笔画简洁，适合日常练习",
            family="Noto Sans CJK SC Light",
            files=("sans-serif.ttf", "NotoSansSC-Regular.ttf", "NotoSansSC-Regular.otf"),
            system_files=(
                ("NotoSansCJK-Light.ttc", "Noto Sans CJK SC Light"),
                ("NotoSansCJK-Regular.ttc", "Noto Sans CJK SC"),
                ("NotoSansSC-Regular.otf", "Noto Sans SC"),
                ("msyh.ttc", "Microsoft YaHei"),
                ("PingFang.ttc", "PingFang SC"),
                ("wqy-zenhei.ttc", "WenQuanYi Zen Hei"),
            ),
            google_fonts=("Noto Sans SC", "Source Han Sans SC"),
            system_fonts=("Microsoft YaHei", "微软雅黑", "PingFang SC", "Helvetica Neue", "Arial"),
            fallbacks=("Microsoft YaHei", "微软雅黑", "PingFang SC", "sans-serif"),
        ),
        "cursive": FontFace(
            key="cursive",
            display_name="楷体 (Cursive)",
            description="楷书风格，笔画流畅，适合书法练习",
            family="ZCOOL KuaiLe",
            files=("cursive.ttf", "ZCOOLKuaiLe-Regular.ttf"),
            system_files=(
                ("MaShanZheng-Regular.ttf", "Ma Shan Zheng"),
                ("simkai.ttf", "KaiTi"),
                ("Kaiti.ttc", "Kaiti SC"),
                ("ukai.ttc", "AR PL UKai CN"),
            ),
            google_fonts=("ZCOOL KuaiLe", "Ma Shan Zheng"),
            system_fonts=("KaiTi", "楷体", "Brush Script MT"),
            fallbacks=("KaiTi", "楷体", "cursive"),
        ),
        "fantasy": FontFace(
            key="fantasy",
            display_name="装饰体 (Fantasy)",
            description="装饰字体，风格独特，适合创意练习",
            family="ZCOOL XiaoWei",
            files=("fantasy.ttf", "ZCOOLXiaoWei-Regular.ttf"),
            system_files=(
                ("LiuJianMaoCao-Regular.ttf", "Liu Jian Mao Cao"),
                ("STXINWEI.TTF", "华文新魏"),
            ),
            google_fonts=("ZCOOL XiaoWei", "Liu Jian Mao Cao"),
            system_fonts=("华文新魏", "Papyrus", "Impact"),
            fallbacks=("华文新魏", "fantasy"),
        ),
    }
)


def available_font_types() -> list[str]:
    return list(FONT_FACES)


def is_valid_font_type(font_type: object) -> bool:
    return isinstance(font_type, str) and font_type in FONT_FACES


def font_display_name(font_type: str) -> str:
    face = FONT_FACES.get(font_type)
    return face.display_name if face else font_type


def fallback_fonts(font_type: str) -> tuple[str, ...]:
    face = FONT_FACES.get(font_type)
    return face.fallbacks if face else ()


def build_font_family(font_type: str) -> str:
    """CSS-style family stack: web fonts, then system fonts, then the fallback chain."""
    face = FONT_FACES.get(font_type) or FONT_FACES[DEFAULT_FONT_TYPE]
    names: list[str] = [f'"{name}"' for name in face.google_fonts]
    names.extend(f'"{name}"' if " " in name else name for name in face.system_fonts)
    names.extend(face.fallbacks)
    return ", ".join(names)


@dataclass(frozen=True)
class ResolvedFont:
    key: str
    family: str
    path: Path | None

    @property
    def loaded(self) -> bool:
        return self.path is not None


class FontRegistry:
    """Read-only map of font type to resolved face, built once per process."""

    def __init__(self, resolved: Mapping[str, ResolvedFont]) -> None:
        self._resolved: Mapping[str, ResolvedFont] = MappingProxyType(dict(resolved))

    @classmethod
    def discover(
        cls,
        font_dirs: Sequence[str | Path] = (),
        *,
        include_system: bool = True,
    ) -> "FontRegistry":
        user_index = _index_font_files(Path(item).expanduser() for item in font_dirs)
        system_index = _index_font_files(system_font_dirs()) if include_system else {}
        resolved: dict[str, ResolvedFont] = {}
        for key, face in FONT_FACES.items():
            resolved[key] = _resolve_face(face, user_index, system_index)
        return cls(resolved)

    @classmethod
    def fallback_only(cls) -> "FontRegistry":
        return cls(
            {
                key: ResolvedFont(key=key, family=face.generic_family, path=None)
                for key, face in FONT_FACES.items()
            }
        )

    def resolve(self, font_type: str) -> ResolvedFont:
        resolved = self._resolved.get(font_type)
        if resolved is None:
            raise ConfigurationError(f"no font configured for font type: {font_type!r}")
        return resolved

    def family(self, font_type: str) -> str:
        return self.resolve(font_type).family

    def load(self, font_type: str, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        resolved = self.resolve(font_type)
        if resolved.path is None:
            return ImageFont.load_default(size=size)
        try:
            return ImageFont.truetype(str(resolved.path), size)
        except OSError as exc:
            raise ConfigurationError(
                f"failed to load font {resolved.family!r} from {resolved.path}: {exc}"
            ) from exc

    def unicode_font_path(self) -> Path | None:
        """First resolved single-face font file usable for PDF text."""
        for resolved in self._resolved.values():
            path = resolved.path
            if path is not None and path.suffix.lower() in {".ttf", ".otf"}:
                return path
        return None

    def font_info(self) -> dict[str, dict[str, object]]:
        info: dict[str, dict[str, object]] = {}
        for key, resolved in self._resolved.items():
            face = FONT_FACES.get(key)
            info[key] = {
                "display_name": face.display_name if face else key,
                "family": resolved.family,
                "path": str(resolved.path) if resolved.path else None,
                "loaded": resolved.loaded,
            }
        return info


def system_font_dirs() -> list[Path]:
    home = Path.home()
    if sys.platform == "win32":
        windir = os.environ.get("WINDIR", r"C:\Windows")
        local = os.environ.get("LOCALAPPDATA")
        dirs = [Path(windir) / "Fonts"]
        if local:
            dirs.append(Path(local) / "Microsoft" / "Windows" / "Fonts")
        return dirs
    if sys.platform == "darwin":
        return [
            Path("/System/Library/Fonts"),
            Path("/Library/Fonts"),
            home / "Library" / "Fonts",
        ]
    data_home = os.environ.get("XDG_DATA_HOME")
    dirs = [
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        home / ".fonts",
        Path(data_home) / "fonts" if data_home else home / ".local" / "share" / "fonts",
    ]
    return dirs


def _index_font_files(directories: Iterable[Path]) -> dict[str, Path]:
    index: dict[str, Path] = {}
    for directory in directories:
        if not directory.is_dir():
            continue
        for root, _dirs, files in os.walk(directory):
            for name in sorted(files):
                if not name.lower().endswith(FONT_FILE_SUFFIXES):
                    continue
                index.setdefault(name.lower(), Path(root) / name)
    return index


def _resolve_face(
    face: FontFace,
    user_index: Mapping[str, Path],
    system_index: Mapping[str, Path],
) -> ResolvedFont:
    for filename in face.files:
        path = user_index.get(filename.lower())
        if path is not None:
            return ResolvedFont(key=face.key, family=face.family, path=path)
    for filename, family in face.system_files:
        path = user_index.get(filename.lower()) or system_index.get(filename.lower())
        if path is not None:
            return ResolvedFont(key=face.key, family=family, path=path)
    return ResolvedFont(key=face.key, family=face.generic_family, path=None)
