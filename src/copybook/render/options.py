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

"""Per-operation option structs.

Every recognised option and its default/clamp rule lives here. Defaults differ
by call site, so each operation takes its own :class:`GridDefaults`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from ..core.bounds import (
    MAX_CHARS_PER_PAGE,
    MAX_CHARS_PER_ROW,
    MAX_EXPORT_QUALITY,
    MAX_GUIDE_OPACITY,
    MAX_PRACTICE_COPIES,
    MAX_ROW_COUNT,
    MIN_CHARS_PER_PAGE,
    MIN_CHARS_PER_ROW,
    MIN_EXPORT_QUALITY,
    MIN_GUIDE_OPACITY,
    MIN_ROW_COUNT,
)
from ..core.validation import clamp_float, clamp_int
from .fonts import DEFAULT_FONT_TYPE, is_valid_font_type
from .utils import bool_value, float_value, int_value

ImageFormat = Literal["png", "jpeg"]

DEFAULT_TITLE = "汉字字帖"
DEFAULT_PRACTICE_TITLE = "汉字练习册"
DEFAULT_EXPORT_QUALITY = 0.9
DEFAULT_PRACTICE_COPIES = 3
PRACTICE_SHEET_OPACITY = 0.2


@dataclass(frozen=True)
class GridDefaults:
    chars_per_row: int
    row_count: int
    guide_opacity: float
    chars_per_page: int = 150


SHEET_DEFAULTS = GridDefaults(chars_per_row=15, row_count=5, guide_opacity=0.3)
PDF_DEFAULTS = GridDefaults(chars_per_row=10, row_count=15, guide_opacity=0.2)
PREVIEW_DEFAULTS = GridDefaults(chars_per_row=10, row_count=10, guide_opacity=0.3)


@dataclass(frozen=True)
class GridRequest:
    chars_per_row: int
    row_count: int
    font_type: str = DEFAULT_FONT_TYPE
    practice_mode: bool = False
    guide_opacity: float = 0.3

    @property
    def opacity(self) -> float:
        return self.guide_opacity if self.practice_mode else 1.0


@dataclass(frozen=True)
class SheetOptions:
    grid: GridRequest
    format: ImageFormat = "png"
    quality: float = DEFAULT_EXPORT_QUALITY


@dataclass(frozen=True)
class PdfOptions:
    grid: GridRequest
    title: str = DEFAULT_TITLE
    multi_page: bool = False
    chars_per_page: int = 150


@dataclass(frozen=True)
class PracticeOptions:
    grid: GridRequest
    title: str = DEFAULT_PRACTICE_TITLE
    copies: int = DEFAULT_PRACTICE_COPIES
    include_answer: bool = True
    guide_opacity: float = PRACTICE_SHEET_OPACITY


def normalize_font_type(value: object) -> str:
    if is_valid_font_type(value):
        return str(value)
    return DEFAULT_FONT_TYPE


def normalize_chars_per_row(value: object, *, default: int) -> int:
    parsed = int_value(value, default=default)
    return clamp_int(parsed, min_val=MIN_CHARS_PER_ROW, max_val=MAX_CHARS_PER_ROW)


def normalize_row_count(value: object, *, default: int) -> int:
    parsed = int_value(value, default=default)
    return clamp_int(parsed, min_val=MIN_ROW_COUNT, max_val=MAX_ROW_COUNT)


def normalize_guide_opacity(value: object, *, default: float) -> float:
    parsed = float_value(value, default=default)
    return clamp_float(parsed, min_val=MIN_GUIDE_OPACITY, max_val=MAX_GUIDE_OPACITY)


def normalize_chars_per_page(value: object, *, default: int) -> int:
    parsed = int_value(value, default=default)
    return clamp_int(parsed, min_val=MIN_CHARS_PER_PAGE, max_val=MAX_CHARS_PER_PAGE)


def normalize_quality(value: object, *, default: float = DEFAULT_EXPORT_QUALITY) -> float:
    parsed = float_value(value, default=default)
    return clamp_float(parsed, min_val=MIN_EXPORT_QUALITY, max_val=MAX_EXPORT_QUALITY)


def normalize_image_format(value: object) -> ImageFormat:
    if isinstance(value, str) and value.strip().lower() in {"jpeg", "jpg"}:
        return "jpeg"
    return "png"


def normalize_grid_request(
    *,
    defaults: GridDefaults,
    font_type: object = None,
    chars_per_row: object = None,
    row_count: object = None,
    practice_mode: object = None,
    guide_opacity: object = None,
) -> GridRequest:
    return GridRequest(
        chars_per_row=normalize_chars_per_row(chars_per_row, default=defaults.chars_per_row),
        row_count=normalize_row_count(row_count, default=defaults.row_count),
        font_type=normalize_font_type(font_type),
        practice_mode=bool_value(practice_mode),
        guide_opacity=normalize_guide_opacity(guide_opacity, default=defaults.guide_opacity),
    )


def normalize_sheet_options(
    *,
    defaults: GridDefaults = SHEET_DEFAULTS,
    format: object = None,
    quality: object = None,
    **grid: object,
) -> SheetOptions:
    return SheetOptions(
        grid=normalize_grid_request(defaults=defaults, **grid),
        format=normalize_image_format(format),
        quality=normalize_quality(quality),
    )


def normalize_pdf_options(
    *,
    defaults: GridDefaults = PDF_DEFAULTS,
    title: object = None,
    multi_page: object = None,
    chars_per_page: object = None,
    **grid: object,
) -> PdfOptions:
    return PdfOptions(
        grid=normalize_grid_request(defaults=defaults, **grid),
        title=_title(title, default=DEFAULT_TITLE),
        multi_page=bool_value(multi_page),
        chars_per_page=normalize_chars_per_page(chars_per_page, default=defaults.chars_per_page),
    )


def normalize_practice_options(
    *,
    defaults: GridDefaults = PDF_DEFAULTS,
    title: object = None,
    copies: object = None,
    include_answer: object = None,
    **grid: object,
) -> PracticeOptions:
    parsed_copies = int_value(copies, default=DEFAULT_PRACTICE_COPIES)
    return PracticeOptions(
        grid=normalize_grid_request(defaults=defaults, **grid),
        title=_title(title, default=DEFAULT_PRACTICE_TITLE),
        copies=clamp_int(parsed_copies, min_val=1, max_val=MAX_PRACTICE_COPIES),
        include_answer=bool_value(include_answer, default=True),
    )


def _title(value: object, *, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default
