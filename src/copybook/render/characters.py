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

import re
import unicodedata
from collections.abc import Sequence

from PIL import ImageFont

from ..core.validation import require_character_count, require_text
from .geometry import compute_layout, font_size_for_cell
from .fonts import FontRegistry
from .grid import draw_grid
from .spec import Color, DocumentSpec
from .surface import Surface
from .types import Layout, SheetResult

_WHITESPACE_RE = re.compile(r"\s+")


def _joins_previous(char: str) -> bool:
    if unicodedata.combining(char):
        return True
    code = ord(char)
    # Variation selectors and the zero width joiner attach to the preceding glyph.
    return 0xFE00 <= code <= 0xFE0F or 0xE0100 <= code <= 0xE01EF or code == 0x200D


def character_stream(text: str) -> tuple[str, ...]:
    """Split text into renderable units with every whitespace run removed."""
    compact = _WHITESPACE_RE.sub("", text)
    units: list[str] = []
    for char in compact:
        if units and (_joins_previous(char) or units[-1].endswith("\u200d")):
            units[-1] += char
            continue
        units.append(char)
    return tuple(unit for unit in units if unit.strip())


def validated_stream(text: object) -> tuple[str, ...]:
    """Tokenize request text, rejecting empty or oversized input before layout."""
    stream = character_stream(require_text(text))
    require_character_count(len(stream))
    return stream


def place_characters(
    surface: Surface,
    layout: Layout,
    characters: Sequence[str],
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
    *,
    color: Color,
    opacity: float = 1.0,
) -> int:
    """Draw characters row-major, one per cell, and return how many fit."""
    count = min(len(characters), layout.capacity)
    half = layout.cell_size / 2
    for index in range(count):
        x, y = layout.cell_origin(index)
        surface.fill_text(
            characters[index],
            (x + half, y + half),
            font=font,
            color=color,
            opacity=opacity,
        )
    return count


def render_sheet(
    characters: Sequence[str],
    *,
    chars_per_row: int,
    row_count: int,
    font_type: str,
    spec: DocumentSpec,
    fonts: FontRegistry,
    opacity: float = 1.0,
) -> SheetResult:
    page = spec.page
    style = spec.grid
    layout = compute_layout(
        page.width_px,
        page.height_px,
        chars_per_row,
        row_count,
        padding=page.padding_px,
    )
    surface = Surface(layout.total_width, layout.total_height, background=style.background)
    draw_grid(surface, layout, style)

    font = fonts.load(font_type, font_size_for_cell(layout.cell_size, style.font_scale))
    drawn = place_characters(
        surface,
        layout,
        characters,
        font,
        color=style.character_color,
        opacity=opacity,
    )
    return SheetResult(
        image=surface.finalize(),
        layout=layout,
        characters_drawn=drawn,
        total_characters=len(characters),
        font_family=fonts.family(font_type),
    )
