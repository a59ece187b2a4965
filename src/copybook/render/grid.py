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

from .spec import GridStyleSpec
from .surface import Surface
from .types import Layout


def draw_rice_cell(surface: Surface, x: int, y: int, size: int, style: GridStyleSpec) -> None:
    """Draw one 米字格 cell: dashed crosshair and diagonals under a solid border."""
    half = size / 2
    guides = (
        ((x, y + half), (x + size, y + half)),
        ((x + half, y), (x + half, y + size)),
        ((x, y), (x + size, y + size)),
        ((x + size, y), (x, y + size)),
    )
    for start, end in guides:
        surface.line(
            start,
            end,
            color=style.guide_color,
            width=style.guide_width,
            dash=style.dash,
        )
    surface.stroke_rect(x, y, size, color=style.border_color, width=style.border_width)


def draw_grid(surface: Surface, layout: Layout, style: GridStyleSpec) -> None:
    for index in range(layout.capacity):
        x, y = layout.cell_origin(index)
        draw_rice_cell(surface, x, y, layout.cell_size, style)
