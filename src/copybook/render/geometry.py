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

import math

from .types import Layout, Placement

# Fraction of the cell edge used as the glyph em size.
DEFAULT_FONT_SCALE = 0.9


def compute_layout(
    page_width_px: int,
    page_height_px: int,
    chars_per_row: int,
    row_count: int,
    *,
    padding: int,
) -> Layout:
    """Fit a square-celled grid of ``chars_per_row × row_count`` inside the page.

    The binding axis sets the cell size, and the canvas is recomputed from it,
    so the result is content-tight rather than page-sized.
    """
    if chars_per_row <= 0 or row_count <= 0:
        raise ValueError("chars_per_row and row_count must be positive")
    if padding < 0:
        raise ValueError("padding must be non-negative")

    content_w = page_width_px - 2 * padding
    content_h = page_height_px - 2 * padding
    cell_w = content_w // chars_per_row
    cell_h = content_h // row_count
    cell_size = min(cell_w, cell_h)
    if cell_size <= 0:
        raise ValueError(
            f"page too small for a {chars_per_row}x{row_count} grid "
            f"({page_width_px}x{page_height_px}px, padding {padding}px)"
        )

    return Layout(
        cell_size=cell_size,
        total_width=chars_per_row * cell_size + 2 * padding,
        total_height=row_count * cell_size + 2 * padding,
        padding=padding,
        chars_per_row=chars_per_row,
        row_count=row_count,
    )


def font_size_for_cell(cell_size: int, scale: float = DEFAULT_FONT_SCALE) -> int:
    return max(1, math.floor(cell_size * scale))


def page_count(total_characters: int, chars_per_page: int) -> int:
    if chars_per_page <= 0:
        raise ValueError("chars_per_page must be positive")
    return math.ceil(total_characters / chars_per_page)


def page_bounds(page_idx: int, chars_per_page: int, total_characters: int) -> tuple[int, int]:
    start = page_idx * chars_per_page
    end = min(start + chars_per_page, total_characters)
    return start, max(start, end)


def rows_for_slice(slice_length: int, chars_per_row: int, row_count: int) -> int:
    """Rows needed for a page slice, capped at the requested row count."""
    if slice_length <= 0:
        return row_count
    return min(row_count, math.ceil(slice_length / chars_per_row))


def fit_placement(
    image_w: float,
    image_h: float,
    *,
    area_x: float,
    area_y: float,
    area_w: float,
    area_h: float,
) -> Placement:
    """Scale an image uniformly into an area and center it on both axes."""
    if image_w <= 0 or image_h <= 0:
        raise ValueError("image dimensions must be positive")
    scale = min(area_w / image_w, area_h / image_h)
    width = image_w * scale
    height = image_h * scale
    return Placement(
        x=area_x + (area_w - width) / 2,
        y=area_y + (area_h - height) / 2,
        width=width,
        height=height,
        scale=scale,
    )
