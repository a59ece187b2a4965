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
from collections.abc import Iterator

from PIL import Image, ImageColor, ImageDraw, ImageFont

from .spec import Color


def to_rgb(value: Color) -> tuple[int, int, int]:
    if isinstance(value, str):
        rgb = ImageColor.getrgb(value)
        return (int(rgb[0]), int(rgb[1]), int(rgb[2]))
    return (int(value[0]), int(value[1]), int(value[2]))


def dash_segments(
    start: tuple[float, float],
    end: tuple[float, float],
    dash: tuple[int, int],
) -> Iterator[tuple[tuple[float, float], tuple[float, float]]]:
    """Split a line into on/off dash segments, starting with an "on" stretch."""
    on, off = dash
    x0, y0 = start
    x1, y1 = end
    length = math.hypot(x1 - x0, y1 - y0)
    if length <= 0:
        return
    if on <= 0 or off <= 0:
        yield start, end
        return
    ux = (x1 - x0) / length
    uy = (y1 - y0) / length
    pos = 0.0
    while pos < length:
        seg_end = min(pos + on, length)
        yield (
            (x0 + ux * pos, y0 + uy * pos),
            (x0 + ux * seg_end, y0 + uy * seg_end),
        )
        pos = seg_end + off


class Surface:
    """RGB raster with the handful of 2D primitives the sheet needs.

    Translucent text is drawn on a transparent layer whose alpha is scaled
    before it is pasted onto the opaque page.
    """

    def __init__(self, width: int, height: int, *, background: Color = "#ffffff") -> None:
        if width <= 0 or height <= 0:
            raise ValueError("surface dimensions must be positive")
        self.image = Image.new("RGB", (width, height), to_rgb(background))
        self._draw = ImageDraw.Draw(self.image, "RGBA")

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    def stroke_rect(self, x: int, y: int, size: int, *, color: Color, width: int) -> None:
        self._draw.rectangle((x, y, x + size, y + size), outline=to_rgb(color), width=width)

    def line(
        self,
        start: tuple[float, float],
        end: tuple[float, float],
        *,
        color: Color,
        width: int,
        dash: tuple[int, int] | None = None,
    ) -> None:
        rgb = to_rgb(color)
        if dash is None:
            self._draw.line((start, end), fill=rgb, width=width)
            return
        for seg_start, seg_end in dash_segments(start, end, dash):
            self._draw.line((seg_start, seg_end), fill=rgb, width=width)

    def fill_text(
        self,
        text: str,
        center: tuple[float, float],
        *,
        font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
        color: Color,
        opacity: float = 1.0,
    ) -> None:
        rgb = to_rgb(color)
        opacity = max(0.0, min(1.0, opacity))
        if opacity >= 1.0:
            self._draw.text(center, text, font=font, fill=rgb, anchor="mm")
            return
        left, top, right, bottom = self._draw.textbbox(center, text, font=font, anchor="mm")
        left, top = math.floor(left), math.floor(top)
        right, bottom = math.ceil(right), math.ceil(bottom)
        if right <= left or bottom <= top:
            return

        # glyph layer: opaque ink, alpha scaled by opacity
        layer = Image.new("RGBA", (right - left, bottom - top), (0, 0, 0, 0))
        ImageDraw.Draw(layer).text(
            (center[0] - left, center[1] - top), text, font=font, fill=(*rgb, 255), anchor="mm"
        )
        alpha = layer.getchannel("A").point(lambda value: round(value * opacity))
        layer.putalpha(alpha)
        self.image.paste(layer, (left, top), mask=layer)

    def finalize(self) -> Image.Image:
        """Hand the raster off; the surface must not be drawn on afterwards."""
        image = self.image
        del self._draw
        return image
