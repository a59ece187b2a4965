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

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PIL import Image


@dataclass(frozen=True)
class Layout:
    cell_size: int
    total_width: int
    total_height: int
    padding: int
    chars_per_row: int
    row_count: int

    @property
    def capacity(self) -> int:
        return self.chars_per_row * self.row_count

    def cell_origin(self, index: int) -> tuple[int, int]:
        """Top-left corner of the cell at row-major ``index``."""
        row, col = divmod(index, self.chars_per_row)
        return (self.padding + col * self.cell_size, self.padding + row * self.cell_size)

    def metadata(self) -> dict[str, int]:
        return {
            "cell_size": self.cell_size,
            "total_width": self.total_width,
            "total_height": self.total_height,
            "chars_per_row": self.chars_per_row,
            "row_count": self.row_count,
        }


@dataclass(frozen=True)
class Placement:
    """Scaled raster rectangle on a physical page, in points."""

    x: float
    y: float
    width: float
    height: float
    scale: float


@dataclass(frozen=True)
class SheetResult:
    image: "Image.Image"
    layout: Layout
    characters_drawn: int
    total_characters: int
    font_family: str

    def metadata(self) -> dict[str, object]:
        return {
            "cell_size": self.layout.cell_size,
            "total_width": self.layout.total_width,
            "total_height": self.layout.total_height,
            "characters_drawn": self.characters_drawn,
            "total_characters": self.total_characters,
            "font_family": self.font_family,
        }


@dataclass(frozen=True)
class Page:
    index: int
    characters: tuple[str, ...]
    layout: Layout
    image: "Image.Image"
    placement: Placement
    characters_drawn: int
    footer_label: str | None = None
    heading: str | None = None
    heading_ascii: str | None = None
    heading_size: float = 14.0


@dataclass(frozen=True)
class Document:
    pages: tuple[Page, ...]
    title: str
    subject: str
    total_characters: int
    characters_drawn: int
    font_family: str

    @property
    def total_pages(self) -> int:
        return len(self.pages)

    def metadata(self) -> dict[str, object]:
        return {
            "total_pages": self.total_pages,
            "characters_drawn": self.characters_drawn,
            "total_characters": self.total_characters,
            "font_family": self.font_family,
        }


@dataclass(frozen=True)
class ImageExport:
    data: bytes
    mime_type: str
    sheet: SheetResult

    def metadata(self) -> dict[str, object]:
        return {"mime_type": self.mime_type, **self.sheet.metadata()}


@dataclass(frozen=True)
class PdfResult:
    data: bytes
    document: Document
