#!/usr/bin/env python3
from __future__ import annotations

import math
from dataclasses import dataclass, replace

MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0

PAPER_SIZES_MM: dict[str, tuple[float, float]] = {
    "A4": (210.0, 297.0),
    "LETTER": (215.9, 279.4),
}
DEFAULT_PAPER_SIZE = "A4"

Color = str | tuple[int, int, int]


def mm_to_px(value_mm: float, dpi: int) -> int:
    return math.floor(value_mm / MM_PER_INCH * dpi)


def mm_to_pt(value_mm: float) -> float:
    return round(value_mm / MM_PER_INCH * POINTS_PER_INCH, 2)


@dataclass(frozen=True)
class PageSpec:
    """Physical page rasterized at ``dpi``; padding is in device pixels."""

    size: str = DEFAULT_PAPER_SIZE
    width_mm: float = 210.0
    height_mm: float = 297.0
    dpi: int = 300
    padding_px: int = 40

    @property
    def width_px(self) -> int:
        return mm_to_px(self.width_mm, self.dpi)

    @property
    def height_px(self) -> int:
        return mm_to_px(self.height_mm, self.dpi)


@dataclass(frozen=True)
class PdfPageSpec:
    width_pt: float = 595.28
    height_pt: float = 841.89
    margin_top_pt: float = 40.0
    margin_bottom_pt: float = 40.0
    margin_left_pt: float = 40.0
    margin_right_pt: float = 40.0
    footer_font_size: float = 10.0
    footer_offset_pt: float = 20.0
    footer_color: Color = "#666666"
    footer_label: str = "第 {page} 页 / 共 {total} 页"
    footer_label_ascii: str = "Page {page} / {total}"
    heading_offset_pt: float = 20.0
    heading_color: Color = "#000000"

    @property
    def content_w(self) -> float:
        return self.width_pt - self.margin_left_pt - self.margin_right_pt

    @property
    def content_h(self) -> float:
        return self.height_pt - self.margin_top_pt - self.margin_bottom_pt


@dataclass(frozen=True)
class GridStyleSpec:
    background: Color = "#ffffff"
    border_color: Color = "#2d7a2d"
    guide_color: Color = "#dceadc"
    border_width: int = 2
    guide_width: int = 1
    dash: tuple[int, int] = (2, 2)
    character_color: Color = "#aaaaaa"
    font_scale: float = 0.9


@dataclass(frozen=True)
class DocumentInfoSpec:
    title: str = "汉字字帖"
    author: str = "汉字字帖生成器"
    subject: str = "中文练字帖"
    keywords: str = "汉字,练字,字帖,米字格"
    creator: str = "汉字字帖生成器"


@dataclass(frozen=True)
class DocumentSpec:
    page: PageSpec
    pdf: PdfPageSpec
    grid: GridStyleSpec
    info: DocumentInfoSpec

    def with_info(self, *, title: str | None = None, subject: str | None = None) -> "DocumentSpec":
        info = self.info
        if title is not None:
            info = replace(info, title=title)
        if subject is not None:
            info = replace(info, subject=subject)
        return replace(self, info=info)


def document_spec(
    paper_size: str = DEFAULT_PAPER_SIZE,
    *,
    dpi: int | None = None,
    padding_px: int | None = None,
    margin_pt: float | None = None,
) -> DocumentSpec:
    normalized = paper_size.strip().upper()
    if normalized not in PAPER_SIZES_MM:
        raise ValueError(f"unsupported paper size: {paper_size}")
    width_mm, height_mm = PAPER_SIZES_MM[normalized]

    page = PageSpec(size=normalized, width_mm=width_mm, height_mm=height_mm)
    if dpi is not None:
        page = replace(page, dpi=dpi)
    if padding_px is not None:
        page = replace(page, padding_px=padding_px)

    pdf = PdfPageSpec(width_pt=mm_to_pt(width_mm), height_pt=mm_to_pt(height_mm))
    if margin_pt is not None:
        pdf = replace(
            pdf,
            margin_top_pt=margin_pt,
            margin_bottom_pt=margin_pt,
            margin_left_pt=margin_pt,
            margin_right_pt=margin_pt,
        )

    return DocumentSpec(page=page, pdf=pdf, grid=GridStyleSpec(), info=DocumentInfoSpec())
