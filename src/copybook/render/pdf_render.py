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

from pathlib import Path

from fpdf import FPDF
from fpdf.errors import FPDFException

from ..core.errors import RenderError
from .export import save_to_file
from .fonts import FontRegistry
from .spec import DocumentSpec
from .surface import to_rgb
from .types import Document, Page

_LABEL_FONT = "copybook-label"
_ASCII_FONT = "helvetica"


def pdf_bytes(document: Document, *, spec: DocumentSpec, fonts: FontRegistry) -> bytes:
    """Stream a finished document into a single PDF in one pass."""
    if not document.pages:
        raise ValueError("document has no pages")
    try:
        pdf = _new_pdf(document, spec)
        label_font, unicode_labels = _register_label_font(pdf, fonts)
        for page in document.pages:
            _add_page(
                pdf,
                page,
                spec=spec,
                label_font=label_font,
                unicode_labels=unicode_labels,
                total_pages=document.total_pages,
            )
        return bytes(pdf.output())
    except (FPDFException, OSError, ValueError, TypeError) as exc:
        raise RenderError(f"failed to assemble PDF: {exc}") from exc


def write_pdf(
    document: Document,
    path: str | Path,
    *,
    spec: DocumentSpec,
    fonts: FontRegistry,
) -> Path:
    return save_to_file(pdf_bytes(document, spec=spec, fonts=fonts), path)


def _new_pdf(document: Document, spec: DocumentSpec) -> FPDF:
    pdf = FPDF(unit="pt", format=(spec.pdf.width_pt, spec.pdf.height_pt))
    pdf.set_auto_page_break(False)
    pdf.set_margin(0)
    info = spec.info
    pdf.set_title(document.title)
    pdf.set_author(info.author)
    pdf.set_subject(document.subject)
    pdf.set_keywords(info.keywords)
    pdf.set_creator(info.creator)
    return pdf


def _register_label_font(pdf: FPDF, fonts: FontRegistry) -> tuple[str, bool]:
    path = fonts.unicode_font_path()
    if path is None:
        return _ASCII_FONT, False
    pdf.add_font(_LABEL_FONT, fname=str(path))
    return _LABEL_FONT, True


def _add_page(
    pdf: FPDF,
    page: Page,
    *,
    spec: DocumentSpec,
    label_font: str,
    unicode_labels: bool,
    total_pages: int,
) -> None:
    layout = spec.pdf
    pdf.add_page()
    placement = page.placement
    pdf.image(
        page.image,
        x=placement.x,
        y=placement.y,
        w=placement.width,
        h=placement.height,
    )

    heading = page.heading if unicode_labels else page.heading_ascii
    if heading:
        _centered_label(
            pdf,
            heading,
            font=label_font,
            size=page.heading_size,
            color=layout.heading_color,
            x=layout.margin_left_pt,
            y=layout.margin_top_pt - layout.heading_offset_pt,
            width=layout.content_w,
        )

    if page.footer_label:
        label = page.footer_label
        if not unicode_labels:
            label = layout.footer_label_ascii.format(page=page.index + 1, total=total_pages)
        _centered_label(
            pdf,
            label,
            font=label_font,
            size=layout.footer_font_size,
            color=layout.footer_color,
            x=layout.margin_left_pt,
            y=layout.height_pt - layout.margin_bottom_pt + layout.footer_offset_pt,
            width=layout.content_w,
        )


def _centered_label(
    pdf: FPDF,
    text: str,
    *,
    font: str,
    size: float,
    color,
    x: float,
    y: float,
    width: float,
) -> None:
    pdf.set_font(font, size=size)
    pdf.set_text_color(*to_rgb(color))
    pdf.set_xy(x, y)
    pdf.cell(w=width, h=size, text=text, align="C")
