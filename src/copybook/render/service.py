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

from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from ..config import AppConfig
from ..core.bounds import MAX_TEXT_CHARS
from ..core.errors import RenderError
from .characters import render_sheet, validated_stream
from .export import MIME_TYPES, encode_image, save_to_file
from .fonts import FontRegistry, available_font_types
from .options import (
    GridDefaults,
    normalize_pdf_options,
    normalize_practice_options,
    normalize_sheet_options,
)
from .pages import paginate, practice_pages, single_page
from .pdf_render import pdf_bytes
from .spec import DocumentSpec
from .types import Document, ImageExport, PdfResult, SheetResult

GENERATOR_VERSION = "1.0.0"
FEATURES = (
    "米字格 rice-grid cells",
    "Four font types",
    "Adjustable grid size",
    "Practice mode (faint tracing characters)",
    "PNG/JPEG image export",
    "Single and multi-page PDF",
    "Practice sheet booklets with answer page",
)


@dataclass(frozen=True)
class CopybookService:
    """Entry point tying options, rendering and export together.

    Options arrive as loose keyword values and are normalized once here; the
    render layer below only ever sees clamped, typed options.
    """

    config: AppConfig
    fonts: FontRegistry = field(default_factory=FontRegistry.fallback_only)

    @classmethod
    def from_config(
        cls, config: AppConfig, *, include_system_fonts: bool = True
    ) -> "CopybookService":
        fonts = FontRegistry.discover(config.font_dirs, include_system=include_system_fonts)
        return cls(config=config, fonts=fonts)

    @property
    def spec(self) -> DocumentSpec:
        return self.config.spec

    def generate_sheet(
        self, text: object, *, preview: bool = False, **options: object
    ) -> SheetResult:
        defaults = self._defaults("preview" if preview else "sheet")
        characters = validated_stream(text)
        sheet_options = normalize_sheet_options(defaults=defaults, **options)
        grid = sheet_options.grid
        try:
            return render_sheet(
                characters,
                chars_per_row=grid.chars_per_row,
                row_count=grid.row_count,
                font_type=grid.font_type,
                spec=self.spec,
                fonts=self.fonts,
                opacity=grid.opacity,
            )
        except (OSError, ValueError, TypeError, MemoryError) as exc:
            raise RenderError(f"failed to render sheet: {exc}") from exc

    def export_image(self, text: object, **options: object) -> ImageExport:
        preview = bool(options.pop("preview", False))
        sheet_options = normalize_sheet_options(
            defaults=self._defaults("preview" if preview else "sheet"), **options
        )
        sheet = self.generate_sheet(text, preview=preview, **options)
        data, mime_type = encode_image(sheet.image, sheet_options.format, sheet_options.quality)
        return ImageExport(data=data, mime_type=mime_type, sheet=sheet)

    def build_document(self, text: object, **options: object) -> Document:
        characters = validated_stream(text)
        if options.get("title") is None:
            options["title"] = self.spec.info.title
        pdf_options = normalize_pdf_options(defaults=self._defaults("pdf"), **options)
        spec = self.spec.with_info(title=pdf_options.title)
        if pdf_options.multi_page:
            return paginate(
                characters,
                pdf_options.grid,
                chars_per_page=pdf_options.chars_per_page,
                spec=spec,
                fonts=self.fonts,
                title=pdf_options.title,
                jobs=self.config.runtime.jobs,
            )
        return single_page(
            characters,
            pdf_options.grid,
            spec=spec,
            fonts=self.fonts,
            title=pdf_options.title,
        )

    def generate_pdf(self, text: object, **options: object) -> PdfResult:
        document = self.build_document(text, **options)
        data = pdf_bytes(document, spec=self.spec, fonts=self.fonts)
        return PdfResult(data=data, document=document)

    def generate_practice_sheets(self, text: object, **options: object) -> PdfResult:
        characters = validated_stream(text)
        practice_options = normalize_practice_options(defaults=self._defaults("pdf"), **options)
        document = practice_pages(
            characters,
            practice_options,
            spec=self.spec,
            fonts=self.fonts,
            jobs=self.config.runtime.jobs,
        )
        data = pdf_bytes(document, spec=self.spec, fonts=self.fonts)
        return PdfResult(data=data, document=document)

    def save(self, data: bytes, path: str | Path) -> Path:
        return save_to_file(data, path)

    def info(self) -> dict[str, object]:
        page = self.spec.page
        return {
            "version": _package_version(),
            "generator_version": GENERATOR_VERSION,
            "supported_formats": sorted(MIME_TYPES),
            "supported_fonts": available_font_types(),
            "max_characters": MAX_TEXT_CHARS,
            "paper_size": page.size,
            "dpi": page.dpi,
            "page_px": (page.width_px, page.height_px),
            "features": list(FEATURES),
        }

    def font_info(self) -> dict[str, dict[str, object]]:
        return self.fonts.font_info()

    def _defaults(self, call_site: str) -> GridDefaults:
        return getattr(self.config.defaults, call_site)


def _package_version() -> str:
    try:
        return version("copybook")
    except PackageNotFoundError:
        return GENERATOR_VERSION
