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
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Literal

from ..render.options import PDF_DEFAULTS, PREVIEW_DEFAULTS, SHEET_DEFAULTS, GridDefaults
from ..render.spec import DEFAULT_PAPER_SIZE, Color, DocumentSpec, document_spec
from .installer import resolve_config_path, user_fonts_dir

PAPER_SIZE_ENV = "COPYBOOK_PAPER_SIZE"


@dataclass(frozen=True)
class RuntimeDefaults:
    render_jobs: int | Literal["auto"] | None = None

    @property
    def jobs(self) -> int | None:
        """Explicit worker count, or None to defer to the environment."""
        if isinstance(self.render_jobs, int):
            return self.render_jobs
        return None


@dataclass(frozen=True)
class CallDefaults:
    sheet: GridDefaults = SHEET_DEFAULTS
    pdf: GridDefaults = PDF_DEFAULTS
    preview: GridDefaults = PREVIEW_DEFAULTS


@dataclass(frozen=True)
class AppConfig:
    config_path: Path
    paper_size: str
    spec: DocumentSpec
    font_dirs: tuple[Path, ...] = ()
    defaults: CallDefaults = field(default_factory=CallDefaults)
    runtime: RuntimeDefaults = field(default_factory=RuntimeDefaults)


def load_app_config(path: str | Path | None = None, *, paper_size: str | None = None) -> AppConfig:
    config_path = resolve_config_path(path)
    data = _load_toml(config_path)

    page_cfg = _get_dict(data, "page")
    resolved_paper_size = (
        paper_size
        or os.environ.get(PAPER_SIZE_ENV)
        or _parse_optional_str(page_cfg.get("size"), field="page.size")
        or DEFAULT_PAPER_SIZE
    )
    spec = document_spec(
        resolved_paper_size,
        dpi=_parse_optional_positive_int(page_cfg.get("dpi"), field="page.dpi"),
        padding_px=_parse_optional_non_negative_int(
            page_cfg.get("padding_px"), field="page.padding_px"
        ),
        margin_pt=_parse_optional_non_negative_number(
            _get_dict(data, "pdf").get("margin_pt"), field="pdf.margin_pt"
        ),
    )
    spec = _apply_pdf_section(spec, _get_dict(data, "pdf"))
    spec = _apply_grid_section(spec, _get_dict(data, "grid"))

    return AppConfig(
        config_path=config_path,
        paper_size=spec.page.size,
        spec=spec,
        font_dirs=_parse_font_dirs(_get_dict(data, "fonts")),
        defaults=CallDefaults(
            sheet=_parse_grid_defaults(
                _get_nested_dict(data, "defaults", "sheet"),
                section="defaults.sheet",
                base=SHEET_DEFAULTS,
            ),
            pdf=_parse_grid_defaults(
                _get_nested_dict(data, "defaults", "pdf"),
                section="defaults.pdf",
                base=PDF_DEFAULTS,
            ),
            preview=_parse_grid_defaults(
                _get_nested_dict(data, "defaults", "preview"),
                section="defaults.preview",
                base=PREVIEW_DEFAULTS,
            ),
        ),
        runtime=RuntimeDefaults(
            render_jobs=_parse_optional_render_jobs(
                _get_dict(data, "runtime").get("render_jobs"),
                field="runtime.render_jobs",
            ),
        ),
    )


def _apply_pdf_section(spec: DocumentSpec, cfg: dict[str, object]) -> DocumentSpec:
    pdf = spec.pdf
    footer_font_size = _parse_optional_positive_number(
        cfg.get("footer_font_size"), field="pdf.footer_font_size"
    )
    if footer_font_size is not None:
        pdf = replace(pdf, footer_font_size=footer_font_size)
    footer_offset = _parse_optional_non_negative_number(
        cfg.get("footer_offset_pt"), field="pdf.footer_offset_pt"
    )
    if footer_offset is not None:
        pdf = replace(pdf, footer_offset_pt=footer_offset)

    info = spec.info
    for key in ("title", "author", "subject", "keywords"):
        value = _parse_optional_str(cfg.get(key), field=f"pdf.{key}")
        if value:
            info = replace(info, **{key: value})
    if info.author != spec.info.author:
        info = replace(info, creator=info.author)
    return replace(spec, pdf=pdf, info=info)


def _apply_grid_section(spec: DocumentSpec, cfg: dict[str, object]) -> DocumentSpec:
    grid = spec.grid
    for key in ("background", "border_color", "guide_color", "character_color"):
        color = _parse_color(cfg.get(key), field=f"grid.{key}")
        if color is not None:
            grid = replace(grid, **{key: color})
    for key in ("border_width", "guide_width"):
        width = _parse_optional_positive_int(cfg.get(key), field=f"grid.{key}")
        if width is not None:
            grid = replace(grid, **{key: width})
    dash = _parse_dash(cfg.get("dash"), field="grid.dash")
    if dash is not None:
        grid = replace(grid, dash=dash)
    font_scale = _parse_optional_positive_number(cfg.get("font_scale"), field="grid.font_scale")
    if font_scale is not None:
        if font_scale > 1:
            raise ValueError("grid.font_scale must be in (0, 1]")
        grid = replace(grid, font_scale=font_scale)
    return replace(spec, grid=grid)


def _parse_grid_defaults(
    cfg: dict[str, object], *, section: str, base: GridDefaults
) -> GridDefaults:
    chars_per_row = _parse_optional_positive_int(
        cfg.get("chars_per_row"), field=f"{section}.chars_per_row"
    )
    row_count = _parse_optional_positive_int(cfg.get("row_count"), field=f"{section}.row_count")
    guide_opacity = _parse_optional_positive_number(
        cfg.get("guide_opacity"), field=f"{section}.guide_opacity"
    )
    chars_per_page = _parse_optional_positive_int(
        cfg.get("chars_per_page"), field=f"{section}.chars_per_page"
    )
    return GridDefaults(
        chars_per_row=base.chars_per_row if chars_per_row is None else chars_per_row,
        row_count=base.row_count if row_count is None else row_count,
        guide_opacity=base.guide_opacity if guide_opacity is None else guide_opacity,
        chars_per_page=base.chars_per_page if chars_per_page is None else chars_per_page,
    )


def _parse_font_dirs(cfg: dict[str, object]) -> tuple[Path, ...]:
    dirs: list[Path] = []
    configured = _parse_optional_str(cfg.get("dir"), field="fonts.dir")
    if configured:
        dirs.append(Path(configured).expanduser())
    dirs.append(user_fonts_dir())
    return tuple(dirs)


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _get_nested_dict(data: dict[str, object], *keys: str) -> dict[str, object]:
    current: dict[str, object] = data
    for key in keys:
        value = current.get(key)
        if not isinstance(value, dict):
            return {}
        current = value
    return current


def _parse_optional_str(value: object, *, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    normalized = value.strip()
    return normalized or None


def _parse_color(value: object, *, field: str) -> Color | None:
    if value is None:
        return None
    if isinstance(value, str):
        normalized = value.strip()
        return normalized or None
    if isinstance(value, (list, tuple)) and len(value) == 3:
        channels = tuple(_parse_int_strict(item, field=field) for item in value)
        if any(channel < 0 or channel > 255 for channel in channels):
            raise ValueError(f"{field} channels must be in 0-255")
        return (channels[0], channels[1], channels[2])
    raise ValueError(f"{field} must be a color string or [r, g, b]")


def _parse_dash(value: object, *, field: str) -> tuple[int, int] | None:
    if value is None:
        return None
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"{field} must be a pair of [on, off] lengths")
    on = _parse_int_strict(value[0], field=field)
    off = _parse_int_strict(value[1], field=field)
    if on < 0 or off < 0:
        raise ValueError(f"{field} lengths must be non-negative")
    return (on, off)


def _parse_optional_render_jobs(
    value: object,
    *,
    field: str,
) -> int | Literal["auto"] | None:
    if value is None:
        return None
    if isinstance(value, str):
        normalized = value.strip().lower()
        if not normalized:
            return None
        if normalized == "auto":
            return "auto"
        parsed = _parse_int_strict(normalized, field=field)
        if parsed <= 0:
            raise ValueError(f"{field} must be 'auto' or a positive integer")
        return parsed
    parsed = _parse_int_strict(value, field=field)
    if parsed <= 0:
        raise ValueError(f"{field} must be 'auto' or a positive integer")
    return parsed


def _parse_optional_positive_int(value: object, *, field: str) -> int | None:
    if value is None:
        return None
    parsed = _parse_int_strict(value, field=field)
    if parsed <= 0:
        raise ValueError(f"{field} must be a positive integer")
    return parsed


def _parse_optional_non_negative_int(value: object, *, field: str) -> int | None:
    if value is None:
        return None
    parsed = _parse_int_strict(value, field=field)
    if parsed < 0:
        raise ValueError(f"{field} must be a non-negative integer")
    return parsed


def _parse_optional_positive_number(value: object, *, field: str) -> float | None:
    if value is None:
        return None
    parsed = _parse_number_strict(value, field=field)
    if parsed <= 0:
        raise ValueError(f"{field} must be a positive number")
    return parsed


def _parse_optional_non_negative_number(value: object, *, field: str) -> float | None:
    if value is None:
        return None
    parsed = _parse_number_strict(value, field=field)
    if parsed < 0:
        raise ValueError(f"{field} must be a non-negative number")
    return parsed


def _parse_int_strict(value: object, *, field: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{field} must be an integer")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError(f"{field} must be an integer")
        try:
            return int(text)
        except ValueError as exc:
            raise ValueError(f"{field} must be an integer") from exc
    raise ValueError(f"{field} must be an integer")


def _parse_number_strict(value: object, *, field: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as exc:
            raise ValueError(f"{field} must be a number") from exc
    raise ValueError(f"{field} must be a number")
