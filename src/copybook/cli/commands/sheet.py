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
from typing import Literal

import typer

from ..core.common import (
    _build_service,
    _check_font,
    _ctx_value,
    _read_text,
    _run_cli,
    _write_output,
)
from ..ui import build_kv_table, console

ImageFormatOption = Literal["png", "jpeg", "jpg"]

_SHEET_HELP = (
    "Render a rice-grid practice sheet as an image.\n\n"
    "Examples:\n"
    "  copybook sheet 你好世界 -o hello.png\n"
    "  copybook sheet --input poem.txt --practice --opacity 0.2\n"
    "  copybook sheet 永 --chars-per-row 1 --rows 1 --format jpeg -o yong.jpg\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_SHEET_HELP)(sheet)


def sheet(
    ctx: typer.Context,
    text: str | None = typer.Argument(None, help="Characters to place on the sheet."),
    input_path: Path | None = typer.Option(
        None,
        "--input",
        "-i",
        help="Read text from a UTF-8 file ('-' for stdin).",
        rich_help_panel="Inputs",
    ),
    font: str | None = typer.Option(
        None,
        "--font",
        help="Font type: serif, sans-serif, cursive or fantasy.",
        rich_help_panel="Grid",
    ),
    chars_per_row: int | None = typer.Option(
        None, "--chars-per-row", help="Cells per row (1-20).", rich_help_panel="Grid"
    ),
    rows: int | None = typer.Option(None, "--rows", help="Rows (1-30).", rich_help_panel="Grid"),
    practice: bool = typer.Option(
        False, "--practice", help="Draw characters faintly for tracing.", rich_help_panel="Grid"
    ),
    opacity: float | None = typer.Option(
        None,
        "--opacity",
        help="Character opacity in practice mode (0.1-1.0).",
        rich_help_panel="Grid",
    ),
    preview: bool = typer.Option(
        False, "--preview", help="Use the preview grid defaults (10x10).", rich_help_panel="Grid"
    ),
    format: ImageFormatOption = typer.Option(
        "png", "--format", "-f", help="Image format.", rich_help_panel="Outputs"
    ),
    quality: float | None = typer.Option(
        None, "--quality", help="Encoder quality (0.1-1.0).", rich_help_panel="Outputs"
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (defaults to copybook.<format>).",
        rich_help_panel="Outputs",
    ),
) -> None:
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        source = _read_text(text, input_path)
        service = _build_service(ctx)
        _check_font(service, font, quiet=quiet_value)
        export = service.export_image(
            source,
            preview=preview,
            font_type=font,
            chars_per_row=chars_per_row,
            row_count=rows,
            practice_mode=practice,
            guide_opacity=opacity,
            format=format,
            quality=quality,
        )
        extension = "jpg" if export.mime_type == "image/jpeg" else "png"
        output_path = output or Path.cwd() / f"copybook.{extension}"
        _write_output(export.data, output_path, service=service, quiet=quiet_value)
        if not quiet_value:
            console.print(build_kv_table(export.metadata()))

    _run_cli(_run, debug=debug_value)
