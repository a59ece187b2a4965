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

_PDF_HELP = (
    "Render a copybook PDF.\n\n"
    "Examples:\n"
    "  copybook pdf 你好世界 -o hello.pdf\n"
    "  copybook pdf --input lesson.txt --multi-page --chars-per-page 100\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_PDF_HELP)(pdf)


def pdf(
    ctx: typer.Context,
    text: str | None = typer.Argument(None, help="Characters to place in the document."),
    input_path: Path | None = typer.Option(
        None,
        "--input",
        "-i",
        help="Read text from a UTF-8 file ('-' for stdin).",
        rich_help_panel="Inputs",
    ),
    title: str | None = typer.Option(
        None, "--title", help="Document title (PDF metadata).", rich_help_panel="Document"
    ),
    multi_page: bool = typer.Option(
        False,
        "--multi-page",
        help="Split text across pages with a page-number footer.",
        rich_help_panel="Document",
    ),
    chars_per_page: int | None = typer.Option(
        None,
        "--chars-per-page",
        help="Characters per page with --multi-page (50-500).",
        rich_help_panel="Document",
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
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (defaults to copybook.pdf).",
        rich_help_panel="Outputs",
    ),
) -> None:
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        source = _read_text(text, input_path)
        service = _build_service(ctx)
        _check_font(service, font, quiet=quiet_value)
        result = service.generate_pdf(
            source,
            title=title,
            multi_page=multi_page,
            chars_per_page=chars_per_page,
            font_type=font,
            chars_per_row=chars_per_row,
            row_count=rows,
            practice_mode=practice,
            guide_opacity=opacity,
        )
        output_path = output or Path.cwd() / "copybook.pdf"
        _write_output(result.data, output_path, service=service, quiet=quiet_value)
        if not quiet_value:
            console.print(build_kv_table(result.document.metadata()))

    _run_cli(_run, debug=debug_value)
