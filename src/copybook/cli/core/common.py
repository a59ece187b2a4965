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

import importlib.metadata
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import typer
from rich.traceback import install as install_rich_traceback

from ...config import load_app_config
from ...render.fonts import DEFAULT_FONT_TYPE, is_valid_font_type
from ...render.service import CopybookService
from ...render.spec import PAPER_SIZES_MM
from ..ui import console, console_err
from .log import _warn


def _run_cli(func: Callable[[], Any], *, debug: bool) -> None:
    if debug:
        install_rich_traceback(show_locals=True)
    try:
        result = func()
    except (OSError, RuntimeError, ValueError, TypeError, LookupError) as exc:
        if debug:
            raise
        console_err.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=2)
    if isinstance(result, int) and result != 0:
        raise typer.Exit(code=result)


def _ctx_value(ctx: typer.Context, key: str) -> Any:
    if ctx.obj is None:
        return None
    return ctx.obj.get(key)


def _paper_callback(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip().upper()
    if normalized not in PAPER_SIZES_MM:
        raise typer.BadParameter("paper must be A4 or LETTER")
    return normalized


def _get_version() -> str:
    try:
        return importlib.metadata.version("copybook")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0"


def _read_text(text: str | None, input_path: Path | None) -> str:
    if text is not None and input_path is not None:
        raise typer.BadParameter("use either TEXT or --input, not both")
    if input_path is None:
        if text is None:
            raise typer.BadParameter("provide TEXT or --input")
        return text
    if str(input_path) == "-":
        return sys.stdin.read()
    return input_path.expanduser().read_text(encoding="utf-8")


def _build_service(ctx: typer.Context) -> CopybookService:
    config = load_app_config(_ctx_value(ctx, "config"), paper_size=_ctx_value(ctx, "paper"))
    return CopybookService.from_config(config)


def _check_font(service: CopybookService, font_type: str | None, *, quiet: bool) -> None:
    key = font_type if is_valid_font_type(font_type) else DEFAULT_FONT_TYPE
    if font_type is not None and not is_valid_font_type(font_type):
        _warn(f"unknown font type {font_type!r}; using {DEFAULT_FONT_TYPE}", quiet=quiet)
    if not service.fonts.resolve(key).loaded:
        _warn(
            f"no font file found for {key!r}; glyphs use Pillow's built-in font",
            quiet=quiet,
        )


def _write_output(data: bytes, output: Path, *, service: CopybookService, quiet: bool) -> Path:
    path = service.save(data, output)
    if not quiet:
        console.print(f"[success]Wrote[/success] {path}")
    return path
