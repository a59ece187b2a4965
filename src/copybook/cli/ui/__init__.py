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

from collections.abc import Iterable, Mapping

from rich.table import Table

from .state import UIContext, get_context, isatty

DEFAULT_CONTEXT = get_context()
THEME = DEFAULT_CONTEXT.theme
console = DEFAULT_CONTEXT.console
console_err = DEFAULT_CONTEXT.console_err


def _resolve_context(context: UIContext | None) -> UIContext:
    return context or DEFAULT_CONTEXT


def configure_ui(*, no_color: bool, context: UIContext | None = None) -> None:
    context = _resolve_context(context)
    context.console.no_color = no_color
    context.console_err.no_color = no_color


def build_kv_table(rows: Mapping[str, object], *, title: str | None = None) -> Table:
    table = Table(title=title, show_header=False, box=None, pad_edge=False)
    table.add_column(style="accent", no_wrap=True)
    table.add_column()
    for key, value in rows.items():
        table.add_row(key, _format_value(value))
    return table


def build_table(
    columns: Iterable[str], rows: Iterable[Iterable[object]], *, title: str | None = None
) -> Table:
    table = Table(title=title, header_style="title")
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*(_format_value(value) for value in row))
    return table


def _format_value(value: object) -> str:
    if value is None:
        return "[muted]-[/muted]"
    if isinstance(value, bool):
        return "[success]yes[/success]" if value else "[warning]no[/warning]"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


__all__ = [
    "THEME",
    "UIContext",
    "build_kv_table",
    "build_table",
    "configure_ui",
    "console",
    "console_err",
    "isatty",
]
