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

import json

import typer

from ..core.common import _build_service, _ctx_value, _run_cli
from ..ui import build_kv_table, console


def register(app: typer.Typer) -> None:
    app.command(help="Show generator capabilities and page settings.")(info)


def info(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print machine-readable JSON."),
) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        details = _build_service(ctx).info()
        if as_json:
            console.print_json(json.dumps(details, ensure_ascii=False))
            return
        console.print(build_kv_table(details, title="copybook"))

    _run_cli(_run, debug=debug_value)
