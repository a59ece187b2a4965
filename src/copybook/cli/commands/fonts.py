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

import typer

from ...render.fonts import FONT_FACES
from ..core.common import _build_service, _ctx_value, _run_cli
from ..ui import build_table, console

_FONTS_HELP = (
    "List font types and the font files they resolved to.\n\n"
    "Font files are searched in [fonts].dir, the user fonts folder, then system fonts.\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_FONTS_HELP)(fonts)


def fonts(ctx: typer.Context) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        service = _build_service(ctx)
        rows = []
        for key, info in service.font_info().items():
            face = FONT_FACES[key]
            source = info["path"] or face.description
            rows.append((key, info["display_name"], info["family"], info["loaded"], source))
        console.print(
            build_table(("Type", "Name", "Family", "Loaded", "Source"), rows, title="Fonts")
        )

    _run_cli(_run, debug=debug_value)
