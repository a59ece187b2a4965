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

from .commands import (
    fonts as fonts_command,
    info as info_command,
    pdf as pdf_command,
    practice as practice_command,
    sheet as sheet_command,
)


def register(app: typer.Typer) -> None:
    sheet_command.register(app)
    pdf_command.register(app)
    practice_command.register(app)
    fonts_command.register(app)
    info_command.register(app)
