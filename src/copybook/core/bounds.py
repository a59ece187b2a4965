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

# Maximum characters per request (whitespace-stripped).
MAX_TEXT_CHARS = 2_000

# Grid shape bounds.
MIN_CHARS_PER_ROW = 1
MAX_CHARS_PER_ROW = 20
MIN_ROW_COUNT = 1
MAX_ROW_COUNT = 30

# Guide opacity bounds for practice mode.
MIN_GUIDE_OPACITY = 0.1
MAX_GUIDE_OPACITY = 1.0

# Pagination chunk size bounds.
MIN_CHARS_PER_PAGE = 50
MAX_CHARS_PER_PAGE = 500

# Image export quality bounds.
MIN_EXPORT_QUALITY = 0.1
MAX_EXPORT_QUALITY = 1.0

# Practice sheet copies per request.
MAX_PRACTICE_COPIES = 20


__all__ = [
    "MAX_CHARS_PER_PAGE",
    "MAX_CHARS_PER_ROW",
    "MAX_EXPORT_QUALITY",
    "MAX_GUIDE_OPACITY",
    "MAX_PRACTICE_COPIES",
    "MAX_ROW_COUNT",
    "MAX_TEXT_CHARS",
    "MIN_CHARS_PER_PAGE",
    "MIN_CHARS_PER_ROW",
    "MIN_EXPORT_QUALITY",
    "MIN_GUIDE_OPACITY",
    "MIN_ROW_COUNT",
]
